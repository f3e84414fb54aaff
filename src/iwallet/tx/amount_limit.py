"""
Amount limit parsing.

Grammar: `token1:value1|token2:value2|...` where each value is a decimal
literal or `unlimited`.
"""

from __future__ import annotations
import math
import re
from typing import List

from ..runtime.errors import InvalidLimitSyntaxError, InvalidLimitValueError, InvalidNumberError
from .transaction import AmountLimit

UNLIMITED = "unlimited"
GROUP_SEPARATOR = "|"
TOKEN_SEPARATOR = ":"

_DECIMAL_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_decimal(text: str) -> float:
    """
    Parse a finite decimal literal.

    Raises:
        ValueError: If text is not a plain decimal or is out of range
    """
    if not _DECIMAL_RE.fullmatch(text):
        raise ValueError(f"invalid decimal literal {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"decimal literal {text!r} out of range")
    return value


def check_float(value: str, name: str) -> None:
    """
    Validate a numeric argument.

    Raises:
        InvalidNumberError: If value is not a finite decimal
    """
    try:
        parse_decimal(value)
    except ValueError as e:
        raise InvalidNumberError(value, name, e)


def parse_amount_limit(limit_str: str) -> List[AmountLimit]:
    """
    Parse an amount limit declaration.

    Values are validated but stored as the original string. Entry order
    follows the input.

    Args:
        limit_str: e.g. "iost:10.5|ram:unlimited"; empty means no limits

    Returns:
        Ordered list of amount limits

    Raises:
        InvalidLimitSyntaxError: If a group is not exactly token:value
        InvalidLimitValueError: If a value is neither decimal nor "unlimited"
    """
    result: List[AmountLimit] = []
    if limit_str == "":
        return result
    for group in limit_str.split(GROUP_SEPARATOR):
        parts = group.split(TOKEN_SEPARATOR)
        if len(parts) != 2:
            raise InvalidLimitSyntaxError(group)
        token, value = parts
        if value != UNLIMITED:
            try:
                parse_decimal(value)
            except ValueError as e:
                raise InvalidLimitValueError(group, e)
        result.append(AmountLimit(token=token, value=value))
    return result


__all__ = ["UNLIMITED", "parse_decimal", "check_float", "parse_amount_limit"]
