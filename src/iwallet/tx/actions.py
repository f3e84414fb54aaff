"""Building actions from flat argument lists."""

from __future__ import annotations
from typing import List, Sequence

from ..runtime.errors import InvalidActionArgsError
from .transaction import Action


def actions_from_args(args: Sequence[str]) -> List[Action]:
    """
    Group `contract, action_name, data` triples into actions.

    Raises:
        InvalidActionArgsError: If the argument count is not a multiple of 3
    """
    if len(args) % 3 != 0:
        raise InvalidActionArgsError(len(args))
    return [
        Action(contract=args[i], action_name=args[i + 1], data=args[i + 2])
        for i in range(0, len(args), 3)
    ]


__all__ = ["actions_from_args"]
