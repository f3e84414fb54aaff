"""
Transaction construction for iwallet.

Provides the transaction request model, amount limit parsing and action
building.
"""

from .transaction import Action, AmountLimit, Signature, TransactionRequest
from .amount_limit import UNLIMITED, parse_decimal, check_float, parse_amount_limit
from .actions import actions_from_args

__all__ = [
    "Action",
    "AmountLimit",
    "Signature",
    "TransactionRequest",
    "UNLIMITED",
    "parse_decimal",
    "check_float",
    "parse_amount_limit",
    "actions_from_args",
]
