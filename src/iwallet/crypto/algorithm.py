"""
Signature algorithm identifiers.
"""

from __future__ import annotations
from enum import Enum
from typing import List


class Algorithm(str, Enum):
    """Signature algorithms a key pair may be tagged with."""

    ED25519 = "ed25519"
    SECP256K1 = "secp256k1"

    @property
    def file_suffix(self) -> str:
        """Suffix appended to the account name for plaintext key files."""
        return "_" + self.value

    def __str__(self) -> str:
        return self.value


# Resolution precedence for plaintext key files
VALID_SIGN_ALGOS: List[Algorithm] = [Algorithm.ED25519, Algorithm.SECP256K1]


def algorithm_by_name(name: str) -> Algorithm:
    """
    Look up an algorithm by name.

    Unknown names fall back to ed25519.
    """
    try:
        return Algorithm(name.lower())
    except ValueError:
        return Algorithm.ED25519


__all__ = ["Algorithm", "VALID_SIGN_ALGOS", "algorithm_by_name"]
