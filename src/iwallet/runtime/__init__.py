"""Runtime helpers for iwallet"""

from .errors import WalletError, ErrorCode
from .codec import b58encode, b58decode, b64encode, b64decode, hash_sha3

__all__ = [
    "WalletError",
    "ErrorCode",
    "b58encode",
    "b58decode",
    "b64encode",
    "b64decode",
    "hash_sha3",
]
