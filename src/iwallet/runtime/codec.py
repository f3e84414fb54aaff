"""
Text encodings and hashing used by the wallet.

Key files carry base58 text; signature records carry base64 bytes the way
protobuf JSON does.
"""

from __future__ import annotations
import base64
import binascii
import hashlib
from typing import Union

import base58


def b58encode(data: bytes) -> str:
    """Encode bytes as a base58 string."""
    return base58.b58encode(bytes(data)).decode("ascii")


def b58decode(text: Union[str, bytes]) -> bytes:
    """
    Decode a base58 string.

    Surrounding whitespace (e.g. a trailing newline in a key file) is ignored.

    Raises:
        ValueError: If the text is not valid base58
    """
    if isinstance(text, bytes):
        text = text.decode("ascii")
    text = text.strip()
    if not text:
        raise ValueError("empty base58 string")
    return base58.b58decode(text)


def b64encode(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def b64decode(text: str) -> bytes:
    """
    Decode strict base64.

    Raises:
        ValueError: If the text is not valid base64
    """
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64: {e}") from e


def hash_sha3(data: Union[bytes, str]) -> bytes:
    """SHA3-256 digest."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha3_256(data).digest()


__all__ = ["b58encode", "b58decode", "b64encode", "b64decode", "hash_sha3"]
