r"""
Ed25519 signatures backed by the cryptography package.

Private keys are stored in the 64-byte seed||public form; plain 32-byte
seeds are accepted on input.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .algorithm import Algorithm
from .backend import SignatureBackend

SEED_SIZE = 32
PRIVATE_KEY_SIZE = 64
PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64


def _load_private(private_key: bytes) -> Ed25519PrivateKey:
    if len(private_key) not in (SEED_SIZE, PRIVATE_KEY_SIZE):
        raise ValueError(
            f"Ed25519 private key must be {SEED_SIZE} or {PRIVATE_KEY_SIZE} bytes, got {len(private_key)}"
        )
    return Ed25519PrivateKey.from_private_bytes(bytes(private_key[:SEED_SIZE]))


def _raw_public(key: Ed25519PrivateKey) -> bytes:
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw
    )


class Ed25519Backend(SignatureBackend):
    """Ed25519 key handling and signatures."""

    algorithm = Algorithm.ED25519

    def generate_private_key(self) -> bytes:
        key = Ed25519PrivateKey.generate()
        seed = key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption()
        )
        return seed + _raw_public(key)

    def public_key(self, private_key: bytes) -> bytes:
        return _raw_public(_load_private(private_key))

    def sign(self, message: bytes, private_key: bytes) -> bytes:
        return _load_private(private_key).sign(message)

    def verify(self, message: bytes, signature: bytes, public_key: bytes) -> bool:
        if len(signature) != SIGNATURE_SIZE or len(public_key) != PUBLIC_KEY_SIZE:
            return False
        try:
            Ed25519PublicKey.from_public_bytes(bytes(public_key)).verify(bytes(signature), message)
            return True
        except (InvalidSignature, ValueError):
            return False


__all__ = ["Ed25519Backend", "SEED_SIZE", "PRIVATE_KEY_SIZE", "PUBLIC_KEY_SIZE", "SIGNATURE_SIZE"]
