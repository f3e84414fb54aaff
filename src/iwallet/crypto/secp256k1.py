"""
SECP256K1 ECDSA signatures backed by the ecdsa package.

Signatures are deterministic (RFC 6979) 64-byte r||s over SHA-256 of the
message; public keys are 33-byte compressed points.
"""

from __future__ import annotations
import hashlib
import os

from ecdsa import SECP256k1, SigningKey, VerifyingKey, BadSignatureError, MalformedPointError
from ecdsa.util import sigencode_string, sigdecode_string

from .algorithm import Algorithm
from .backend import SignatureBackend

PRIVATE_KEY_SIZE = 32
SIGNATURE_SIZE = 64


def _load_private(private_key: bytes) -> SigningKey:
    if len(private_key) != PRIVATE_KEY_SIZE:
        raise ValueError(f"Private key must be {PRIVATE_KEY_SIZE} bytes, got {len(private_key)}")
    try:
        return SigningKey.from_string(bytes(private_key), curve=SECP256k1)
    except MalformedPointError as e:
        raise ValueError(f"Invalid secp256k1 private key: {e}") from e


class Secp256k1Backend(SignatureBackend):
    """SECP256K1 key handling and signatures."""

    algorithm = Algorithm.SECP256K1

    def generate_private_key(self) -> bytes:
        while True:
            candidate = os.urandom(PRIVATE_KEY_SIZE)
            if 0 < int.from_bytes(candidate, "big") < SECP256k1.order:
                return candidate

    def public_key(self, private_key: bytes) -> bytes:
        return _load_private(private_key).get_verifying_key().to_string("compressed")

    def sign(self, message: bytes, private_key: bytes) -> bytes:
        return _load_private(private_key).sign_deterministic(
            message, hashfunc=hashlib.sha256, sigencode=sigencode_string
        )

    def verify(self, message: bytes, signature: bytes, public_key: bytes) -> bool:
        if len(signature) != SIGNATURE_SIZE:
            return False
        try:
            vk = VerifyingKey.from_string(bytes(public_key), curve=SECP256k1)
            return vk.verify(bytes(signature), message, hashfunc=hashlib.sha256, sigdecode=sigdecode_string)
        except (BadSignatureError, MalformedPointError, ValueError):
            return False


__all__ = ["Secp256k1Backend", "PRIVATE_KEY_SIZE", "SIGNATURE_SIZE"]
