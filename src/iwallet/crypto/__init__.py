"""
Cryptographic capability for iwallet.

Provides sign/verify keyed by Algorithm over Ed25519 and SECP256K1.
"""

from .algorithm import Algorithm, VALID_SIGN_ALGOS, algorithm_by_name
from .backend import SignatureBackend, register_backend, get_backend
from .ed25519 import Ed25519Backend
from .secp256k1 import Secp256k1Backend

register_backend(Ed25519Backend())
register_backend(Secp256k1Backend())


def sign(message: bytes, private_key: bytes, algorithm: Algorithm) -> bytes:
    """Sign message bytes with a private key of the given algorithm."""
    return get_backend(algorithm).sign(message, private_key)


def verify(message: bytes, signature: bytes, public_key: bytes, algorithm: Algorithm) -> bool:
    """Verify a signature; returns False for any malformed input."""
    return get_backend(algorithm).verify(message, signature, public_key)


__all__ = [
    "Algorithm",
    "VALID_SIGN_ALGOS",
    "algorithm_by_name",
    "SignatureBackend",
    "register_backend",
    "get_backend",
    "Ed25519Backend",
    "Secp256k1Backend",
    "sign",
    "verify",
]
