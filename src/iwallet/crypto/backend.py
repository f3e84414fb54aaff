r"""
Signature backend interface.

Each algorithm provides key generation, public key derivation, signing and
verification over raw byte strings. Backends are looked up by Algorithm.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict

from .algorithm import Algorithm
from ..runtime.errors import UnsupportedAlgorithmError


class SignatureBackend(ABC):
    """
    Base backend interface.

    Implementations must never raise from verify(); malformed keys or
    signatures simply do not verify.
    """

    algorithm: Algorithm

    @abstractmethod
    def generate_private_key(self) -> bytes:
        """
        Generate a new random private key.

        Returns:
            Private key bytes in this algorithm's storage format
        """
        pass

    @abstractmethod
    def public_key(self, private_key: bytes) -> bytes:
        """
        Derive the public key for a private key.

        Raises:
            ValueError: If the private key is malformed
        """
        pass

    @abstractmethod
    def sign(self, message: bytes, private_key: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Bytes to sign
            private_key: Private key bytes

        Returns:
            Signature bytes
        """
        pass

    @abstractmethod
    def verify(self, message: bytes, signature: bytes, public_key: bytes) -> bool:
        """
        Verify a signature against a message.

        Returns:
            True if signature is valid
        """
        pass


_BACKENDS: Dict[Algorithm, SignatureBackend] = {}


def register_backend(backend: SignatureBackend) -> None:
    """Register the backend for its algorithm, replacing any previous one."""
    _BACKENDS[backend.algorithm] = backend


def get_backend(algorithm: Algorithm) -> SignatureBackend:
    """
    Get the backend for an algorithm.

    Raises:
        UnsupportedAlgorithmError: If no backend is registered
    """
    try:
        return _BACKENDS[Algorithm(algorithm)]
    except (KeyError, ValueError):
        raise UnsupportedAlgorithmError(str(algorithm))


__all__ = ["SignatureBackend", "register_backend", "get_backend"]
