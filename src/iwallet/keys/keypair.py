r"""
Key material for iwallet accounts.

A KeyPair is tagged with its algorithm; an Account maps permission names
("owner", "active", ...) to key pairs.
"""

from __future__ import annotations
from typing import Dict, Optional, Union

from ..crypto import Algorithm, get_backend
from ..runtime.codec import b58encode, b58decode
from ..runtime.errors import InvalidPermissionError


class KeyPair:
    """
    Algorithm-tagged key pair.

    The private key is kept in a mutable buffer so that wipe() can overwrite
    it once the key is no longer needed. The public key is trusted as read
    from storage and never re-derived here.
    """

    def __init__(
        self,
        algorithm: Union[Algorithm, str],
        public_key: bytes,
        private_key: Optional[bytes] = None,
        encrypted: bool = False
    ):
        """
        Initialize key pair.

        Args:
            algorithm: Signature algorithm
            public_key: Public key bytes
            private_key: Private key bytes (None for encrypted or wiped pairs)
            encrypted: Whether the private half still needs decrypting
        """
        self.algorithm = Algorithm(algorithm)
        self.public_key = bytes(public_key)
        self._private_key = bytearray(private_key) if private_key is not None else None
        self.encrypted = encrypted

    @classmethod
    def generate(cls, algorithm: Union[Algorithm, str] = Algorithm.ED25519) -> KeyPair:
        """Generate a new random key pair."""
        backend = get_backend(Algorithm(algorithm))
        private_key = backend.generate_private_key()
        return cls(algorithm, backend.public_key(private_key), private_key)

    @classmethod
    def from_private_key(cls, algorithm: Union[Algorithm, str], private_key: bytes) -> KeyPair:
        """
        Build a key pair from private key bytes, deriving the public half.

        Raises:
            ValueError: If the private key is malformed for the algorithm
        """
        return cls(algorithm, get_backend(Algorithm(algorithm)).public_key(private_key), private_key)

    @classmethod
    def from_private_b58(cls, algorithm: Union[Algorithm, str], text: str) -> KeyPair:
        """Build a key pair from a base58 private key."""
        return cls.from_private_key(algorithm, b58decode(text))

    @property
    def private_key(self) -> bytes:
        """
        Private key bytes.

        Raises:
            ValueError: If the key pair is encrypted or has been wiped
        """
        if self._private_key is None:
            raise ValueError("private key is not available")
        return bytes(self._private_key)

    @property
    def has_private_key(self) -> bool:
        return self._private_key is not None

    @property
    def public_key_b58(self) -> str:
        return b58encode(self.public_key)

    @property
    def private_key_b58(self) -> str:
        return b58encode(self.private_key)

    def is_ready(self) -> bool:
        """True when the private key can be used without further prompting."""
        return not self.encrypted and self._private_key is not None

    def sign(self, message: bytes) -> bytes:
        """Sign message bytes with this key pair."""
        return get_backend(self.algorithm).sign(message, self.private_key)

    def verify(self, message: bytes, signature: bytes) -> bool:
        return get_backend(self.algorithm).verify(message, signature, self.public_key)

    def wipe(self) -> None:
        """Overwrite and drop the private key buffer."""
        if self._private_key is not None:
            for i in range(len(self._private_key)):
                self._private_key[i] = 0
            self._private_key = None

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyPair):
            return False
        return (
            self.algorithm == other.algorithm
            and self.public_key == other.public_key
            and self._private_key == other._private_key
            and self.encrypted == other.encrypted
        )

    def __str__(self) -> str:
        return f"KeyPair({self.algorithm.value}, public={self.public_key_b58})"

    def __repr__(self) -> str:
        return f"KeyPair(algorithm='{self.algorithm.value}', public_key='{self.public_key_b58}', encrypted={self.encrypted})"


class Account:
    """
    Account with per-permission key pairs.

    Built on demand by the keystore resolver; never cached between calls.
    """

    def __init__(self, name: str, keypairs: Optional[Dict[str, KeyPair]] = None):
        self.name = name
        self.keypairs: Dict[str, KeyPair] = dict(keypairs or {})

    def keypair_for(self, permission: str) -> KeyPair:
        """
        Get the key pair for a permission.

        Raises:
            InvalidPermissionError: If the account has no such permission
        """
        try:
            return self.keypairs[permission]
        except KeyError:
            raise InvalidPermissionError(permission, self.name)

    def wipe(self) -> None:
        """Wipe every private key held by this account."""
        for kp in self.keypairs.values():
            kp.wipe()

    def __str__(self) -> str:
        return f"Account({self.name}, permissions={sorted(self.keypairs)})"

    def __repr__(self) -> str:
        return f"Account(name='{self.name}', permissions={sorted(self.keypairs)})"


__all__ = ["KeyPair", "Account"]
