"""
Transaction request model.

Mirrors the wire TransactionRequest: header fields, actions, declared
signers, amount limits and the signature set attached before submission.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from ..canonjson import canonical_bytes
from ..crypto import Algorithm
from ..runtime.codec import b64decode, b64encode, hash_sha3

DEFAULT_EXPIRATION_SECONDS = 90
DEFAULT_GAS_RATIO = 1.0
DEFAULT_GAS_LIMIT = 1_000_000
DEFAULT_CHAIN_ID = 1024

# Fields that never enter the signed bytes
UNSIGNED_FIELDS = {"signatures", "publisher", "publisher_sigs"}


class Action(BaseModel):
    """A single contract call."""

    contract: str
    action_name: str
    data: str = "[]"


class AmountLimit(BaseModel):
    """
    Spending cap for one token.

    value is a decimal literal or "unlimited", kept verbatim.
    """

    token: str
    value: str


class Signature(BaseModel):
    """
    Signature over a transaction's signing hash.

    Byte fields travel as base64 in JSON, protobuf style, so records
    written by other signers load unchanged.
    """

    algorithm: Algorithm
    public_key: bytes
    signature: bytes
    signer: Optional[str] = Field(default=None, description="account@permission that produced it")

    @field_validator("algorithm", mode="before")
    @classmethod
    def _algorithm_lower(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("public_key", "signature", mode="before")
    @classmethod
    def _decode_bytes(cls, v: Any) -> Any:
        if isinstance(v, str):
            return b64decode(v)
        return v

    @field_serializer("public_key", "signature", when_used="json")
    def _encode_bytes(self, v: bytes) -> str:
        return b64encode(v)


class TransactionRequest(BaseModel):
    """
    Transaction awaiting authorization.

    Example usage:
        ```python
        tx = TransactionRequest.create(
            actions_from_args(["token.iost", "transfer", '["iost","a","b","1",""]']),
            signers=["bob@active"],
            amount_limit=parse_amount_limit("iost:10"),
        )
        authorize(tx, SigningRequest.from_sources(["bob_ed25519"], []))
        ```
    """

    time: int = Field(default=0, description="Creation time in nanoseconds since Unix epoch")
    expiration: int = Field(default=0, description="Expiration time in nanoseconds since Unix epoch")
    gas_ratio: float = DEFAULT_GAS_RATIO
    gas_limit: float = DEFAULT_GAS_LIMIT
    delay: int = 0
    chain_id: int = DEFAULT_CHAIN_ID
    actions: List[Action] = Field(default_factory=list)
    amount_limit: List[AmountLimit] = Field(default_factory=list)
    signers: List[str] = Field(default_factory=list)
    signatures: List[Signature] = Field(default_factory=list)
    publisher: str = ""
    publisher_sigs: List[Signature] = Field(default_factory=list)

    model_config = {"validate_assignment": True}

    @field_validator("signers")
    @classmethod
    def _check_signers(cls, v: List[str]) -> List[str]:
        from ..signers.signer_spec import validate_signers
        validate_signers(v)
        return v

    @classmethod
    def create(
        cls,
        actions: List[Action],
        expiration_seconds: int = DEFAULT_EXPIRATION_SECONDS,
        **fields
    ) -> TransactionRequest:
        """Build a request stamped with the current time."""
        now = int(datetime.now(timezone.utc).timestamp() * 1_000_000_000)
        return cls(
            time=now,
            expiration=now + expiration_seconds * 1_000_000_000,
            actions=actions,
            **fields
        )

    def canonical_bytes(self) -> bytes:
        """Deterministic encoding of everything except the signature set and publisher."""
        return canonical_bytes(self.model_dump(mode="json", exclude=UNSIGNED_FIELDS))

    def signing_hash(self) -> bytes:
        """SHA3-256 of the canonical bytes; the message every signer signs."""
        return hash_sha3(self.canonical_bytes())


__all__ = [
    "Action",
    "AmountLimit",
    "Signature",
    "TransactionRequest",
    "UNSIGNED_FIELDS",
]
