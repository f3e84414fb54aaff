"""Signing and verifying a transaction's signing hash."""

from __future__ import annotations
from typing import Optional

from ..crypto import verify
from ..keys.keypair import KeyPair
from ..tx.transaction import Signature, TransactionRequest


def sign_transaction(tx: TransactionRequest, key_pair: KeyPair, signer: Optional[str] = None) -> Signature:
    """Sign the transaction's signing hash with a key pair."""
    return Signature(
        algorithm=key_pair.algorithm,
        public_key=key_pair.public_key,
        signature=key_pair.sign(tx.signing_hash()),
        signer=signer,
    )


def verify_signature(tx: TransactionRequest, signature: Signature) -> bool:
    """Check a signature against the transaction using its embedded public key."""
    return verify(tx.signing_hash(), signature.signature, signature.public_key, signature.algorithm)


__all__ = ["sign_transaction", "verify_signature"]
