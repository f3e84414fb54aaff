r"""
Multi-signature authorization.

A transaction acquires its signature set in exactly one of two ways:
signed locally with private key files, or from pre-made signature record
files that are verified first. The choice is made once, when building the
SigningRequest, so the two can never be mixed.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union
import logging

from ..crypto import Algorithm
from ..keys.storage import load_key_pair
from ..runtime.errors import (
    ConflictingSignatureModesError,
    KeyLoadError,
    KeyStorageError,
    SignatureVerificationError,
)
from ..tx.transaction import Signature, TransactionRequest
from .records import load_signature_record
from .signing import sign_transaction, verify_signature

logger = logging.getLogger(__name__)

Source = Union[str, Path]


class SigningRequest:
    """How a transaction gets its signatures: SignWith, AttachSignatures or NoSignatures."""

    @staticmethod
    def from_sources(
        sign_keys: Sequence[Source],
        with_signs: Sequence[Source],
        algorithm: Algorithm = Algorithm.ED25519,
        signers: Sequence[Optional[str]] = ()
    ) -> SigningRequest:
        """
        Decide the signing mode from the two source lists.

        Args:
            sign_keys: Private key files to sign with
            with_signs: Signature record files to attach
            algorithm: Algorithm of the private key files
            signers: account@permission recorded on each produced signature,
                one per sign_keys entry (default: none recorded)

        Raises:
            ConflictingSignatureModesError: If both lists are non-empty
            ValueError: If signers is given with a different length than sign_keys
        """
        if sign_keys and with_signs:
            raise ConflictingSignatureModesError(sign_keys, with_signs)
        if sign_keys:
            return SignWith(tuple(sign_keys), Algorithm(algorithm), tuple(signers))
        if with_signs:
            return AttachSignatures(tuple(with_signs))
        return NoSignatures()


@dataclass(frozen=True)
class SignWith(SigningRequest):
    """Sign locally with each private key file."""

    sources: Tuple[Source, ...]
    algorithm: Algorithm = Algorithm.ED25519
    signers: Tuple[Optional[str], ...] = ()

    def __post_init__(self):
        if self.signers and len(self.signers) != len(self.sources):
            raise ValueError(
                f"got {len(self.signers)} signer identities for {len(self.sources)} key files"
            )

    def signer_for(self, index: int) -> Optional[str]:
        return self.signers[index] if self.signers else None


@dataclass(frozen=True)
class AttachSignatures(SigningRequest):
    """Attach pre-made signature records after verifying each one."""

    sources: Tuple[Source, ...]


@dataclass(frozen=True)
class NoSignatures(SigningRequest):
    """Leave the signature set empty, e.g. for later external attachment."""


def _sign_all(tx: TransactionRequest, request: SignWith) -> List[Signature]:
    sigs: List[Signature] = []
    for index, source in enumerate(request.sources):
        try:
            kp = load_key_pair(source, request.algorithm)
        except KeyStorageError as e:
            raise KeyLoadError(str(source), e)
        try:
            sigs.append(sign_transaction(tx, kp, request.signer_for(index)))
        finally:
            kp.wipe()
        logger.debug(f"Signed transaction with key {source}")
    return sigs


def _attach_all(tx: TransactionRequest, request: AttachSignatures) -> List[Signature]:
    sigs: List[Signature] = []
    for source in request.sources:
        sig = load_signature_record(source)
        if not verify_signature(tx, sig):
            logger.warning(f"Signature in {source} does not verify against the transaction")
            raise SignatureVerificationError(str(source))
        sigs.append(sig)
    return sigs


def authorize(tx: TransactionRequest, request: SigningRequest) -> None:
    """
    Produce and attach the transaction's signature set.

    Signatures keep the source order; nothing is deduplicated. The set is
    committed only after every source succeeds, so on failure the
    transaction is left untouched.

    Raises:
        KeyLoadError: If a private key file cannot be loaded
        InvalidSignatureRecordError: If a signature record is malformed
        SignatureVerificationError: If a signature record does not verify
    """
    if isinstance(request, SignWith):
        sigs = _sign_all(tx, request)
    elif isinstance(request, AttachSignatures):
        sigs = _attach_all(tx, request)
    elif isinstance(request, NoSignatures):
        sigs = []
    else:
        raise TypeError(f"unknown signing request {request!r}")
    tx.signatures = sigs


def handle_multi_sig(
    tx: TransactionRequest,
    with_signs: Sequence[Source],
    sign_keys: Sequence[Source],
    algorithm: Algorithm = Algorithm.ED25519,
    signers: Sequence[Optional[str]] = ()
) -> None:
    """Authorize from the two raw source lists; see authorize()."""
    authorize(tx, SigningRequest.from_sources(sign_keys, with_signs, algorithm, signers))


__all__ = [
    "SigningRequest",
    "SignWith",
    "AttachSignatures",
    "NoSignatures",
    "authorize",
    "handle_multi_sig",
]
