"""
Signature record files.

A record is the JSON form of a Signature (algorithm, base64 public key and
signature), written by an offline signer and attached later.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..keys.keypair import KeyPair
from ..runtime.errors import InvalidSignatureRecordError, KeyStorageError
from ..tx.transaction import Signature, TransactionRequest
from .signing import sign_transaction

logger = logging.getLogger(__name__)


def load_signature_record(path: Union[str, Path]) -> Signature:
    """
    Read a signature record.

    Raises:
        InvalidSignatureRecordError: If the file is missing or malformed
    """
    path = Path(path)
    try:
        return Signature.model_validate_json(path.read_bytes())
    except (OSError, PydanticValidationError) as e:
        raise InvalidSignatureRecordError(str(path), e)


def save_signature_record(path: Union[str, Path], signature: Signature) -> Path:
    """
    Write a signature record as indented JSON.

    Raises:
        KeyStorageError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.write_text(json.dumps(signature.model_dump(mode="json", exclude_none=True), indent=2), encoding="utf-8")
    except OSError as e:
        raise KeyStorageError(f"create file {path} err {e}", str(path), e)
    logger.debug(f"Signature record written to {path}")
    return path


def sign_to_file(tx: TransactionRequest, key_pair: KeyPair, path: Union[str, Path],
                 signer: Optional[str] = None) -> Signature:
    """Sign a transaction and save the signature as a record file."""
    sig = sign_transaction(tx, key_pair, signer)
    save_signature_record(path, sig)
    return sig


__all__ = ["load_signature_record", "save_signature_record", "sign_to_file"]
