"""
Transaction authorization for iwallet.

Provides signer declarations, signature records and the multi-signature
authorizer.
"""

from .signer_spec import SignerSpec, validate_signers
from .signing import sign_transaction, verify_signature
from .records import load_signature_record, save_signature_record, sign_to_file
from .authorizer import (
    SigningRequest,
    SignWith,
    AttachSignatures,
    NoSignatures,
    authorize,
    handle_multi_sig,
)

__all__ = [
    "SignerSpec",
    "validate_signers",
    "sign_transaction",
    "verify_signature",
    "load_signature_record",
    "save_signature_record",
    "sign_to_file",
    "SigningRequest",
    "SignWith",
    "AttachSignatures",
    "NoSignatures",
    "authorize",
    "handle_multi_sig",
]
