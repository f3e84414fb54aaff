"""
iwallet Error Model

This module provides the error handling framework for the wallet core.
Every error carries a code, a message and a details dictionary holding the
offending path or literal so callers can print an actionable message.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Wallet error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Account/key storage errors (100-199)
    ACCOUNT_NOT_FOUND = 100
    DECRYPTION_REQUIRED = 101
    STORAGE_ERROR = 102
    INVALID_PERMISSION = 103
    ACCOUNT_NAME_REQUIRED = 104
    UNSUPPORTED_ALGORITHM = 105
    INVALID_ACCOUNT_NAME = 106

    # Signature errors (200-299)
    CONFLICTING_SIGNATURE_MODES = 200
    KEY_LOAD_ERROR = 201
    INVALID_SIGNATURE_RECORD = 202
    SIGNATURE_VERIFICATION_FAILED = 203

    # Argument validation errors (300-399)
    INVALID_LIMIT_SYNTAX = 300
    INVALID_LIMIT_VALUE = 301
    INVALID_SIGNER_FORMAT = 302
    INVALID_ACTION_ARGS = 303
    INVALID_NUMBER = 304


class WalletError(Exception):
    """
    Base class for all wallet errors.

    None of these errors are retried internally; retry policy belongs to
    the caller.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a wallet error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details (paths, offending literals)
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ValidationError(WalletError):
    """User supplied argument validation errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class AccountNotFoundError(WalletError):
    """Neither a keystore file nor a key pair file exists for the account."""

    def __init__(self, name: str, account_dir: str, cause: Optional[Exception] = None):
        super().__init__(
            f"account {name} not exist in {account_dir}",
            ErrorCode.ACCOUNT_NOT_FOUND,
            {"account": name, "path": account_dir},
            cause,
        )
        self.name = name


class DecryptionRequiredError(WalletError):
    """A key pair needs a passphrase before it can be used."""

    def __init__(self, name: str, permission: str, path: str):
        super().__init__(
            f"key pair {permission} of account {name} is encrypted and must be decrypted first",
            ErrorCode.DECRYPTION_REQUIRED,
            {"account": name, "permission": permission, "path": path},
        )


class KeyStorageError(WalletError):
    """Reading or writing key material on disk failed."""

    def __init__(self, message: str, path: str, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.STORAGE_ERROR, {"path": path}, cause)
        self.path = path


class InvalidPermissionError(WalletError):
    """The resolved account has no key pair for the requested permission."""

    def __init__(self, permission: str, name: str = ""):
        super().__init__(
            f"invalid permission {permission}",
            ErrorCode.INVALID_PERMISSION,
            {"permission": permission, "account": name},
        )


class UnsupportedAlgorithmError(WalletError):
    """Unknown signature algorithm."""

    def __init__(self, algorithm: str):
        super().__init__(
            f"unsupported signature algorithm {algorithm}",
            ErrorCode.UNSUPPORTED_ALGORITHM,
            {"algorithm": algorithm},
        )


class AccountNameRequired(ValidationError):
    """No account name was configured."""

    def __init__(self, message: str = "please provide the account name"):
        super().__init__(message, ErrorCode.ACCOUNT_NAME_REQUIRED)


class InvalidAccountNameError(ValidationError):
    """The account name cannot be used as a file name inside the account directory."""

    def __init__(self, name: str):
        super().__init__(
            f"invalid account name {name!r}",
            ErrorCode.INVALID_ACCOUNT_NAME,
            {"account": name},
        )
        self.name = name


class ConflictingSignatureModesError(ValidationError):
    """Both signing keys and pre-made signatures were supplied."""

    def __init__(self, sign_keys, with_signs):
        super().__init__(
            "at least one of sign keys and signature files should be empty",
            ErrorCode.CONFLICTING_SIGNATURE_MODES,
            {"sign_keys": list(sign_keys), "with_signs": list(with_signs)},
        )


class KeyLoadError(WalletError):
    """A signing key source could not be loaded."""

    def __init__(self, source: str, cause: Optional[Exception] = None):
        super().__init__(
            f"sign tx with priv key {source} err {cause}",
            ErrorCode.KEY_LOAD_ERROR,
            {"path": source},
            cause,
        )
        self.source = source


class InvalidSignatureRecordError(WalletError):
    """A signature file is missing or malformed."""

    def __init__(self, source: str, cause: Optional[Exception] = None):
        super().__init__(
            f"invalid signature file {source}",
            ErrorCode.INVALID_SIGNATURE_RECORD,
            {"path": source},
            cause,
        )
        self.source = source


class SignatureVerificationError(WalletError):
    """A pre-made signature does not verify against the transaction."""

    def __init__(self, source: str):
        super().__init__(
            f"sign verify error {source}",
            ErrorCode.SIGNATURE_VERIFICATION_FAILED,
            {"path": source},
        )
        self.source = source


class InvalidLimitSyntaxError(ValidationError):
    """An amount limit group is not of the form token:value."""

    def __init__(self, group: str):
        super().__init__(f"invalid amount limit {group}", ErrorCode.INVALID_LIMIT_SYNTAX, {"group": group})
        self.group = group


class InvalidLimitValueError(ValidationError):
    """An amount limit value is neither a decimal nor 'unlimited'."""

    def __init__(self, group: str, cause: Optional[Exception] = None):
        super().__init__(f"invalid amount limit {group}", ErrorCode.INVALID_LIMIT_VALUE, {"group": group}, cause)
        self.group = group


class InvalidSignerFormatError(ValidationError):
    """A signer is not of the form account@permission."""

    def __init__(self, signer: str):
        super().__init__(f"signer {signer} should contain '@'", ErrorCode.INVALID_SIGNER_FORMAT, {"signer": signer})
        self.signer = signer


class InvalidActionArgsError(ValidationError):
    """Action arguments do not come in contract/action/data triples."""

    def __init__(self, count: int):
        super().__init__(
            "number of args should be a multiplier of 3",
            ErrorCode.INVALID_ACTION_ARGS,
            {"count": count},
        )


class InvalidNumberError(ValidationError):
    """A numeric argument could not be parsed."""

    def __init__(self, value: str, name: str, cause: Optional[Exception] = None):
        super().__init__(
            f'invalid value "{value}" for argument "{name}"',
            ErrorCode.INVALID_NUMBER,
            {"value": value, "argument": name},
            cause,
        )


__all__ = [
    "ErrorCode",
    "WalletError",
    "ValidationError",
    "AccountNotFoundError",
    "DecryptionRequiredError",
    "KeyStorageError",
    "InvalidPermissionError",
    "UnsupportedAlgorithmError",
    "AccountNameRequired",
    "InvalidAccountNameError",
    "ConflictingSignatureModesError",
    "KeyLoadError",
    "InvalidSignatureRecordError",
    "SignatureVerificationError",
    "InvalidLimitSyntaxError",
    "InvalidLimitValueError",
    "InvalidSignerFormatError",
    "InvalidActionArgsError",
    "InvalidNumberError",
]
