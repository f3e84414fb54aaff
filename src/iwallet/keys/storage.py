r"""
On-disk key storage for iwallet accounts.

The account directory holds either a consolidated keystore `<name>.json`
or plaintext pairs `<name>_<algorithm>` (private, owner-only) and
`<name>_<algorithm>.pub` (public), both base58 text.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from ..crypto import Algorithm, VALID_SIGN_ALGOS
from ..runtime.codec import b58decode
from ..runtime.errors import InvalidAccountNameError, KeyStorageError
from .keypair import KeyPair, Account

logger = logging.getLogger(__name__)

DIR_MODE = 0o700
PRIVATE_FILE_MODE = 0o600
PUBLIC_FILE_MODE = 0o644
KEYSTORE_SUFFIX = ".json"
PUBLIC_SUFFIX = ".pub"

# (account name, permission, opaque raw key) -> private key bytes
Decryptor = Callable[[str, str, str], bytes]


class KeyPairInfo(BaseModel):
    """One permission's entry in a consolidated keystore."""

    algorithm: Algorithm
    public_key: str
    raw_key: str = ""
    encrypted: bool = False


class KeystoreFile(BaseModel):
    """Consolidated keystore document."""

    name: str
    keypairs: Dict[str, KeyPairInfo] = Field(default_factory=dict)


def check_account_name(name: str) -> str:
    """
    Reject names that are not a single plain file name component.

    Raises:
        InvalidAccountNameError: If the name is empty, `.`, `..` or holds a path separator
    """
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if name in ("", ".", "..") or any(sep in name for sep in separators) or "\0" in name:
        raise InvalidAccountNameError(name)
    return name


def key_file_base(account_dir: Union[str, Path], name: str, algorithm: Algorithm) -> Path:
    """Path of the private key file for an account and algorithm."""
    check_account_name(name)
    return Path(account_dir) / f"{name}{Algorithm(algorithm).file_suffix}"


def keystore_path(account_dir: Union[str, Path], name: str) -> Path:
    check_account_name(name)
    return Path(account_dir) / f"{name}{KEYSTORE_SUFFIX}"


def ensure_account_dir(account_dir: Union[str, Path]) -> Path:
    """
    Create the account directory with owner-only permissions.

    Raises:
        KeyStorageError: If the directory cannot be created
    """
    path = Path(account_dir)
    try:
        path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise KeyStorageError(f"create dir {path} err {e}", str(path), e)
    return path


def _write_new_file(path: Path, text: str, mode: int) -> None:
    # O_EXCL: the mode is applied at creation, never inherited from an old file
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    with os.fdopen(fd, "w", encoding="ascii") as f:
        f.write(text)


def save_key_pair(account_dir: Union[str, Path], name: str, key_pair: KeyPair) -> Path:
    """
    Save a key pair as plaintext base58 files.

    The public key goes to `<base>.pub`, the private key to `<base>` with
    owner-only read/write permissions. If the private write fails after the
    public file was written, the public file is left in place.

    Args:
        account_dir: Account directory
        name: Account name
        key_pair: Key pair to store

    Returns:
        Path of the private key file

    Raises:
        InvalidAccountNameError: If the name is not a plain file name
        KeyStorageError: If either file cannot be created or written
    """
    base = key_file_base(account_dir, name, key_pair.algorithm)
    ensure_account_dir(account_dir)
    pub_path = base.with_name(base.name + PUBLIC_SUFFIX)

    try:
        _write_new_file(pub_path, key_pair.public_key_b58, PUBLIC_FILE_MODE)
    except OSError as e:
        raise KeyStorageError(f"create file {pub_path} err {e}", str(pub_path), e)

    try:
        _write_new_file(base, key_pair.private_key_b58, PRIVATE_FILE_MODE)
    except (OSError, ValueError) as e:
        raise KeyStorageError(f"create file {base} err {e}", str(base), e)

    logger.info(f"Your account private key is saved at: {base}")
    return base


def load_key_pair(path: Union[str, Path], algorithm: Algorithm) -> KeyPair:
    """
    Load a plaintext base58 private key file and derive its public key.

    Raises:
        KeyStorageError: If the file cannot be read or does not hold a valid key
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="ascii")
    except (OSError, UnicodeDecodeError) as e:
        raise KeyStorageError(f"read file {path} err {e}", str(path), e)
    try:
        return KeyPair.from_private_b58(algorithm, text)
    except ValueError as e:
        raise KeyStorageError(f"invalid private key in {path}: {e}", str(path), e)


def read_keystore(path: Union[str, Path]) -> KeystoreFile:
    """
    Parse a consolidated keystore file.

    Raises:
        KeyStorageError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        return KeystoreFile.model_validate_json(path.read_bytes())
    except OSError as e:
        raise KeyStorageError(f"read file {path} err {e}", str(path), e)
    except PydanticValidationError as e:
        raise KeyStorageError(f"invalid keystore file {path}", str(path), e)


def keystore_to_account(keystore: KeystoreFile, path: Union[str, Path],
                        decryptor: Optional[Decryptor] = None) -> Account:
    """
    Convert a parsed keystore into an Account.

    Encrypted entries are handed to the decryptor when one is given.
    Otherwise they come back with encrypted=True and no private key.

    Raises:
        KeyStorageError: If an entry does not hold valid base58 keys
    """
    keypairs: Dict[str, KeyPair] = {}
    for permission, info in keystore.keypairs.items():
        try:
            public_key = b58decode(info.public_key)
            if not info.encrypted:
                kp = KeyPair(info.algorithm, public_key, b58decode(info.raw_key))
            elif decryptor is not None:
                kp = KeyPair(info.algorithm, public_key, decryptor(keystore.name, permission, info.raw_key))
            else:
                kp = KeyPair(info.algorithm, public_key, None, encrypted=True)
        except ValueError as e:
            raise KeyStorageError(f"invalid key {permission} in keystore {path}: {e}", str(path), e)
        keypairs[permission] = kp
    return Account(keystore.name, keypairs)


def save_keystore(account_dir: Union[str, Path], account: Account,
                  encrypted_keys: Optional[Dict[str, str]] = None) -> Path:
    """
    Write an account as a consolidated keystore with owner-only permissions.

    Args:
        account_dir: Account directory
        account: Account to store
        encrypted_keys: Opaque ciphertext per permission for encrypted pairs

    Returns:
        Path of the keystore file

    Raises:
        KeyStorageError: If the file cannot be written
    """
    path = keystore_path(account_dir, account.name)
    ensure_account_dir(account_dir)
    encrypted_keys = encrypted_keys or {}
    doc = KeystoreFile(name=account.name)
    for permission, kp in account.keypairs.items():
        if kp.encrypted:
            raw_key = encrypted_keys.get(permission, "")
        else:
            raw_key = kp.private_key_b58
        doc.keypairs[permission] = KeyPairInfo(
            algorithm=kp.algorithm,
            public_key=kp.public_key_b58,
            raw_key=raw_key,
            encrypted=kp.encrypted,
        )
    try:
        _write_new_file(path, json.dumps(doc.model_dump(mode="json"), indent=2), PRIVATE_FILE_MODE)
    except OSError as e:
        raise KeyStorageError(f"create file {path} err {e}", str(path), e)
    logger.debug(f"Stored keystore for {account.name} at {path}")
    return path


def account_name_from_key_path(path: Union[str, Path], suffix: str) -> str:
    """
    Extract the account name from a key file path.

    `/home/u/.iwallet/alice_ed25519` with suffix `_ed25519` gives `alice`.

    Raises:
        ValueError: If the file name does not contain the suffix
    """
    file_name = Path(path).name
    index = file_name.rfind(suffix)
    if index == -1:
        raise ValueError(f"file name error, no {suffix} in {path}")
    return file_name[:index]


def list_accounts(account_dir: Union[str, Path]) -> List[str]:
    """
    Names of the accounts stored in a directory.

    Returns:
        Sorted account names found as keystores or private key files
    """
    path = Path(account_dir)
    if not path.is_dir():
        return []
    names = set()
    for entry in path.iterdir():
        if not entry.is_file():
            continue
        if entry.name.endswith(KEYSTORE_SUFFIX):
            names.add(entry.name[:-len(KEYSTORE_SUFFIX)])
            continue
        for algo in VALID_SIGN_ALGOS:
            if entry.name.endswith(algo.file_suffix):
                names.add(account_name_from_key_path(entry, algo.file_suffix))
                break
    return sorted(names)


__all__ = [
    "Decryptor",
    "KeyPairInfo",
    "KeystoreFile",
    "check_account_name",
    "key_file_base",
    "keystore_path",
    "ensure_account_dir",
    "save_key_pair",
    "load_key_pair",
    "read_keystore",
    "keystore_to_account",
    "save_keystore",
    "account_name_from_key_path",
    "list_accounts",
]
