"""
Key management for iwallet.

Provides key material types, account resolution and on-disk persistence.
"""

from .keypair import KeyPair, Account
from .storage import (
    Decryptor,
    check_account_name,
    save_key_pair,
    load_key_pair,
    save_keystore,
    read_keystore,
    list_accounts,
    account_name_from_key_path,
)
from .keystore import (
    ResolutionStrategy,
    ConsolidatedKeystoreStrategy,
    KeyPairFileStrategy,
    KeystoreResolver,
    resolve_account,
    load_key_pair_by_name,
    load_signing_account,
)

__all__ = [
    "KeyPair",
    "Account",
    "Decryptor",
    "check_account_name",
    "save_key_pair",
    "load_key_pair",
    "save_keystore",
    "read_keystore",
    "list_accounts",
    "account_name_from_key_path",
    "ResolutionStrategy",
    "ConsolidatedKeystoreStrategy",
    "KeyPairFileStrategy",
    "KeystoreResolver",
    "resolve_account",
    "load_key_pair_by_name",
    "load_signing_account",
]
