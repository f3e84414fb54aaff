r"""
Account resolution for iwallet.

Turns an account name into its per-permission key pairs by walking an
ordered list of resolution strategies: the consolidated keystore first,
then the per-algorithm plaintext key files.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union
import logging

from ..config import WalletConfig, DEFAULT_SIGN_PERMISSION
from ..crypto import VALID_SIGN_ALGOS
from ..runtime.errors import AccountNotFoundError, DecryptionRequiredError, InvalidPermissionError
from .keypair import Account, KeyPair
from .storage import (
    Decryptor,
    key_file_base,
    keystore_path,
    keystore_to_account,
    load_key_pair,
    read_keystore,
)

logger = logging.getLogger(__name__)


class ResolutionStrategy(ABC):
    """
    One way of finding an account on disk.

    resolve() returns None when this strategy does not apply to the account,
    so the next strategy gets a turn.
    """

    @abstractmethod
    def resolve(
        self,
        account_dir: Path,
        name: str,
        permission: str,
        require_decryptable: bool
    ) -> Optional[Account]:
        """
        Resolve an account.

        Args:
            account_dir: Account directory
            name: Account name
            permission: Permission the caller intends to use
            require_decryptable: Fail unless every key pair is usable now

        Returns:
            The account, or None if this strategy does not apply
        """
        pass


class ConsolidatedKeystoreStrategy(ResolutionStrategy):
    """Resolve from `<name>.json`, holding every permission of the account."""

    def __init__(self, decryptor: Optional[Decryptor] = None):
        """
        Args:
            decryptor: Optional callback that decrypts encrypted entries
        """
        self.decryptor = decryptor

    def resolve(self, account_dir, name, permission, require_decryptable):
        path = keystore_path(account_dir, name)
        if not path.is_file():
            return None

        logger.debug(f"Loading account {name} from keystore {path}")
        account = keystore_to_account(read_keystore(path), path, self.decryptor)
        if require_decryptable:
            for perm, kp in account.keypairs.items():
                if not kp.is_ready():
                    account.wipe()
                    raise DecryptionRequiredError(name, perm, str(path))
        return account


class KeyPairFileStrategy(ResolutionStrategy):
    """
    Resolve from plaintext `<name>_<algorithm>` files.

    The first algorithm in precedence order with a key file wins. The result
    holds a single key pair, keyed by the permission the caller asked for.
    """

    def resolve(self, account_dir, name, permission, require_decryptable):
        for algo in VALID_SIGN_ALGOS:
            path = key_file_base(account_dir, name, algo)
            if path.is_file():
                logger.debug(f"Loading account {name} from key file {path}")
                return Account(name, {permission: load_key_pair(path, algo)})
        return None


class KeystoreResolver:
    """
    Resolves account names to accounts.

    Example usage:
        ```python
        resolver = KeystoreResolver(config.account_dir)
        account = resolver.resolve("alice", permission="active")
        ```
    """

    def __init__(
        self,
        account_dir: Union[str, Path],
        strategies: Optional[Sequence[ResolutionStrategy]] = None,
        decryptor: Optional[Decryptor] = None
    ):
        """
        Initialize resolver.

        Args:
            account_dir: Account directory
            strategies: Strategies tried in order (default: keystore, then key files)
            decryptor: Decryptor for the default keystore strategy
        """
        self.account_dir = Path(account_dir)
        if strategies is None:
            strategies = [ConsolidatedKeystoreStrategy(decryptor), KeyPairFileStrategy()]
        self.strategies: List[ResolutionStrategy] = list(strategies)

    def resolve(
        self,
        name: str,
        require_decryptable: bool = False,
        permission: str = DEFAULT_SIGN_PERMISSION
    ) -> Account:
        """
        Resolve an account by name.

        Raises:
            AccountNotFoundError: If no strategy finds the account
            DecryptionRequiredError: If require_decryptable and a key pair is encrypted
            KeyStorageError: If a key file exists but cannot be read
        """
        for strategy in self.strategies:
            account = strategy.resolve(self.account_dir, name, permission, require_decryptable)
            if account is not None:
                return account
        raise AccountNotFoundError(name, str(self.account_dir))

    def __repr__(self) -> str:
        return f"KeystoreResolver(account_dir='{self.account_dir}', strategies={len(self.strategies)})"


def resolve_account(
    config: WalletConfig,
    name: Optional[str] = None,
    require_decryptable: bool = False,
    decryptor: Optional[Decryptor] = None
) -> Account:
    """Resolve an account (default: the configured one) from the configured directory."""
    if name is None:
        name = config.require_account()
    resolver = KeystoreResolver(config.account_dir, decryptor=decryptor)
    return resolver.resolve(name, require_decryptable, config.sign_permission)


def load_key_pair_by_name(config: WalletConfig) -> KeyPair:
    """
    Load `<account_dir>/<account>_<algorithm>` for the configured account and algorithm.

    Raises:
        AccountNameRequired: If no account name is configured
        KeyStorageError: If the key file cannot be loaded
    """
    name = config.require_account()
    return load_key_pair(key_file_base(config.account_dir, name, config.sign_algorithm), config.sign_algorithm)


def load_signing_account(
    config: WalletConfig,
    decryptor: Optional[Decryptor] = None
) -> Tuple[str, KeyPair]:
    """
    Load the key pair the configured account signs with.

    The account must be usable without further prompting. Key pairs of the
    other permissions are wiped before returning.

    Returns:
        (account name, key pair for the configured permission)

    Raises:
        InvalidPermissionError: If the account lacks the configured permission
    """
    account = resolve_account(config, require_decryptable=True, decryptor=decryptor)
    try:
        kp = account.keypair_for(config.sign_permission)
    except InvalidPermissionError:
        account.wipe()
        raise
    for perm, other in account.keypairs.items():
        if perm != config.sign_permission:
            other.wipe()
    return config.account_name, kp


__all__ = [
    "ResolutionStrategy",
    "ConsolidatedKeystoreStrategy",
    "KeyPairFileStrategy",
    "KeystoreResolver",
    "resolve_account",
    "load_key_pair_by_name",
    "load_signing_account",
]
