"""
Wallet configuration.

Holds the account directory and the account/permission/algorithm selection
that every key and signing operation receives explicitly.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .crypto import Algorithm, algorithm_by_name
from .runtime.errors import AccountNameRequired

ENV_HOME = "IWALLET_HOME"
ENV_ACCOUNT = "IWALLET_ACCOUNT"
ENV_SIGN_PERM = "IWALLET_SIGN_PERM"
ENV_SIGN_ALGO = "IWALLET_SIGN_ALGO"

DEFAULT_SIGN_PERMISSION = "active"


def default_account_dir() -> Path:
    """The per-user account directory, ~/.iwallet."""
    return Path.home() / ".iwallet"


class WalletConfig(BaseModel):
    """
    Account selection and storage location.

    Example usage:
        ```python
        config = WalletConfig(account_name="alice", sign_permission="owner")
        name, key_pair = load_signing_account(config)
        ```
    """

    account_dir: Path = Field(
        default_factory=default_account_dir,
        description="Directory holding keystore and key pair files"
    )
    account_name: str = Field(
        default="",
        description="Account used for signing"
    )
    sign_permission: str = Field(
        default=DEFAULT_SIGN_PERMISSION,
        description="Permission whose key pair signs transactions"
    )
    sign_algorithm: Algorithm = Field(
        default=Algorithm.ED25519,
        description="Algorithm of plaintext key files loaded by name or path"
    )

    model_config = {"frozen": True}

    @field_validator("sign_algorithm", mode="before")
    @classmethod
    def _algorithm_from_name(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, Algorithm):
            return algorithm_by_name(v)
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> WalletConfig:
        """
        Build a config from IWALLET_* environment variables.

        Keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict = {}
        if env.get(ENV_HOME):
            values["account_dir"] = Path(env[ENV_HOME]).expanduser()
        if env.get(ENV_ACCOUNT):
            values["account_name"] = env[ENV_ACCOUNT]
        if env.get(ENV_SIGN_PERM):
            values["sign_permission"] = env[ENV_SIGN_PERM]
        if env.get(ENV_SIGN_ALGO):
            values["sign_algorithm"] = env[ENV_SIGN_ALGO]
        values.update(overrides)
        return cls(**values)

    def require_account(self) -> str:
        """
        Get the configured account name.

        Raises:
            AccountNameRequired: If no account name is configured
        """
        if not self.account_name:
            raise AccountNameRequired()
        return self.account_name


__all__ = ["WalletConfig", "default_account_dir", "DEFAULT_SIGN_PERMISSION"]
