"""
Shared fixtures: every test gets its own account directory under tmp_path.
"""

import pytest

from iwallet.config import WalletConfig


@pytest.fixture
def account_dir(tmp_path):
    """Account directory that does not exist yet."""
    return tmp_path / ".iwallet"


@pytest.fixture
def wallet_config(account_dir):
    """Config selecting account alice, permission active."""
    return WalletConfig(account_dir=account_dir, account_name="alice", sign_permission="active")


@pytest.fixture
def transaction():
    """A fixed, unsigned transfer transaction."""
    from helpers import mk_transaction
    return mk_transaction()
