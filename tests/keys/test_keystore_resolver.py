"""
Test account resolution.

Tests the consolidated keystore strategy, the plaintext key file fallback,
decryption requirements and the config-driven helpers.
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import mk_key_pair, write_key_file

from iwallet.config import WalletConfig
from iwallet.crypto import Algorithm
from iwallet.keys import (
    Account,
    KeyPair,
    KeyPairFileStrategy,
    KeystoreResolver,
    account_name_from_key_path,
    list_accounts,
    load_key_pair_by_name,
    load_signing_account,
    resolve_account,
    save_key_pair,
    save_keystore,
)
from iwallet.runtime.errors import (
    AccountNameRequired,
    AccountNotFoundError,
    DecryptionRequiredError,
    InvalidAccountNameError,
    InvalidPermissionError,
    KeyStorageError,
)


def _two_permission_account(name="alice"):
    return Account(name, {
        "owner": mk_key_pair(seed="owner"),
        "active": mk_key_pair(seed="active", algorithm=Algorithm.SECP256K1),
    })


def _encrypted_account(name="alice"):
    owner = mk_key_pair(seed="owner")
    return Account(name, {
        "owner": KeyPair(owner.algorithm, owner.public_key, None, encrypted=True),
        "active": mk_key_pair(seed="active"),
    })


def test_keystore_resolves_every_permission(account_dir):
    """Test the consolidated keystore yields the full permission mapping."""
    original = _two_permission_account()
    save_keystore(account_dir, original)

    account = KeystoreResolver(account_dir).resolve("alice", require_decryptable=True)

    assert sorted(account.keypairs) == ["active", "owner"]
    for perm in ("owner", "active"):
        assert account.keypair_for(perm) == original.keypair_for(perm)


def test_keystore_wins_over_key_files(account_dir):
    """Test key files are ignored when a keystore exists."""
    save_keystore(account_dir, _two_permission_account())
    save_key_pair(account_dir, "alice", mk_key_pair(seed="plain"))

    account = KeystoreResolver(account_dir).resolve("alice", permission="plain-perm")

    assert "plain-perm" not in account.keypairs
    assert account.keypair_for("owner").public_key == mk_key_pair(seed="owner").public_key


def test_key_file_fallback_uses_requested_permission(account_dir):
    """Test the fallback builds a single key pair under the caller's permission."""
    kp = mk_key_pair(seed="fallback")
    save_key_pair(account_dir, "bob", kp)

    account = KeystoreResolver(account_dir).resolve("bob", permission="owner")

    assert list(account.keypairs) == ["owner"]
    assert account.keypair_for("owner") == kp
    with pytest.raises(InvalidPermissionError):
        account.keypair_for("active")


def test_key_file_precedence_prefers_ed25519(account_dir):
    """Test ed25519 files win over secp256k1 files."""
    ed = mk_key_pair(seed="ed", algorithm=Algorithm.ED25519)
    secp = mk_key_pair(seed="secp", algorithm=Algorithm.SECP256K1)
    save_key_pair(account_dir, "bob", secp)
    save_key_pair(account_dir, "bob", ed)

    account = KeystoreResolver(account_dir).resolve("bob")

    assert account.keypair_for("active").algorithm is Algorithm.ED25519


def test_secp256k1_key_file_resolves(account_dir):
    """Test a lone secp256k1 key file is found."""
    account_dir.mkdir(parents=True)
    secp = mk_key_pair(seed="secp-only", algorithm=Algorithm.SECP256K1)
    write_key_file(account_dir / "carol_secp256k1", secp)

    account = KeystoreResolver(account_dir).resolve("carol")

    assert account.keypair_for("active") == secp


def test_missing_account(account_dir):
    """Test neither form present fails with the account name."""
    with pytest.raises(AccountNotFoundError) as exc_info:
        KeystoreResolver(account_dir).resolve("nobody")
    assert exc_info.value.details["account"] == "nobody"


def test_resolve_rejects_names_outside_account_dir(tmp_path, account_dir):
    """Test key files next to the account directory are not reachable by name."""
    save_key_pair(tmp_path, "outside", mk_key_pair(seed="outside"))
    save_keystore(tmp_path, Account("outside", {"active": mk_key_pair(seed="outside")}))

    with pytest.raises(InvalidAccountNameError) as exc_info:
        KeystoreResolver(account_dir).resolve("../outside")
    assert exc_info.value.name == "../outside"

    with pytest.raises(InvalidAccountNameError):
        load_key_pair_by_name(WalletConfig(account_dir=account_dir, account_name="../outside"))


def test_encrypted_keystore_requires_decryption(account_dir):
    """Test require_decryptable rejects encrypted entries without a decryptor."""
    save_keystore(account_dir, _encrypted_account(), encrypted_keys={"owner": "opaque-ciphertext"})

    with pytest.raises(DecryptionRequiredError) as exc_info:
        KeystoreResolver(account_dir).resolve("alice", require_decryptable=True)
    assert exc_info.value.details["permission"] == "owner"

    account = KeystoreResolver(account_dir).resolve("alice")
    assert account.keypair_for("owner").encrypted
    assert not account.keypair_for("owner").is_ready()


def test_decryptor_makes_keystore_usable(account_dir):
    """Test a decryptor callback supplies encrypted private keys."""
    save_keystore(account_dir, _encrypted_account(), encrypted_keys={"owner": "opaque-ciphertext"})
    calls = []

    def decryptor(name, permission, raw_key):
        calls.append((name, permission, raw_key))
        return mk_key_pair(seed="owner").private_key

    account = KeystoreResolver(account_dir, decryptor=decryptor).resolve("alice", require_decryptable=True)

    assert calls == [("alice", "owner", "opaque-ciphertext")]
    assert account.keypair_for("owner").is_ready()


def test_malformed_keystore(account_dir):
    """Test broken keystore JSON surfaces the path."""
    account_dir.mkdir(parents=True)
    path = account_dir / "alice.json"
    path.write_text("{not json")

    with pytest.raises(KeyStorageError) as exc_info:
        KeystoreResolver(account_dir).resolve("alice")
    assert exc_info.value.path == str(path)


def test_keystore_with_bad_key_text(account_dir):
    """Test invalid base58 in a keystore entry is rejected."""
    account_dir.mkdir(parents=True)
    (account_dir / "alice.json").write_text(json.dumps({
        "name": "alice",
        "keypairs": {"active": {"algorithm": "ed25519", "public_key": "0OIl", "raw_key": "0OIl"}},
    }))

    with pytest.raises(KeyStorageError):
        KeystoreResolver(account_dir).resolve("alice")


def test_custom_strategy_order(account_dir):
    """Test the resolver only consults the strategies it is given."""
    save_keystore(account_dir, _two_permission_account())

    with pytest.raises(AccountNotFoundError):
        KeystoreResolver(account_dir, strategies=[KeyPairFileStrategy()]).resolve("alice")


def test_load_signing_account(account_dir):
    """Test the configured permission's key pair is selected."""
    save_keystore(account_dir, _two_permission_account())
    config = WalletConfig(account_dir=account_dir, account_name="alice", sign_permission="owner")

    name, kp = load_signing_account(config)

    assert name == "alice"
    assert kp.public_key == mk_key_pair(seed="owner").public_key
    assert kp.is_ready()


def test_load_signing_account_invalid_permission(account_dir):
    """Test a permission missing from the keystore fails."""
    save_keystore(account_dir, _two_permission_account())
    config = WalletConfig(account_dir=account_dir, account_name="alice", sign_permission="transfer")

    with pytest.raises(InvalidPermissionError):
        load_signing_account(config)


def test_load_signing_account_requires_name(account_dir):
    """Test an empty account name is rejected before touching disk."""
    with pytest.raises(AccountNameRequired):
        load_signing_account(WalletConfig(account_dir=account_dir))


def test_resolve_account_defaults_to_configured(wallet_config):
    """Test resolve_account reads name and permission from config."""
    kp = mk_key_pair(seed="configured")
    save_key_pair(wallet_config.account_dir, "alice", kp)

    account = resolve_account(wallet_config)

    assert account.keypair_for("active") == kp


def test_load_key_pair_by_name(account_dir):
    """Test the configured algorithm picks the key file."""
    secp = mk_key_pair(seed="by-name", algorithm=Algorithm.SECP256K1)
    save_key_pair(account_dir, "alice", secp)
    config = WalletConfig(account_dir=account_dir, account_name="alice", sign_algorithm="secp256k1")

    assert load_key_pair_by_name(config) == secp

    with pytest.raises(KeyStorageError):
        load_key_pair_by_name(config.model_copy(update={"sign_algorithm": Algorithm.ED25519}))


def test_list_accounts(account_dir):
    """Test account listing across both storage forms."""
    assert list_accounts(account_dir) == []

    save_keystore(account_dir, _two_permission_account("alice"))
    save_key_pair(account_dir, "bob", mk_key_pair(1, Algorithm.ED25519))
    save_key_pair(account_dir, "bob", mk_key_pair(1, Algorithm.SECP256K1))
    save_key_pair(account_dir, "carol", mk_key_pair(2, Algorithm.SECP256K1))

    assert list_accounts(account_dir) == ["alice", "bob", "carol"]


def test_account_name_from_key_path():
    """Test account name extraction from key file paths."""
    assert account_name_from_key_path("/home/u/.iwallet/alice_ed25519", "_ed25519") == "alice"
    assert account_name_from_key_path("bob_secp256k1", "_secp256k1") == "bob"
    with pytest.raises(ValueError):
        account_name_from_key_path("/home/u/.iwallet/alice.json", "_ed25519")


def test_key_pair_wipe():
    """Test wiping zeroes and drops the private key."""
    kp = mk_key_pair(seed="wipe")
    buffer = kp._private_key
    kp.wipe()

    assert not kp.has_private_key
    assert not kp.is_ready()
    assert all(b == 0 for b in buffer)
    with pytest.raises(ValueError):
        kp.private_key
