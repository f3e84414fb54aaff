"""
Test the transaction request model.

Tests canonical bytes, action building and signer validation.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import mk_key_pair, mk_transaction

from iwallet.runtime.errors import InvalidActionArgsError, InvalidSignerFormatError
from iwallet.signers import sign_transaction
from iwallet.tx import Action, Signature, TransactionRequest, actions_from_args


def test_actions_from_args():
    """Test flat arguments group into triples in order."""
    actions = actions_from_args(["a.iost", "hi", "[]", "b.iost", "bye", '["x"]'])

    assert actions == [
        Action(contract="a.iost", action_name="hi", data="[]"),
        Action(contract="b.iost", action_name="bye", data='["x"]'),
    ]
    assert actions_from_args([]) == []


@pytest.mark.parametrize("count", [1, 2, 4, 5])
def test_actions_from_args_rejects_partial_triples(count):
    with pytest.raises(InvalidActionArgsError):
        actions_from_args(["x"] * count)


def test_canonical_bytes_are_deterministic():
    """Test equal transactions encode identically."""
    assert mk_transaction().canonical_bytes() == mk_transaction().canonical_bytes()
    assert mk_transaction().signing_hash() == mk_transaction().signing_hash()
    assert len(mk_transaction().signing_hash()) == 32


def test_canonical_bytes_track_content():
    """Test any signed field changes the hash."""
    base = mk_transaction()

    assert mk_transaction(memo_amount="2").signing_hash() != base.signing_hash()
    assert mk_transaction(gas_limit=5).signing_hash() != base.signing_hash()
    assert mk_transaction(signers=[]).signing_hash() != base.signing_hash()


def test_canonical_bytes_exclude_signatures():
    """Test attaching signatures or a publisher does not change the signed bytes."""
    tx = mk_transaction()
    before = tx.canonical_bytes()

    tx.signatures = [sign_transaction(tx, mk_key_pair())]
    tx.publisher = "alice"

    assert tx.canonical_bytes() == before
    assert b"signatures" not in before
    assert b"publisher" not in before


def test_signers_validated_on_construction_and_assignment():
    """Test malformed signers are rejected when set."""
    with pytest.raises(InvalidSignerFormatError):
        mk_transaction(signers=["alice"])

    tx = mk_transaction()
    with pytest.raises(InvalidSignerFormatError):
        tx.signers = ["a@b@c"]
    assert tx.signers == ["bob@active"]


def test_create_stamps_time():
    """Test create() sets time and expiration from now."""
    tx = TransactionRequest.create(actions_from_args(["a.iost", "hi", "[]"]), expiration_seconds=10)

    assert tx.time > 0
    assert tx.expiration - tx.time == 10 * 1_000_000_000
    assert tx.signatures == []


def test_signature_json_uses_base64():
    """Test signature bytes travel as base64 and parse back."""
    sig = Signature(algorithm="ED25519", public_key=b"\x01\x02", signature=b"\xff")
    data = sig.model_dump(mode="json")

    assert data["algorithm"] == "ed25519"
    assert data["public_key"] == "AQI="
    assert data["signature"] == "/w=="
    assert Signature.model_validate(data) == sig
