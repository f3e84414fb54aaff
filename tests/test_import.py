"""Test basic imports from the package."""


def test_main_import():
    """Test that the main package imports successfully."""
    import iwallet
    assert iwallet.__version__ == "0.3.0"
    assert hasattr(iwallet, "WalletConfig")
    assert hasattr(iwallet, "KeystoreResolver")
    assert hasattr(iwallet, "authorize")


def test_crypto_import():
    import iwallet.crypto as crypto
    assert hasattr(crypto, "sign")
    assert hasattr(crypto, "verify")


def test_keys_import():
    import iwallet.keys as keys
    assert hasattr(keys, "save_key_pair")
    assert hasattr(keys, "load_signing_account")


def test_tx_import():
    import iwallet.tx as tx
    assert hasattr(tx, "parse_amount_limit")
    assert hasattr(tx, "TransactionRequest")


def test_signers_import():
    import iwallet.signers as signers
    assert hasattr(signers, "SigningRequest")
    assert hasattr(signers, "validate_signers")
