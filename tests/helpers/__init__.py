from .factories import mk_key_pair, mk_transaction, write_key_file

__all__ = [
    "mk_key_pair",
    "mk_transaction",
    "write_key_file",
]
