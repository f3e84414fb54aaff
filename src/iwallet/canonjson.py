"""
Canonical JSON

Sorts object keys lexicographically and encodes with no extra whitespace so
transaction hashes are stable across machines.
"""

import json
from typing import Any


def dumps_canonical(obj: Any) -> str:
    """
    Encode object as canonical JSON string.

    Deterministic key order, no extra whitespace, recursively applied to
    nested objects and arrays. Array order is preserved.

    Args:
        obj: Object to encode (dict, list, str, int, float, bool, None)

    Returns:
        Canonical JSON string
    """
    return json.dumps(_canonicalize(obj), separators=(',', ':'), ensure_ascii=False, sort_keys=True)


def _canonicalize(v: Any) -> Any:
    if isinstance(v, dict):
        return {str(k): _canonicalize(v[k]) for k in sorted(v.keys(), key=str)}
    elif isinstance(v, (list, tuple)):
        return [_canonicalize(item) for item in v]
    else:
        return v


def canonical_bytes(obj: Any) -> bytes:
    """Canonical JSON encoded as UTF-8 bytes."""
    return dumps_canonical(obj).encode("utf-8")
