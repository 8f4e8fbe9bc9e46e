"""
Canonical JSON

Encodes values with lexicographically sorted object keys and no extra
whitespace so that the legacy amino sign document hashes identically on the
signing and verifying side.
"""

import json
from typing import Any


def dumps_canonical(obj: Any) -> str:
    """
    Encode object as canonical JSON string.

    Deterministic key order, no extra whitespace. Recursively applies
    canonicalization to nested objects and arrays.

    Args:
        obj: Object to encode (dict, list, tuple, str, int, bool, None)

    Returns:
        Canonical JSON string with sorted keys and no extra whitespace

    Raises:
        ValueError: If the object contains floats, which have no canonical form
    """
    return json.dumps(_canonicalize(obj), separators=(',', ':'), ensure_ascii=False, sort_keys=True)


def dumps_canonical_bytes(obj: Any) -> bytes:
    """UTF-8 bytes of ``dumps_canonical(obj)``."""
    return dumps_canonical(obj).encode('utf-8')


def _canonicalize(v: Any) -> Any:
    """
    Recursively canonicalize a value.

    - Maps: keys coerced to strings and sorted, values canonicalized
    - Lists and tuples: elements canonicalized, order preserved
    - Floats: rejected
    - Other primitives: passed through unchanged
    """
    if isinstance(v, dict):
        return {str(k): _canonicalize(v[k]) for k in sorted(v.keys(), key=str)}
    elif isinstance(v, (list, tuple)):
        return [_canonicalize(item) for item in v]
    elif isinstance(v, float):
        raise ValueError("floats are not allowed in canonical JSON")
    else:
        return v
