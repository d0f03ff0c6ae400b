"""
Hashing for pool identifiers and ledger state roots.

Values are plain JSON (str, int, bool, lists, str-keyed dicts). Keys are
sorted and whitespace is dropped, so equal states hash equally regardless of
insertion order.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def encode(value: Any) -> bytes:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), allow_nan=False).encode("ascii")


def hash_canonical(label: str, value: Any) -> str:
    """`0x`-prefixed SHA-256 of `pairswap:<label>:v1\\0` followed by the encoded value."""
    if not label.isascii() or "\x00" in label:
        raise ValueError(f"bad hash label: {label!r}")
    digest = hashlib.sha256(f"pairswap:{label}:v1\x00".encode("ascii") + encode(value))
    return "0x" + digest.hexdigest()
