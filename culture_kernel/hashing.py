"""
Cultural Kernel — Canonical Partition Hashing

Deterministic canonical serialization + SHA-256 hashing of a group
assignment. Produces byte-identical output across platforms.

Rules:
  - Groups kept in output order (order is part of the result)
  - Members kept in output order
  - UTF-8 JSON, no whitespace, no float
"""

from __future__ import annotations

import hashlib
import json
from typing import Sequence


def canonical_serialize(groups: Sequence[Sequence[str]]) -> bytes:
    """
    Canonical serialization of a partition to UTF-8 JSON bytes.
    No whitespace. Deterministic field order.
    """
    obj = {
        "format_version": 1,
        "groups": [list(g) for g in groups],
    }
    return json.dumps(obj, ensure_ascii=True, separators=(",", ":"), sort_keys=False).encode("utf-8")


def canonical_hash(groups: Sequence[Sequence[str]]) -> str:
    """SHA-256 of canonical serialization. Lowercase hex string."""
    return hashlib.sha256(canonical_serialize(groups)).hexdigest()


def membership_hash(groups: Sequence[Sequence[str]]) -> str:
    """
    Order-insensitive hash: same value for partitions with identical
    membership regardless of group or member order.
    """
    normalized = sorted(sorted(g) for g in groups)
    return canonical_hash(normalized)
