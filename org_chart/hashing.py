"""
Org Chart Kernel — Canonical Hashing

Deterministic canonical serialization + SHA-256 hashing of an adjacency
snapshot.

Rules:
  - Entries sorted by employee id
  - Subordinate order preserved (it is part of the state)
  - UTF-8 JSON, no whitespace
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, List

from .domain_types import AdjacencySnapshot


def canonical_serialize(snapshot: AdjacencySnapshot) -> bytes:
    obj = _build_canonical_dict(snapshot)
    return json.dumps(obj, ensure_ascii=True, separators=(",", ":"), sort_keys=False).encode("utf-8")


def canonical_hash(snapshot: AdjacencySnapshot) -> str:
    """SHA-256 of canonical serialization. Lowercase hex string."""
    return hashlib.sha256(canonical_serialize(snapshot)).hexdigest()


def _build_canonical_dict(snapshot: AdjacencySnapshot) -> Dict[str, Any]:
    entries: List[Dict[str, Any]] = []
    for eid in sorted(snapshot):
        entry = snapshot[eid]
        entries.append({
            "id": eid,
            "supervisor_id": entry.supervisor_id,
            "subordinate_ids": list(entry.subordinate_ids),
        })
    return {"format_version": 1, "adjacency": entries}
