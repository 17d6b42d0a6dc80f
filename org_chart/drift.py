"""
Drift Comparator — pure function, no side effects.

Structured diff between two adjacency snapshots, used to describe what a
move, undo or redo actually changed.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .domain_types import AdjacencySnapshot


def compare_snapshots(
    snapshot_a: AdjacencySnapshot, snapshot_b: AdjacencySnapshot,
) -> dict:
    """
    Compare two snapshots over the ids they share.

    Returns dict with:
        moved        {id: (supervisor_in_a, supervisor_in_b)}
        reordered    ids whose subordinate list differs (content or order)
        added / removed  ids present in only one snapshot
        changed_count    number of ids whose entry differs at all
    """
    ids_a = set(snapshot_a)
    ids_b = set(snapshot_b)
    common = sorted(ids_a & ids_b)

    moved: Dict[int, Tuple[Optional[int], Optional[int]]] = {}
    reordered: List[int] = []
    for eid in common:
        a = snapshot_a[eid]
        b = snapshot_b[eid]
        if a.supervisor_id != b.supervisor_id:
            moved[eid] = (a.supervisor_id, b.supervisor_id)
        if a.subordinate_ids != b.subordinate_ids:
            reordered.append(eid)

    changed = set(moved) | set(reordered)
    return {
        "moved": moved,
        "reordered": reordered,
        "added": sorted(ids_b - ids_a),
        "removed": sorted(ids_a - ids_b),
        "changed_count": len(changed),
    }
