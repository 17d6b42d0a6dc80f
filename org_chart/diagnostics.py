"""
Org Chart Kernel — Diagnostics

Read-only summary of the live tree and its history.
"""

from __future__ import annotations

from collections import Counter

from .graph import compute_depth, compute_span_of_control
from .history import HistoryManager
from .tree_store import TreeStore


def compute_diagnostics(store: TreeStore, history: HistoryManager) -> dict:
    adjacency = store.snapshot()
    root_id = store.root_id
    spans = compute_span_of_control(adjacency)
    max_span = max(spans.values()) if spans else 0

    warnings: list[str] = []

    names = Counter(e.name for e in store.registry)
    shared = sorted(name for name, n in names.items() if n > 1)
    if shared:
        warnings.append(
            f"{len(shared)} display name(s) shared by several employees; "
            f"name lookup returns the first match: {', '.join(shared)}"
        )

    return {
        "employee_count": len(adjacency),
        "root_id": root_id,
        "depth": compute_depth(adjacency, root_id),
        "max_span_of_control": max_span,
        "leaf_count": sum(1 for n in spans.values() if n == 0),
        "history_length": len(history),
        "cursor": history.cursor,
        "can_undo": history.can_undo,
        "can_redo": history.can_redo,
        "warnings": warnings,
    }
