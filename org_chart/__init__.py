"""
Org Chart Kernel
In-memory employee hierarchy with reparenting moves and linear,
snapshot-based undo/redo.
"""

from .domain_types import (
    ActionRecord, AdjacencyEntry, AdjacencySnapshot, Employee,
    NotFoundError, OrgChartError, copy_snapshot, snapshot_to_dict,
)
from .registry import IdSequence, NodeRegistry
from .invariants import InvalidTopologyError, validate_topology
from .tree_store import TreeStore
from .transitions import InvalidMoveError, apply_move, make_label, parse_label
from .history import HistoryEntry, HistoryManager
from .engine import BOOTSTRAP_LABEL, OrgChartApp, bootstrap
from .hashing import canonical_serialize, canonical_hash
from .drift import compare_snapshots
from .diagnostics import compute_diagnostics

__all__ = [
    "ActionRecord",
    "AdjacencyEntry",
    "AdjacencySnapshot",
    "Employee",
    "NotFoundError",
    "OrgChartError",
    "copy_snapshot",
    "snapshot_to_dict",
    "IdSequence",
    "NodeRegistry",
    "InvalidTopologyError",
    "validate_topology",
    "TreeStore",
    "InvalidMoveError",
    "apply_move",
    "make_label",
    "parse_label",
    "HistoryEntry",
    "HistoryManager",
    "BOOTSTRAP_LABEL",
    "OrgChartApp",
    "bootstrap",
    "canonical_serialize",
    "canonical_hash",
    "compare_snapshots",
    "compute_diagnostics",
]
