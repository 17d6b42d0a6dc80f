"""
Org Chart Kernel — Core Domain Types

Pure data. No behaviour, no transition logic.

────────────────────────────────────────────────
DOMAIN GLOSSARY
────────────────────────────────────────────────

Move:
    Reparenting an employee. The employee leaves its supervisor, its
    direct reports are promoted to that supervisor, and it is attached
    under the new supervisor with an empty subordinate list.

Snapshot:
    Full, immutable copy of the id -> AdjacencyEntry mapping.

Cursor:
    Index into the history log marking the active snapshot.

Root / CEO:
    The single employee with no supervisor.

────────────────────────────────────────────────
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


# ══════════════════════════════════════════════════════════════
# Exception Hierarchy
# ══════════════════════════════════════════════════════════════

class OrgChartError(Exception):
    """Base exception for all org chart operations."""


class NotFoundError(OrgChartError):
    """Raised when an employee id or name does not resolve."""

    def __init__(self, kind: str, key: object) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"No employee with {kind} {key!r}")


# ── Core Domain Types ─────────────────────────────────────────

@dataclass(eq=False)
class Employee:
    """
    A single employee record.

    ``id`` and ``name`` are fixed at registration. ``subordinates`` is the
    object-graph view, re-derived by the TreeStore from the adjacency
    mapping after every committed change.
    """

    id: int
    name: str
    subordinates: List["Employee"] = field(default_factory=list, repr=False)

    def to_dict(self) -> dict:
        """Nested plain-dict rendering of this employee and its reports."""
        return {
            "id": self.id,
            "name": self.name,
            "subordinates": [s.to_dict() for s in self.subordinates],
        }


@dataclass
class AdjacencyEntry:
    """Supervisor link and ordered direct reports of one employee."""

    supervisor_id: Optional[int] = None
    subordinate_ids: List[int] = field(default_factory=list)

    def copy(self) -> "AdjacencyEntry":
        return AdjacencyEntry(
            supervisor_id=self.supervisor_id,
            subordinate_ids=list(self.subordinate_ids),
        )

    def to_dict(self) -> dict:
        return {
            "supervisor_id": self.supervisor_id,
            "subordinate_ids": list(self.subordinate_ids),
        }


AdjacencySnapshot = Dict[int, AdjacencyEntry]


def copy_snapshot(snapshot: AdjacencySnapshot) -> AdjacencySnapshot:
    """Deep-copy an adjacency mapping so the copy shares no lists."""
    return copy.deepcopy(snapshot)


def snapshot_to_dict(snapshot: AdjacencySnapshot) -> dict:
    """Serialise a snapshot to a plain dict keyed by id (sorted)."""
    return {eid: snapshot[eid].to_dict() for eid in sorted(snapshot)}


@dataclass(frozen=True)
class ActionRecord:
    """
    Structured, immutable outcome of a move.

    ``label`` is the token stored in the history log next to the
    resulting snapshot.
    """

    label: str
    employee_id: int
    old_supervisor_id: int
    new_supervisor_id: int
    promoted_ids: Tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "employee_id": self.employee_id,
            "old_supervisor_id": self.old_supervisor_id,
            "new_supervisor_id": self.new_supervisor_id,
            "promoted_ids": list(self.promoted_ids),
        }
