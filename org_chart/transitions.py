"""
Org Chart Kernel — Move Transition

ALL reparenting logic lives here. ``apply_move`` is pure: it works on a
copy of the adjacency it is given and returns the new mapping with an
ActionRecord. The caller commits the result to the TreeStore.
"""

from __future__ import annotations

import logging
from typing import Tuple

from .domain_types import (
    ActionRecord, AdjacencySnapshot, OrgChartError, copy_snapshot,
)
from .graph import is_descendant

logger = logging.getLogger(__name__)


class InvalidMoveError(OrgChartError):
    """Raised when a move request violates a precondition."""

    def __init__(self, reason: str, detail: str) -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(f"[MOVE:{reason}] {detail}")


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

def make_label(employee_id: int, supervisor_id: int) -> str:
    return f"{employee_id}-{supervisor_id}"


def parse_label(label: str) -> Tuple[int, int]:
    """Inverse of make_label. Raises ValueError for anything else."""
    left, sep, right = label.partition("-")
    if not sep:
        raise ValueError(f"Not a move label: {label!r}")
    return int(left), int(right)


# ---------------------------------------------------------------------------
# Move
# ---------------------------------------------------------------------------

def apply_move(
    adjacency: AdjacencySnapshot,
    employee_id: int,
    new_supervisor_id: int,
) -> Tuple[AdjacencySnapshot, ActionRecord]:
    """
    Move *employee_id* under *new_supervisor_id* and return
    ``(new_adjacency, record)``. *adjacency* is never mutated.

    The employee is extracted from its chain: its direct reports are
    appended to its former supervisor's list, its own list is cleared,
    and it is appended to the new supervisor's list.
    """
    _check_preconditions(adjacency, employee_id, new_supervisor_id)

    new_adj = copy_snapshot(adjacency)
    entry = new_adj[employee_id]
    old_supervisor_id = entry.supervisor_id
    promoted = list(entry.subordinate_ids)

    old_supervisor = new_adj[old_supervisor_id]
    old_supervisor.subordinate_ids = [
        sid for sid in old_supervisor.subordinate_ids if sid != employee_id
    ] + promoted
    for sid in promoted:
        new_adj[sid].supervisor_id = old_supervisor_id

    entry.supervisor_id = new_supervisor_id
    entry.subordinate_ids = []
    new_adj[new_supervisor_id].subordinate_ids.append(employee_id)

    record = ActionRecord(
        label=make_label(employee_id, new_supervisor_id),
        employee_id=employee_id,
        old_supervisor_id=old_supervisor_id,
        new_supervisor_id=new_supervisor_id,
        promoted_ids=tuple(promoted),
    )
    logger.debug(
        "Move %s: %d leaves %d, %d report(s) promoted",
        record.label, employee_id, old_supervisor_id, len(promoted),
    )
    return new_adj, record


def _check_preconditions(
    adjacency: AdjacencySnapshot, employee_id: int, new_supervisor_id: int,
) -> None:
    if employee_id not in adjacency:
        raise InvalidMoveError(
            "unknown_employee", f"Employee {employee_id!r} does not exist"
        )
    if new_supervisor_id not in adjacency:
        raise InvalidMoveError(
            "unknown_supervisor", f"Supervisor {new_supervisor_id!r} does not exist"
        )
    if employee_id == new_supervisor_id:
        raise InvalidMoveError(
            "self_supervision", f"Employee {employee_id} cannot supervise itself"
        )
    if adjacency[employee_id].supervisor_id is None:
        raise InvalidMoveError(
            "move_root", f"Employee {employee_id} is the root and cannot be moved"
        )
    if is_descendant(adjacency, employee_id, new_supervisor_id):
        raise InvalidMoveError(
            "cycle",
            f"Supervisor {new_supervisor_id} reports (transitively) to "
            f"employee {employee_id}",
        )
