"""
Org Chart Kernel — Topology Checks

Hard-fail validation of an adjacency mapping. Every check raises
InvalidTopologyError on failure; callers validate a candidate mapping
before swapping it in, so a failed check never leaves partial state.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional

from .domain_types import AdjacencySnapshot, OrgChartError
from .graph import detect_supervisor_cycle, find_roots, iter_descendants


class InvalidTopologyError(OrgChartError):
    """Raised when an adjacency mapping is not a well-formed tree."""

    def __init__(self, rule: str, detail: str) -> None:
        self.rule = rule
        self.detail = detail
        super().__init__(f"[TOPOLOGY:{rule}] {detail}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_topology(
    adjacency: AdjacencySnapshot,
    registered_ids: Iterable[int],
    root_id: Optional[int] = None,
    allow_detached: bool = False,
) -> None:
    """
    Run every tree check. Raises InvalidTopologyError on the first failure.

    With ``allow_detached`` (bootstrap wiring in progress) several rootless
    nodes may coexist; the full single-root / reachability rules apply
    otherwise.
    """
    registered = set(registered_ids)
    _check_coverage(adjacency, registered)
    _check_references(adjacency)
    _check_no_duplicate_subordinates(adjacency)
    _check_mutual_consistency(adjacency)
    _check_no_cycles(adjacency)
    _check_roots(adjacency, root_id, allow_detached)
    if not allow_detached:
        _check_reachability(adjacency)


# ---------------------------------------------------------------------------
# Individual checks (private)
# ---------------------------------------------------------------------------

def _check_coverage(adjacency: AdjacencySnapshot, registered: set) -> None:
    """Exactly the registered ids carry an adjacency entry."""
    keys = set(adjacency)
    missing = sorted(registered - keys)
    if missing:
        raise InvalidTopologyError(
            "coverage", f"Registered employee(s) without adjacency: {missing}"
        )
    unknown = sorted(keys - registered)
    if unknown:
        raise InvalidTopologyError(
            "unknown_reference", f"Adjacency for unregistered id(s): {unknown}"
        )


def _check_references(adjacency: AdjacencySnapshot) -> None:
    for eid, entry in adjacency.items():
        if entry.supervisor_id is not None and entry.supervisor_id not in adjacency:
            raise InvalidTopologyError(
                "unknown_reference",
                f"Employee {eid} references unregistered supervisor "
                f"{entry.supervisor_id}",
            )
        for sid in entry.subordinate_ids:
            if sid not in adjacency:
                raise InvalidTopologyError(
                    "unknown_reference",
                    f"Employee {eid} lists unregistered subordinate {sid}",
                )


def _check_no_duplicate_subordinates(adjacency: AdjacencySnapshot) -> None:
    listed = Counter(
        sid for entry in adjacency.values() for sid in entry.subordinate_ids
    )
    repeated = sorted(sid for sid, n in listed.items() if n > 1)
    if repeated:
        raise InvalidTopologyError(
            "duplicate_subordinate",
            f"Employee(s) listed as a subordinate more than once: {repeated}",
        )


def _check_mutual_consistency(adjacency: AdjacencySnapshot) -> None:
    """supervisor_id and subordinate_ids must describe the same edges."""
    for eid, entry in adjacency.items():
        sup = entry.supervisor_id
        if sup is not None and eid not in adjacency[sup].subordinate_ids:
            raise InvalidTopologyError(
                "inconsistent_link",
                f"Employee {eid} names supervisor {sup}, "
                f"but {sup} does not list it as a subordinate",
            )
        for sid in entry.subordinate_ids:
            if adjacency[sid].supervisor_id != eid:
                raise InvalidTopologyError(
                    "inconsistent_link",
                    f"Employee {eid} lists subordinate {sid}, whose supervisor "
                    f"is {adjacency[sid].supervisor_id}",
                )


def _check_no_cycles(adjacency: AdjacencySnapshot) -> None:
    cycle = detect_supervisor_cycle(adjacency)
    if cycle:
        raise InvalidTopologyError(
            "cycle",
            "Supervisor cycle detected: " + " -> ".join(str(e) for e in cycle),
        )


def _check_roots(
    adjacency: AdjacencySnapshot,
    root_id: Optional[int],
    allow_detached: bool,
) -> None:
    if not adjacency:
        return
    roots = find_roots(adjacency)
    if not roots:
        raise InvalidTopologyError("no_root", "No employee without a supervisor")
    if root_id is not None and root_id not in roots:
        raise InvalidTopologyError(
            "root_changed", f"Employee {root_id} must remain the root"
        )
    if not allow_detached and len(roots) > 1:
        raise InvalidTopologyError(
            "multiple_roots", f"More than one employee without a supervisor: {roots}"
        )


def _check_reachability(adjacency: AdjacencySnapshot) -> None:
    if not adjacency:
        return
    root = find_roots(adjacency)[0]
    reached = len(iter_descendants(adjacency, root)) + 1
    if reached != len(adjacency):
        raise InvalidTopologyError(
            "unreachable",
            f"Only {reached} of {len(adjacency)} employees reachable from root {root}",
        )
