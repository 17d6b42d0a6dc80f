"""
Org Chart Kernel — Graph Utilities

Pure dict-based analysis over an adjacency mapping. No mutation.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .domain_types import AdjacencySnapshot


# ---------------------------------------------------------------------------
# Roots / traversal
# ---------------------------------------------------------------------------

def find_roots(adjacency: AdjacencySnapshot) -> List[int]:
    """Return ids with no supervisor, in mapping order."""
    return [eid for eid, entry in adjacency.items() if entry.supervisor_id is None]


def iter_descendants(adjacency: AdjacencySnapshot, employee_id: int) -> List[int]:
    """
    All transitive subordinates of *employee_id*, pre-order, excluding
    the employee itself. Uses an explicit stack and a visited set, so a
    malformed mapping cannot loop forever.
    """
    result: List[int] = []
    seen = {employee_id}
    stack = list(reversed(adjacency[employee_id].subordinate_ids))
    while stack:
        eid = stack.pop()
        if eid in seen or eid not in adjacency:
            continue
        seen.add(eid)
        result.append(eid)
        stack.extend(reversed(adjacency[eid].subordinate_ids))
    return result


def is_descendant(
    adjacency: AdjacencySnapshot, ancestor_id: int, candidate_id: int,
) -> bool:
    """True if *candidate_id* sits somewhere below *ancestor_id*."""
    return candidate_id in set(iter_descendants(adjacency, ancestor_id))


def supervisor_chain(adjacency: AdjacencySnapshot, employee_id: int) -> List[int]:
    """Ids from the employee's supervisor up to the root."""
    chain: List[int] = []
    seen = {employee_id}
    current = adjacency[employee_id].supervisor_id
    while current is not None and current not in seen:
        chain.append(current)
        seen.add(current)
        entry = adjacency.get(current)
        current = entry.supervisor_id if entry is not None else None
    return chain


def compute_depth(adjacency: AdjacencySnapshot, root_id: int) -> int:
    """Number of levels below the root (a lone root has depth 0)."""
    depth = 0
    frontier = [root_id]
    while True:
        frontier = [
            sid for eid in frontier for sid in adjacency[eid].subordinate_ids
        ]
        if not frontier:
            return depth
        depth += 1


def compute_span_of_control(adjacency: AdjacencySnapshot) -> Dict[int, int]:
    """Direct report count per employee."""
    return {eid: len(entry.subordinate_ids) for eid, entry in adjacency.items()}


# ---------------------------------------------------------------------------
# Cycle detection
# ---------------------------------------------------------------------------

def detect_supervisor_cycle(adjacency: AdjacencySnapshot) -> List[int]:
    """
    Follow supervisor links from every node and return the first cycle
    found as a list of ids, or an empty list.

    Colour tracking: WHITE unvisited, GREY on the current walk, BLACK
    known to terminate at a root.
    """
    WHITE, GREY, BLACK = 0, 1, 2
    colour: Dict[int, int] = {eid: WHITE for eid in adjacency}

    for start in sorted(adjacency):
        if colour[start] != WHITE:
            continue
        walk: List[int] = []
        current: Optional[int] = start
        while current is not None and current in adjacency:
            state = colour[current]
            if state == GREY:
                return walk[walk.index(current):] + [current]
            if state == BLACK:
                break
            colour[current] = GREY
            walk.append(current)
            current = adjacency[current].supervisor_id
        for eid in walk:
            colour[eid] = BLACK

    return []

