"""
Org Chart Kernel — Tree Store

Supervisor / subordinate relationships layered over the NodeRegistry.

The id-keyed adjacency mapping is the single source of truth. Each
Employee's ``subordinates`` list is a projection, re-derived after every
committed change. Every change is validate-then-swap: a candidate
mapping is checked in full before it replaces the live one.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .domain_types import (
    AdjacencyEntry, AdjacencySnapshot, Employee, NotFoundError, copy_snapshot,
)
from .graph import iter_descendants, supervisor_chain
from .invariants import InvalidTopologyError, validate_topology
from .registry import NodeRegistry

logger = logging.getLogger(__name__)


class TreeStore:
    """
    Adjacency over a registry.

    Lifecycle: ``add_root`` / ``add_node`` / ``attach`` while wiring the
    bootstrap hierarchy, then ``seal()``. Once sealed, only ``apply``
    (moves) and ``restore`` (history) change relationships, and the
    single-root rule is enforced.
    """

    def __init__(self, registry: NodeRegistry) -> None:
        self._registry = registry
        self._adjacency: AdjacencySnapshot = {}
        self._root_id: Optional[int] = None
        self._sealed = False

    # -- State access -------------------------------------------------------

    @property
    def registry(self) -> NodeRegistry:
        return self._registry

    @property
    def root_id(self) -> int:
        if self._root_id is None:
            raise RuntimeError("Tree has no root — call add_root() first")
        return self._root_id

    @property
    def sealed(self) -> bool:
        return self._sealed

    def adjacency_of(self, employee_id: int) -> AdjacencyEntry:
        """Copy of one employee's adjacency entry."""
        entry = self._adjacency.get(employee_id)
        if entry is None:
            raise NotFoundError("id", employee_id)
        return entry.copy()

    def snapshot(self) -> AdjacencySnapshot:
        """Deep copy of the full mapping."""
        return copy_snapshot(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    # -- Bootstrap wiring ---------------------------------------------------

    def add_root(self, employee: Employee) -> None:
        self._require_unsealed("add_root")
        if self._root_id is not None:
            raise InvalidTopologyError(
                "multiple_roots",
                f"Root already set to {self._root_id}; cannot add {employee.id}",
            )
        self._add_entry(employee)
        self._root_id = employee.id

    def add_node(self, employee: Employee) -> None:
        """Add a registered employee with no supervisor yet."""
        self._require_unsealed("add_node")
        if self._root_id is None:
            raise RuntimeError("add_root() must be called before add_node()")
        self._add_entry(employee)

    def attach(self, employee_id: int, supervisor_id: int) -> None:
        """Wire a detached employee under *supervisor_id*."""
        self._require_unsealed("attach")
        self._registry.resolve(employee_id)
        self._registry.resolve(supervisor_id)
        if employee_id == self._root_id:
            raise InvalidTopologyError(
                "root_changed", f"Root {employee_id} cannot be given a supervisor"
            )
        current = self.adjacency_of(employee_id).supervisor_id
        if current is not None:
            raise InvalidTopologyError(
                "already_attached",
                f"Employee {employee_id} already reports to {current}",
            )
        self.adjacency_of(supervisor_id)

        candidate = self.snapshot()
        candidate[employee_id].supervisor_id = supervisor_id
        candidate[supervisor_id].subordinate_ids.append(employee_id)
        self._commit(candidate, allow_detached=True)

    def seal(self) -> None:
        """Run the full single-root validation and lock the wiring phase."""
        validate_topology(self._adjacency, self._registry.ids(), self.root_id)
        self._sealed = True
        self._derive_views()
        logger.debug("Tree sealed with %d employees", len(self._adjacency))

    # -- Committed changes --------------------------------------------------

    def apply(self, adjacency: AdjacencySnapshot) -> None:
        """Commit a transition's result. Only valid on a sealed tree."""
        if not self._sealed:
            raise RuntimeError("apply() is only allowed after seal()")
        self._commit(copy_snapshot(adjacency), allow_detached=False)

    def restore(self, snapshot: AdjacencySnapshot) -> None:
        """
        Replace the live adjacency with *snapshot* and re-derive every
        Employee's subordinate list. Identities are untouched.
        """
        self._commit(copy_snapshot(snapshot), allow_detached=not self._sealed)

    # -- Queries ------------------------------------------------------------

    def descendants_of(self, employee_id: int) -> List[int]:
        self.adjacency_of(employee_id)
        return iter_descendants(self._adjacency, employee_id)

    def supervisor_chain(self, employee_id: int) -> List[int]:
        self.adjacency_of(employee_id)
        return supervisor_chain(self._adjacency, employee_id)

    def as_tree(self) -> Employee:
        """Root Employee with nested subordinates."""
        return self._registry.resolve(self.root_id)

    # -- Internals ----------------------------------------------------------

    def _require_unsealed(self, op: str) -> None:
        if self._sealed:
            raise RuntimeError(f"{op}() is only allowed before seal()")

    def _add_entry(self, employee: Employee) -> None:
        if employee.id not in self._registry:
            raise InvalidTopologyError(
                "unknown_reference", f"Employee {employee.id} is not registered"
            )
        if employee.id in self._adjacency:
            raise InvalidTopologyError(
                "duplicate_node", f"Employee {employee.id} already in the tree"
            )
        self._adjacency[employee.id] = AdjacencyEntry()
        employee.subordinates = []

    def _commit(self, candidate: AdjacencySnapshot, allow_detached: bool) -> None:
        validate_topology(
            candidate,
            self._registry.ids(),
            self._root_id,
            allow_detached=allow_detached,
        )
        self._adjacency = candidate
        self._derive_views()

    def _derive_views(self) -> None:
        for eid, entry in self._adjacency.items():
            employee = self._registry.resolve(eid)
            employee.subordinates = [
                self._registry.resolve(sid) for sid in entry.subordinate_ids
            ]
