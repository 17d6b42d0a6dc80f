"""
Org Chart Kernel — Engine

Top-level orchestrator. Delegates reparenting to transitions.py, keeps
relationships in the TreeStore and snapshots in the HistoryManager.

A move is one logical transaction: the new adjacency is computed on a
copy, validated and committed to the store, then recorded in history.
Undo/redo select a snapshot by cursor and the store rehydrates the
live Employee objects from it.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .diagnostics import compute_diagnostics
from .domain_types import ActionRecord, AdjacencySnapshot, Employee, NotFoundError
from .hashing import canonical_hash
from .history import HistoryManager
from .registry import IdSequence, NodeRegistry
from .transitions import InvalidMoveError, apply_move
from .tree_store import TreeStore

logger = logging.getLogger(__name__)

BOOTSTRAP_LABEL = "bootstrap"


class OrgChartApp:
    """
    Stateful org chart with linear undo/redo.

    Wiring phase: ``hire`` / ``assign`` build the initial hierarchy and
    ``seal`` records it as history entry 0. ``move`` / ``undo`` / ``redo``
    are only available after sealing.
    """

    def __init__(
        self,
        root_name: str,
        id_sequence: IdSequence | None = None,
        max_history: Optional[int] = None,
    ) -> None:
        self._registry = NodeRegistry(id_sequence)
        self._store = TreeStore(self._registry)
        self._history = HistoryManager(max_entries=max_history)
        self._store.add_root(self._registry.register(root_name))

    # -- State access -------------------------------------------------------

    @property
    def registry(self) -> NodeRegistry:
        return self._registry

    @property
    def store(self) -> TreeStore:
        return self._store

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def ceo(self) -> Employee:
        return self._store.as_tree()

    # -- Wiring phase -------------------------------------------------------

    def hire(self, name: str) -> Employee:
        """Register an employee, not yet reporting to anyone."""
        if self._store.sealed:
            raise RuntimeError("hire() is only allowed before seal()")
        employee = self._registry.register(name)
        self._store.add_node(employee)
        return employee

    def assign(self, employee_id: int, supervisor_id: int) -> None:
        self._store.attach(employee_id, supervisor_id)

    def seal(self) -> None:
        """Validate the wired tree and record it as the bootstrap state."""
        self._store.seal()
        self._history.record(BOOTSTRAP_LABEL, self._store.snapshot())

    # -- Public API ---------------------------------------------------------

    def move(self, employee_id: int, supervisor_id: int) -> ActionRecord:
        self._require_sealed()
        try:
            new_adjacency, record = apply_move(
                self._store.snapshot(), employee_id, supervisor_id,
            )
        except InvalidMoveError as exc:
            logger.info("Rejected move %s -> %s: %s", employee_id, supervisor_id, exc)
            raise
        self._store.apply(new_adjacency)
        self._history.record(record.label, new_adjacency)
        return record

    def move_by_name(self, employee_name: str, supervisor_name: str) -> ActionRecord:
        """Convenience wrapper over move(); first name match wins."""
        employee = self._registry.resolve_by_name(employee_name)
        supervisor = self._registry.resolve_by_name(supervisor_name)
        return self.move(employee.id, supervisor.id)

    def undo(self) -> bool:
        """Step back one entry. Returns False (no-op) at the bootstrap state."""
        self._require_sealed()
        snapshot = self._history.undo()
        if snapshot is None:
            return False
        self._store.restore(snapshot)
        return True

    def redo(self) -> bool:
        """Step forward one entry. Returns False (no-op) at the newest state."""
        self._require_sealed()
        snapshot = self._history.redo()
        if snapshot is None:
            return False
        self._store.restore(snapshot)
        return True

    # -- Read side ----------------------------------------------------------

    def current_tree(self) -> Employee:
        """Root Employee with nested subordinates, for rendering."""
        return self._store.as_tree()

    def snapshot(self) -> AdjacencySnapshot:
        return self._store.snapshot()

    def state_hash(self) -> str:
        return canonical_hash(self._store.snapshot())

    def get_diagnostics(self) -> dict:
        return compute_diagnostics(self._store, self._history)

    # -- Internals ----------------------------------------------------------

    def _require_sealed(self) -> None:
        if not self._store.sealed:
            raise RuntimeError("Org chart not sealed — call seal() first")


def bootstrap(
    root_name: str,
    employee_names: Sequence[str],
    edges: Iterable[Tuple[str, str]],
    *,
    id_sequence: IdSequence | None = None,
    max_history: Optional[int] = None,
) -> OrgChartApp:
    """
    Build a sealed OrgChartApp.

    The root is registered first, then *employee_names* in order. *edges*
    are ``(supervisor_name, employee_name)`` pairs wired in order; a pair
    naming an unregistered employee on either side is skipped.
    Names resolve to their first registered match, so when two employees
    share a name only the first can be wired through *edges*.
    """
    app = OrgChartApp(root_name, id_sequence=id_sequence, max_history=max_history)
    for name in employee_names:
        app.hire(name)

    skipped: List[Tuple[str, str]] = []
    for supervisor_name, employee_name in edges:
        try:
            supervisor = app.registry.resolve_by_name(supervisor_name)
            employee = app.registry.resolve_by_name(employee_name)
        except NotFoundError as exc:
            logger.debug("Skipping edge %r -> %r: %s", supervisor_name, employee_name, exc)
            skipped.append((supervisor_name, employee_name))
            continue
        app.assign(employee.id, supervisor.id)

    app.seal()
    logger.info(
        "Bootstrapped org chart: %d employees, %d edge(s) skipped",
        len(app.registry), len(skipped),
    )
    return app
