"""
Org Chart Kernel — Node Registry

Owns every Employee record, keyed by id. Records are created once and
never removed; undo/redo only rewires adjacency, so ids stay stable
across history traversal.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List

from .domain_types import Employee, NotFoundError

logger = logging.getLogger(__name__)


class IdSequence:
    """Local monotonically increasing id source. No global counter."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def peek(self) -> int:
        """Return the id the next allocate() call will hand out."""
        return self._next

    def allocate(self) -> int:
        value = self._next
        self._next += 1
        return value


class NodeRegistry:
    """
    Registry of employees in registration order.

    Name lookup is a convenience: display names are not unique and the
    first registered match wins.
    """

    def __init__(self, id_sequence: IdSequence | None = None) -> None:
        self._ids = id_sequence if id_sequence is not None else IdSequence()
        self._employees: Dict[int, Employee] = {}

    # -- Mutation -----------------------------------------------------------

    def register(self, name: str) -> Employee:
        """Allocate a fresh id and create the record."""
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Employee name must be a non-empty string, got {name!r}")

        employee_id = self._ids.allocate()
        if employee_id in self._employees:
            raise ValueError(f"Employee id collision: {employee_id} already registered")

        employee = Employee(id=employee_id, name=name)
        self._employees[employee_id] = employee
        logger.debug("Registered employee %d (%s)", employee_id, name)
        return employee

    # -- Lookup -------------------------------------------------------------

    def resolve(self, employee_id: int) -> Employee:
        employee = self._employees.get(employee_id)
        if employee is None:
            raise NotFoundError("id", employee_id)
        return employee

    def resolve_by_name(self, name: str) -> Employee:
        """Return the first registered employee called *name*."""
        for employee in self._employees.values():
            if employee.name == name:
                return employee
        raise NotFoundError("name", name)

    def find_all_by_name(self, name: str) -> List[Employee]:
        return [e for e in self._employees.values() if e.name == name]

    def ids(self) -> List[int]:
        return list(self._employees)

    def __contains__(self, employee_id: object) -> bool:
        return employee_id in self._employees

    def __len__(self) -> int:
        return len(self._employees)

    def __iter__(self) -> Iterator[Employee]:
        return iter(list(self._employees.values()))
