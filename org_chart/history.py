"""
Org Chart Kernel — History Manager

Linear, cursor-addressed log of ``(label, snapshot)`` entries.

  - The first record() seeds index 0 (bootstrap); the cursor stays at 0.
  - Every later record() drops entries after the cursor, appends, and
    moves the cursor to the new last index.
  - undo()/redo() shift the cursor by one and return a copy of the
    snapshot now under it, or None at either end.

Snapshots are deep-copied on the way in and on the way out, so neither
the live tree nor a caller can corrupt stored history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .domain_types import AdjacencySnapshot, copy_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    label: str
    snapshot: AdjacencySnapshot


class HistoryManager:
    def __init__(self, max_entries: Optional[int] = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._max_entries = max_entries
        self._entries: List[HistoryEntry] = []
        self._cursor = 0

    # -- State access -------------------------------------------------------

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)

    def labels(self) -> List[str]:
        return [e.label for e in self._entries]

    def current(self) -> AdjacencySnapshot:
        if not self._entries:
            raise RuntimeError("History is empty; record the bootstrap state first")
        return copy_snapshot(self._entries[self._cursor].snapshot)

    def entries(self) -> List[HistoryEntry]:
        return [HistoryEntry(e.label, copy_snapshot(e.snapshot)) for e in self._entries]

    # -- Transitions --------------------------------------------------------

    def record(self, label: object, snapshot: AdjacencySnapshot) -> None:
        entry = HistoryEntry(label=str(label), snapshot=copy_snapshot(snapshot))

        if not self._entries:
            self._entries.append(entry)
            logger.debug("History seeded with %r", entry.label)
            return

        dropped = len(self._entries) - (self._cursor + 1)
        del self._entries[self._cursor + 1:]
        self._entries.append(entry)
        self._cursor = len(self._entries) - 1
        if dropped:
            logger.debug("Discarded %d redo entr(ies) before %r", dropped, entry.label)
        self._enforce_cap()

    def undo(self) -> Optional[AdjacencySnapshot]:
        if not self.can_undo:
            return None
        self._cursor -= 1
        logger.debug("Undo -> cursor %d", self._cursor)
        return copy_snapshot(self._entries[self._cursor].snapshot)

    def redo(self) -> Optional[AdjacencySnapshot]:
        if not self.can_redo:
            return None
        self._cursor += 1
        logger.debug("Redo -> cursor %d", self._cursor)
        return copy_snapshot(self._entries[self._cursor].snapshot)

    # -- Internals ----------------------------------------------------------

    def _enforce_cap(self) -> None:
        if self._max_entries is None:
            return
        overflow = len(self._entries) - self._max_entries
        if overflow > 0:
            del self._entries[:overflow]
            self._cursor -= overflow
