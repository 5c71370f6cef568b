from __future__ import annotations

"""Bounded undo history for the live forest.

This service is UI-agnostic and owns the live forest together with a stack of
prior snapshots. Every change to the live forest goes through :meth:`commit`,
which pushes the outgoing forest before installing the new one.

Design principles
-----------------
- No UI imports and no I/O (filesystem/console).
- Snapshots are immutable JSON blobs once stored; restoring one decodes a
  fresh set of nodes, so history never aliases the live forest.
- Memory usage controlled by a max_history policy (trim oldest).
- No redo: undoing discards the forest being replaced.
"""

from dataclasses import dataclass
import json
import logging
from typing import List, Optional

from site_builder.core.models import Forest
from site_builder.core.services.serialization_service import forest_from_data, forest_to_data

__all__ = ["UndoService", "DEFAULT_MAX_HISTORY"]

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 20


@dataclass(frozen=True)
class _Snapshot:
    """Immutable in-memory snapshot of a forest.

    Attributes
    ----------
    payload :
        Compact JSON encoding of the forest.
    roots :
        Number of root-level nodes, kept for diagnostics.
    """

    payload: str
    roots: int


class UndoService:
    """Own the live forest and its bounded snapshot history.

    Parameters
    ----------
    max_history : int, default=20
        Maximum number of snapshots to keep. Oldest entries are discarded
        when the capacity is exceeded. Values lower than 1 are coerced to 1.
    initial : Forest, optional
        Forest installed as live state without recording history.

    Examples
    --------
    >>> svc = UndoService(max_history=20)
    >>> svc.commit(new_forest)   # previous forest is now undoable
    >>> svc.undo()               # True, previous forest restored
    >>> svc.undo()               # False, history empty
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY, initial: Optional[Forest] = None) -> None:
        self._max_history: int = max(1, int(max_history))
        self._history: List[_Snapshot] = []
        self._current: Forest = list(initial or [])

    # --------------------------------------------------------------------- API

    @property
    def current(self) -> Forest:
        """The live forest (a fresh list; the nodes themselves are shared)."""
        return list(self._current)

    @property
    def max_history(self) -> int:
        return self._max_history

    def commit(self, forest: Forest) -> None:
        """Push the live forest onto the history and install *forest*.

        If the history exceeds max_history, the oldest snapshot is dropped.
        """
        self._history.append(self._create_snapshot(self._current))
        overflow = len(self._history) - self._max_history
        if overflow > 0:
            del self._history[0:overflow]
            logger.debug("Undo history trimmed by %d", overflow)
        self._current = list(forest)
        logger.debug("Commit roots=%d history=%d", len(self._current), len(self._history))

    def undo(self) -> bool:
        """Restore the most recent snapshot; return False when history is empty."""
        if not self._history:
            logger.debug("Undo noop: history empty")
            return False
        snap = self._history.pop()
        self._current = self._restore_snapshot(snap)
        logger.info("Undo OK: restored roots=%d history=%d", snap.roots, len(self._history))
        return True

    def can_undo(self) -> bool:
        """Return True if an undo operation is currently possible."""
        return bool(self._history)

    def depth(self) -> int:
        """Number of snapshots currently held."""
        return len(self._history)

    def reset(self, forest: Optional[Forest] = None) -> None:
        """Install *forest* as live state and drop all history."""
        self._history.clear()
        self._current = list(forest or [])

    def clear(self) -> None:
        """Clear the history, keeping the live forest."""
        self._history.clear()

    # --------------------------------------------------------------- Internals

    @staticmethod
    def _create_snapshot(forest: Forest) -> _Snapshot:
        payload = json.dumps(forest_to_data(forest), separators=(",", ":"), ensure_ascii=False)
        return _Snapshot(payload=payload, roots=len(forest))

    @staticmethod
    def _restore_snapshot(snap: _Snapshot) -> Forest:
        return forest_from_data(json.loads(snap.payload))
