"""Bounded undo/redo history over whole-document snapshots."""

from typing import Generic, TypeVar

from loguru import logger

from outline_tree.config import HISTORY_LIMIT

T = TypeVar("T")


class History(Generic[T]):
    """A linear sequence of snapshots with a cursor.

    Pushing after an undo discards the redo branch. Once more than
    ``capacity`` snapshots are held the oldest is evicted, so the most recent
    ``capacity`` states are always available.
    """

    def __init__(self, capacity: int = HISTORY_LIMIT) -> None:
        if capacity < 1:
            msg = f"History capacity must be positive, got {capacity!r}"
            raise ValueError(msg)
        self.capacity = capacity
        self._snapshots: list[T] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> T | None:
        if self._cursor < 0:
            return None
        return self._snapshots[self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def push(self, snapshot: T) -> None:
        del self._snapshots[self._cursor + 1 :]
        self._snapshots.append(snapshot)
        self._cursor += 1
        if len(self._snapshots) > self.capacity:
            evicted = len(self._snapshots) - self.capacity
            del self._snapshots[:evicted]
            self._cursor -= evicted
            logger.debug("History full, evicted {} oldest snapshot(s)", evicted)

    def undo(self) -> T | None:
        """Step back one snapshot and return it, or None at the oldest one."""
        if not self.can_undo:
            return None
        self._cursor -= 1
        return self._snapshots[self._cursor]

    def redo(self) -> T | None:
        """Step forward one snapshot and return it, or None at the newest one."""
        if not self.can_redo:
            return None
        self._cursor += 1
        return self._snapshots[self._cursor]

    def reset(self, snapshot: T) -> None:
        """Drop everything and start over from a single snapshot."""
        self._snapshots = [snapshot]
        self._cursor = 0
