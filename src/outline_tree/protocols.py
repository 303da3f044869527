"""Protocols for dependency injection in the tree engine."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IdFactory(Protocol):
    """Protocol for node id generators."""

    def __call__(self) -> str:
        """Return a fresh id that has never been handed out before."""
        ...
