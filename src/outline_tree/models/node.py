"""Domain models for the outline tree."""

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class Node:
    """A single outline entry.

    ``parent_id`` is a back-reference by id only; ownership flows through
    ``children``.
    """

    id: str
    text: str
    depth: int
    children: tuple["Node", ...] = ()
    expanded: bool = True
    parent_id: str | None = None

    @property
    def has_children(self) -> bool:
        return bool(self.children)


# The whole document: an ordered sequence of root nodes.
Forest = tuple[Node, ...]


@dataclass(frozen=True)
class FlatEntry:
    """A node at its position in the visible flattening."""

    node: Node
    index: int
    is_expanded: bool

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def depth(self) -> int:
        return self.node.depth

    @property
    def has_children(self) -> bool:
        return self.node.has_children


class DropPosition(StrEnum):
    """Where a dragged subtree lands relative to the hover target."""

    BEFORE = "before"
    AFTER = "after"
    CHILD = "child"


@dataclass(frozen=True)
class DropPlan:
    """A validated drop candidate."""

    source_id: str
    target_id: str
    position: DropPosition
