"""Tree navigation: visible flattening, neighbours, lookups, ancestry."""

from collections import Counter
from collections.abc import Collection, Iterator, Sequence

from outline_tree.models.node import FlatEntry, Forest, Node


def iter_nodes(forest: Forest) -> Iterator[Node]:
    """Yield every node in pre-order, ignoring expansion."""
    for root in forest:
        yield root
        yield from iter_nodes(root.children)


def flatten(forest: Forest, expanded_ids: Collection[str] | None = None) -> tuple[FlatEntry, ...]:
    """Return the visible pre-order linearization of the forest.

    A node's children are emitted only when the node is expanded. Expansion is
    read from ``expanded_ids`` when given, otherwise from each node's own
    ``expanded`` flag.
    """
    result: list[FlatEntry] = []

    def walk(node: Node) -> None:
        is_expanded = node.id in expanded_ids if expanded_ids is not None else node.expanded
        result.append(FlatEntry(node=node, index=len(result), is_expanded=is_expanded))
        if is_expanded:
            for child in node.children:
                walk(child)

    for root in forest:
        walk(root)
    return tuple(result)


def next_visible(flat: Sequence[FlatEntry], index: int) -> FlatEntry | None:
    if index < 0 or index >= len(flat) - 1:
        return None
    return flat[index + 1]


def prev_visible(flat: Sequence[FlatEntry], index: int) -> FlatEntry | None:
    if index <= 0 or index >= len(flat):
        return None
    return flat[index - 1]


def next_at_same_depth(flat: Sequence[FlatEntry], index: int, depth: int) -> FlatEntry | None:
    """Find the first visible entry after ``index`` whose depth equals ``depth``.

    The scan is by displayed depth, not by parent, so it may cross into a
    different parent's subtree.
    """
    if index < 0 or index >= len(flat):
        return None
    for entry in flat[index + 1 :]:
        if entry.depth == depth:
            return entry
    return None


def prev_at_same_depth(flat: Sequence[FlatEntry], index: int, depth: int) -> FlatEntry | None:
    """Find the closest visible entry before ``index`` whose depth equals ``depth``."""
    if index < 0 or index >= len(flat):
        return None
    for i in range(index - 1, -1, -1):
        if flat[i].depth == depth:
            return flat[i]
    return None


def find_visible_index(flat: Sequence[FlatEntry], node_id: str) -> int | None:
    """Return the position of ``node_id`` in the flattening, or None if hidden/absent."""
    for entry in flat:
        if entry.id == node_id:
            return entry.index
    return None


def is_descendant(ancestor: Node, node_id: str) -> bool:
    """Check whether ``node_id`` is somewhere below ``ancestor`` (not the node itself)."""
    for child in ancestor.children:
        if child.id == node_id or is_descendant(child, node_id):
            return True
    return False


def locate(forest: Forest, node_id: str) -> tuple[int, ...] | None:
    """Return the index path from the root list down to ``node_id``.

    ``(2, 0)`` means "first child of the third root". None when absent.
    """
    for i, node in enumerate(forest):
        if node.id == node_id:
            return (i,)
        sub = locate(node.children, node_id)
        if sub is not None:
            return (i, *sub)
    return None


def node_at(forest: Forest, path: Sequence[int]) -> Node:
    """Return the node at an index path produced by :func:`locate`."""
    siblings = forest
    node = siblings[path[0]]
    for i in path[1:]:
        node = node.children[i]
    return node


def find_node(forest: Forest, node_id: str) -> Node | None:
    path = locate(forest, node_id)
    return node_at(forest, path) if path is not None else None


def find_parent(forest: Forest, node_id: str) -> Node | None:
    """Return the enclosing node of ``node_id``; None for roots and absent ids."""
    path = locate(forest, node_id)
    if path is None or len(path) == 1:
        return None
    return node_at(forest, path[:-1])


def build_node_index(forest: Forest) -> dict[str, Node]:
    """Map every id in the forest to its node."""
    return {node.id: node for node in iter_nodes(forest)}


def breadcrumbs(forest: Forest, node_id: str) -> tuple[Node, ...]:
    """Get the ancestors of a node, ordered from root to immediate parent.

    Returns an empty tuple for roots and for absent ids.
    """
    path = locate(forest, node_id)
    if path is None:
        return ()
    return tuple(node_at(forest, path[:i]) for i in range(1, len(path)))


def depth_counts(flat: Sequence[FlatEntry]) -> dict[int, int]:
    """Count visible entries per depth."""
    return dict(sorted(Counter(entry.depth for entry in flat).items()))


def max_depth(flat: Sequence[FlatEntry]) -> int:
    return max((entry.depth for entry in flat), default=0)
