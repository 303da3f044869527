"""Expand and collapse nodes, one at a time, per level, or all at once.

The forest-returning functions edit the ``expanded`` flag stored on the nodes.
The ``*_ids`` helpers work on a separate set of expanded ids for callers that
keep expansion outside the tree and pass it to ``flatten``.
"""

from collections.abc import Callable, Collection
from dataclasses import replace

from outline_tree.core.tree.navigation import flatten, iter_nodes, locate, node_at
from outline_tree.models.node import Forest, Node


def _map_nodes(forest: Forest, update: Callable[[Node], Node]) -> Forest:
    """Apply ``update`` to every node, keeping untouched subtrees shared."""

    def visit(node: Node) -> Node:
        children = tuple(visit(c) for c in node.children)
        if any(a is not b for a, b in zip(children, node.children)):
            node = replace(node, children=children)
        return update(node)

    updated = tuple(visit(root) for root in forest)
    if all(a is b for a, b in zip(updated, forest)):
        return forest
    return updated


def set_expanded(forest: Forest, node_id: str, expanded: bool) -> Forest:
    path = locate(forest, node_id)
    if path is None or node_at(forest, path).expanded == expanded:
        return forest
    return _map_nodes(
        forest, lambda n: replace(n, expanded=expanded) if n.id == node_id else n
    )


def toggle_expanded(forest: Forest, node_id: str) -> Forest:
    path = locate(forest, node_id)
    if path is None:
        return forest
    return set_expanded(forest, node_id, not node_at(forest, path).expanded)


def _set_all(forest: Forest, ids: Collection[str], expanded: bool) -> Forest:
    def update(node: Node) -> Node:
        if node.id in ids and node.expanded != expanded:
            return replace(node, expanded=expanded)
        return node

    return _map_nodes(forest, update)


def expand_all(forest: Forest) -> Forest:
    """Expand every node that has children."""
    return _set_all(forest, expandable_ids(forest), True)


def collapse_all(forest: Forest) -> Forest:
    """Collapse every node that has children."""
    return _set_all(forest, expandable_ids(forest), False)


def toggle_depth(forest: Forest, depth: int) -> Forest:
    """Toggle a whole visible level.

    If every visible node with children at ``depth`` is expanded, collapse them
    all; otherwise expand them all.
    """
    level = [e.node for e in flatten(forest) if e.depth == depth and e.has_children]
    if not level:
        return forest
    all_expanded = all(node.expanded for node in level)
    return _set_all(forest, {node.id for node in level}, not all_expanded)


def expandable_ids(forest: Forest) -> frozenset[str]:
    """Ids of all nodes that have children."""
    return frozenset(node.id for node in iter_nodes(forest) if node.has_children)


def toggle_id(expanded_ids: Collection[str], node_id: str) -> frozenset[str]:
    ids = set(expanded_ids)
    ids.symmetric_difference_update({node_id})
    return frozenset(ids)


def toggle_depth_ids(forest: Forest, expanded_ids: Collection[str], depth: int) -> frozenset[str]:
    """Id-set counterpart of :func:`toggle_depth`."""
    level = {
        e.id for e in flatten(forest, expanded_ids) if e.depth == depth and e.has_children
    }
    if not level:
        return frozenset(expanded_ids)
    if level <= set(expanded_ids):
        return frozenset(expanded_ids) - level
    return frozenset(expanded_ids) | level
