"""Structural edits on an outline forest.

Every function takes a forest and returns a forest. Nothing is modified in
place: the path from the edited node up to the root list is rebuilt and every
other subtree is shared with the input. When an edit cannot apply (unknown id,
illegal move) the input object itself is returned, so ``result is forest``
tells the caller nothing changed.
"""

from collections.abc import Callable
from dataclasses import replace

from loguru import logger

from outline_tree.core.tree.navigation import find_node, is_descendant, locate, node_at
from outline_tree.core.tree.parser import new_node_id
from outline_tree.models.node import DropPosition, Forest, Node
from outline_tree.protocols import IdFactory

SiblingUpdate = Callable[[Forest], Forest]


def _replace_siblings(forest: Forest, parent_path: tuple[int, ...], update: SiblingUpdate) -> Forest:
    """Rebuild the forest with the sibling list under ``parent_path`` replaced.

    An empty ``parent_path`` addresses the root list.
    """
    if not parent_path:
        return update(forest)
    head, rest = parent_path[0], parent_path[1:]
    node = forest[head]
    updated = replace(node, children=_replace_siblings(node.children, rest, update))
    return (*forest[:head], updated, *forest[head + 1 :])


def _replace_node(forest: Forest, path: tuple[int, ...], update: Callable[[Node], Node]) -> Forest:
    index = path[-1]

    def apply(siblings: Forest) -> Forest:
        return (*siblings[:index], update(siblings[index]), *siblings[index + 1 :])

    return _replace_siblings(forest, path[:-1], apply)


def _insert_at(forest: Forest, parent_path: tuple[int, ...], index: int, node: Node) -> Forest:
    return _replace_siblings(
        forest, parent_path, lambda siblings: (*siblings[:index], node, *siblings[index:])
    )


def _remove_at(forest: Forest, path: tuple[int, ...]) -> Forest:
    index = path[-1]
    return _replace_siblings(
        forest, path[:-1], lambda siblings: (*siblings[:index], *siblings[index + 1 :])
    )


def _parent_id_at(forest: Forest, path: tuple[int, ...]) -> str | None:
    return node_at(forest, path[:-1]).id if len(path) > 1 else None


def _reroot(node: Node, depth: int, parent_id: str | None) -> Node:
    """Place a subtree at an absolute depth, fixing depth and parent on every node."""
    return replace(
        node,
        depth=depth,
        parent_id=parent_id,
        children=tuple(_reroot(child, depth + 1, node.id) for child in node.children),
    )


def _fresh_id(
    forest: Forest, node_id: str | None, id_factory: IdFactory | None
) -> str | None:
    """Pick the id for a new node; None if the requested id is already taken."""
    if node_id is None:
        return (id_factory or new_node_id)()
    if find_node(forest, node_id) is not None:
        logger.debug("Refusing to insert duplicate id {}", node_id)
        return None
    return node_id


def insert_sibling(
    forest: Forest,
    anchor_id: str,
    *,
    after: bool = True,
    node_id: str | None = None,
    id_factory: IdFactory | None = None,
) -> Forest:
    """Insert an empty node right before or after the anchor, at the anchor's level."""
    path = locate(forest, anchor_id)
    if path is None:
        return forest
    new_id = _fresh_id(forest, node_id, id_factory)
    if new_id is None:
        return forest
    anchor = node_at(forest, path)
    node = Node(id=new_id, text="", depth=anchor.depth, parent_id=_parent_id_at(forest, path))
    index = path[-1] + 1 if after else path[-1]
    return _insert_at(forest, path[:-1], index, node)


def insert_child(
    forest: Forest,
    parent_id: str,
    *,
    node_id: str | None = None,
    id_factory: IdFactory | None = None,
) -> Forest:
    """Append an empty node as the last child of ``parent_id`` and expand the parent."""
    path = locate(forest, parent_id)
    if path is None:
        return forest
    new_id = _fresh_id(forest, node_id, id_factory)
    if new_id is None:
        return forest
    parent = node_at(forest, path)
    child = Node(id=new_id, text="", depth=parent.depth + 1, parent_id=parent.id)
    return _replace_node(
        forest, path, lambda p: replace(p, children=(*p.children, child), expanded=True)
    )


def insert_parent_sibling(
    forest: Forest,
    anchor_id: str,
    *,
    node_id: str | None = None,
    id_factory: IdFactory | None = None,
) -> Forest:
    """Insert an empty node right after the anchor's parent, at the parent's level.

    Roots have no shallower level, so a root anchor is a no-op.
    """
    path = locate(forest, anchor_id)
    if path is None or len(path) == 1:
        return forest
    new_id = _fresh_id(forest, node_id, id_factory)
    if new_id is None:
        return forest
    parent_path = path[:-1]
    parent = node_at(forest, parent_path)
    node = Node(
        id=new_id, text="", depth=parent.depth, parent_id=_parent_id_at(forest, parent_path)
    )
    return _insert_at(forest, parent_path[:-1], parent_path[-1] + 1, node)


def delete_subtree(forest: Forest, node_id: str) -> Forest:
    """Remove a node and everything below it."""
    path = locate(forest, node_id)
    if path is None:
        return forest
    return _remove_at(forest, path)


def set_text(forest: Forest, node_id: str, text: str) -> Forest:
    """Replace a node's text.

    Text that is empty after trimming deletes the node instead: an entry left
    blank is treated as a cancelled creation. This also deletes an existing
    node whose text the user clears.
    """
    if not text.strip():
        return delete_subtree(forest, node_id)
    path = locate(forest, node_id)
    if path is None:
        return forest
    if node_at(forest, path).text == text:
        return forest
    return _replace_node(forest, path, lambda n: replace(n, text=text))


def move(
    forest: Forest,
    source_id: str,
    target_id: str,
    position: DropPosition | str,
) -> Forest:
    """Move the subtree rooted at ``source_id`` relative to ``target_id``.

    ``before``/``after`` place it beside the target under the target's parent
    (or in the root list). ``child`` appends it to the target's children and
    expands the target. Every node in the moved subtree gets its depth
    recomputed.

    Dropping a node on itself or on one of its own descendants is refused.
    """
    position = DropPosition(position)
    if source_id == target_id:
        return forest
    source_path = locate(forest, source_id)
    if source_path is None or locate(forest, target_id) is None:
        return forest

    source = node_at(forest, source_path)
    if is_descendant(source, target_id):
        logger.debug("Refusing to move {} into its own descendant {}", source_id, target_id)
        return forest

    detached = _remove_at(forest, source_path)
    target_path = locate(detached, target_id)
    assert target_path is not None  # the target is not inside the removed subtree
    target = node_at(detached, target_path)

    if position is DropPosition.CHILD:
        moved = _reroot(source, target.depth + 1, target.id)
        result = _replace_node(
            detached,
            target_path,
            lambda t: replace(t, children=(*t.children, moved), expanded=True),
        )
    else:
        moved = _reroot(source, target.depth, _parent_id_at(detached, target_path))
        index = target_path[-1] + 1 if position is DropPosition.AFTER else target_path[-1]
        result = _insert_at(detached, target_path[:-1], index, moved)

    # Dropping a node back into its own slot rebuilds an equal forest.
    if result == forest:
        return forest
    return result


def indent(forest: Forest, node_id: str) -> Forest:
    """Make a node the last child of its previous sibling."""
    path = locate(forest, node_id)
    if path is None or path[-1] == 0:
        return forest
    previous = node_at(forest, (*path[:-1], path[-1] - 1))
    return move(forest, node_id, previous.id, DropPosition.CHILD)


def outdent(forest: Forest, node_id: str) -> Forest:
    """Move a node out to sit right after its parent."""
    path = locate(forest, node_id)
    if path is None or len(path) == 1:
        return forest
    parent = node_at(forest, path[:-1])
    return move(forest, node_id, parent.id, DropPosition.AFTER)


def move_up(forest: Forest, node_id: str) -> Forest:
    """Swap a node with its previous sibling."""
    path = locate(forest, node_id)
    if path is None or path[-1] == 0:
        return forest
    previous = node_at(forest, (*path[:-1], path[-1] - 1))
    return move(forest, node_id, previous.id, DropPosition.BEFORE)


def move_down(forest: Forest, node_id: str) -> Forest:
    """Swap a node with its next sibling."""
    path = locate(forest, node_id)
    if path is None:
        return forest
    siblings = node_at(forest, path[:-1]).children if len(path) > 1 else forest
    if path[-1] == len(siblings) - 1:
        return forest
    return move(forest, node_id, siblings[path[-1] + 1].id, DropPosition.AFTER)
