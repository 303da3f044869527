"""Editing session: the current outline plus its undo history."""

from collections.abc import Callable

from loguru import logger

from outline_tree.config import resolve_history_limit
from outline_tree.core.history import History
from outline_tree.core.tree import expansion, mutator
from outline_tree.core.tree.navigation import flatten
from outline_tree.core.tree.parser import new_node_id, parse_text, serialize_tree
from outline_tree.models.node import DropPosition, FlatEntry, Forest
from outline_tree.protocols import IdFactory


class OutlineSession:
    """Applies edits to an outline and records each change in the history.

    Edits that leave the outline unchanged (unknown ids, refused moves) are
    not recorded.
    """

    def __init__(
        self,
        forest: Forest = (),
        *,
        history_limit: int | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self.id_factory: IdFactory = id_factory or new_node_id
        self.history: History[Forest] = History(history_limit or resolve_history_limit())
        self.history.push(forest)
        self._forest = forest

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        history_limit: int | None = None,
        id_factory: IdFactory | None = None,
    ) -> "OutlineSession":
        make_id = id_factory or new_node_id
        return cls(
            parse_text(text, id_factory=make_id), history_limit=history_limit, id_factory=make_id
        )

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def text(self) -> str:
        return serialize_tree(self._forest)

    def flatten(self) -> tuple[FlatEntry, ...]:
        return flatten(self._forest)

    def _apply(self, name: str, edit: Callable[[Forest], Forest]) -> bool:
        updated = edit(self._forest)
        if updated is self._forest:
            logger.debug("{}: no change", name)
            return False
        self._forest = updated
        self.history.push(updated)
        logger.debug("{}: recorded snapshot {}", name, self.history.cursor)
        return True

    def _insert(self, name: str, edit: Callable[[Forest, str], Forest]) -> str | None:
        node_id = self.id_factory()
        if self._apply(name, lambda f: edit(f, node_id)):
            return node_id
        return None

    # --- Snapshot replacement (raw text view) ---

    def replace_text(self, text: str) -> bool:
        """Replace the whole outline with the parse of ``text``.

        Ids are regenerated and every node comes back expanded.
        """
        if text == self.text:
            return False
        parsed = parse_text(text, id_factory=self.id_factory)
        return self._apply("replace_text", lambda _: parsed)

    # --- Structural edits ---

    def insert_sibling(self, anchor_id: str, *, after: bool = True) -> str | None:
        """Insert an empty sibling of the anchor and return its id."""
        return self._insert(
            "insert_sibling",
            lambda f, nid: mutator.insert_sibling(f, anchor_id, after=after, node_id=nid),
        )

    def insert_child(self, parent_id: str) -> str | None:
        return self._insert(
            "insert_child", lambda f, nid: mutator.insert_child(f, parent_id, node_id=nid)
        )

    def insert_parent_sibling(self, anchor_id: str) -> str | None:
        return self._insert(
            "insert_parent_sibling",
            lambda f, nid: mutator.insert_parent_sibling(f, anchor_id, node_id=nid),
        )

    def set_text(self, node_id: str, text: str) -> bool:
        return self._apply("set_text", lambda f: mutator.set_text(f, node_id, text))

    def delete(self, node_id: str) -> bool:
        return self._apply("delete", lambda f: mutator.delete_subtree(f, node_id))

    def move(self, source_id: str, target_id: str, position: DropPosition | str) -> bool:
        return self._apply("move", lambda f: mutator.move(f, source_id, target_id, position))

    def indent(self, node_id: str) -> bool:
        return self._apply("indent", lambda f: mutator.indent(f, node_id))

    def outdent(self, node_id: str) -> bool:
        return self._apply("outdent", lambda f: mutator.outdent(f, node_id))

    def move_up(self, node_id: str) -> bool:
        return self._apply("move_up", lambda f: mutator.move_up(f, node_id))

    def move_down(self, node_id: str) -> bool:
        return self._apply("move_down", lambda f: mutator.move_down(f, node_id))

    def commit_drop(self, edit: Callable[[Forest], Forest]) -> bool:
        """Record the result of a finished drag, e.g. ``session.commit_drop(gesture.drop)``."""
        return self._apply("drop", edit)

    # --- Expansion ---

    def toggle(self, node_id: str) -> bool:
        return self._apply("toggle", lambda f: expansion.toggle_expanded(f, node_id))

    def toggle_depth(self, depth: int) -> bool:
        return self._apply("toggle_depth", lambda f: expansion.toggle_depth(f, depth))

    def expand_all(self) -> bool:
        return self._apply("expand_all", expansion.expand_all)

    def collapse_all(self) -> bool:
        return self._apply("collapse_all", expansion.collapse_all)

    # --- History ---

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self._forest = snapshot
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self._forest = snapshot
        return True
