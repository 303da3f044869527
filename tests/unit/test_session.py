"""Tests for the editing session: edits recorded in history, undo and redo."""

from outline_tree.core.drop.gesture import DragGesture
from outline_tree.core.tree.navigation import find_node, iter_nodes
from outline_tree.session import OutlineSession
from tests.unit.conftest import NESTED_TEXT, SIMPLE_TEXT
from tests.unit.fakes import CountingIds, by_text, texts


def _session(text: str = SIMPLE_TEXT, **kwargs) -> OutlineSession:
    return OutlineSession.from_text(text, id_factory=CountingIds(), **kwargs)


def test_from_text_records_initial_snapshot() -> None:
    session = _session()
    assert session.text == SIMPLE_TEXT
    assert len(session.history) == 1
    assert not session.undo()


def test_example_insert_child_then_set_text() -> None:
    session = _session()
    a = by_text(session.forest, "A")

    new_id = session.insert_child(a.id)
    assert new_id == "n5"
    assert session.set_text(new_id, "B5")
    assert session.text == "A\n\tB\n\tC\n\tB5\nD"
    assert len(session.history) == 3


def test_noop_edits_do_not_push_snapshots() -> None:
    session = _session()
    a = by_text(session.forest, "A")
    before = len(session.history)

    assert session.insert_sibling("missing") is None
    assert session.insert_child("missing") is None
    assert session.insert_parent_sibling(a.id) is None
    assert not session.set_text(a.id, "A")
    assert not session.delete("missing")
    assert not session.move(a.id, a.id, "child")
    assert not session.move(a.id, by_text(session.forest, "B").id, "after")
    assert not session.indent(a.id)
    assert not session.outdent(a.id)
    assert not session.move_up(a.id)
    assert not session.move_down(by_text(session.forest, "D").id)
    assert not session.toggle_depth(5)
    assert len(session.history) == before


def test_each_successful_edit_pushes_exactly_once() -> None:
    session = _session()
    d = by_text(session.forest, "D")

    assert session.indent(d.id)
    assert len(session.history) == 2
    assert session.outdent(d.id)
    assert len(session.history) == 3
    assert session.move_up(d.id)
    assert len(session.history) == 4
    assert texts(session.forest) == ["D", "A"]


def test_undo_then_redo_restores_identical_tree() -> None:
    session = _session(NESTED_TEXT)
    b = by_text(session.forest, "B")
    session.toggle(b.id)
    session.move(by_text(session.forest, "D").id, by_text(session.forest, "Z").id, "child")
    after_move = session.forest

    assert session.undo()
    assert session.forest != after_move
    assert session.redo()
    assert session.forest == after_move
    assert not find_node(session.forest, b.id).expanded


def test_undo_all_the_way_returns_initial_tree() -> None:
    session = _session()
    initial = session.forest
    session.insert_sibling(by_text(session.forest, "D").id)
    session.delete(by_text(session.forest, "B").id)
    session.collapse_all()

    while session.undo():
        pass
    assert session.forest is initial


def test_edit_after_undo_discards_redo() -> None:
    session = _session()
    session.delete(by_text(session.forest, "D").id)
    session.undo()
    session.delete(by_text(session.forest, "B").id)
    assert not session.redo()
    assert texts(session.forest) == ["A", "D"]


def test_insert_sibling_returns_new_id() -> None:
    session = _session()
    b = by_text(session.forest, "B")
    new_id = session.insert_sibling(b.id, after=False)
    assert new_id is not None
    assert session.forest[0].children[0].id == new_id


def test_insert_parent_sibling_returns_new_id() -> None:
    session = _session()
    new_id = session.insert_parent_sibling(by_text(session.forest, "B").id)
    assert [n.id for n in session.forest][1] == new_id


def test_clearing_new_node_text_cancels_creation() -> None:
    session = _session()
    new_id = session.insert_sibling(by_text(session.forest, "D").id)
    assert session.set_text(new_id, "  ")
    assert session.text == SIMPLE_TEXT


def test_replace_text_parses_and_records() -> None:
    session = _session()
    assert session.replace_text("X\n\tY")
    assert texts(session.forest) == ["X"]
    assert len(session.history) == 2
    assert not session.replace_text("X\n\tY")
    assert session.undo()
    assert session.text == SIMPLE_TEXT


def test_expansion_edits_are_recorded() -> None:
    session = _session(NESTED_TEXT)
    assert session.collapse_all()
    assert [e.node.text for e in session.flatten()] == ["A", "D"]
    assert not session.collapse_all()
    assert session.expand_all()
    assert session.toggle_depth(1)
    assert [e.node.text for e in session.flatten()] == ["A", "B", "C", "D"]


def test_commit_drop_records_gesture_result() -> None:
    session = _session("A\nC\n\tX\nD")
    gesture = DragGesture()
    gesture.start(by_text(session.forest, "C").id)
    gesture.hover(session.forest, by_text(session.forest, "A").id, 0.2)

    assert session.commit_drop(gesture.drop)
    assert texts(session.forest) == ["C", "A", "D"]
    assert len(session.history) == 2


def test_commit_drop_without_target_records_nothing() -> None:
    session = _session()
    gesture = DragGesture()
    gesture.start(by_text(session.forest, "A").id)
    assert not session.commit_drop(gesture.drop)
    assert len(session.history) == 1


def test_history_limit_is_applied() -> None:
    session = _session(history_limit=3)
    d = by_text(session.forest, "D")
    for i in range(5):
        session.set_text(d.id, f"D{i}")
    assert len(session.history) == 3
    while session.undo():
        pass
    assert by_text(session.forest, "D2").id == d.id


def test_ids_stay_unique_across_edits() -> None:
    session = _session()
    a = by_text(session.forest, "A")
    for _ in range(3):
        session.insert_child(a.id)
        session.insert_sibling(a.id)
    node_ids = [n.id for n in iter_nodes(session.forest)]
    assert len(node_ids) == len(set(node_ids))
