"""Tests for drop planning and the drag gesture state machine."""

import pytest

from outline_tree.core.drop.gesture import DragGesture, DragState
from outline_tree.core.drop.planner import can_drop, classify_offset, plan_drop, row_offset
from outline_tree.core.tree.navigation import find_node
from outline_tree.core.tree.parser import parse_text
from outline_tree.models.node import DropPlan, DropPosition, Forest
from tests.unit.fakes import CountingIds, by_text, texts


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (0.0, DropPosition.BEFORE),
        (0.29, DropPosition.BEFORE),
        (0.3, DropPosition.CHILD),
        (0.5, DropPosition.CHILD),
        (0.7, DropPosition.CHILD),
        (0.71, DropPosition.AFTER),
        (1.0, DropPosition.AFTER),
    ],
)
def test_classify_offset(offset: float, expected: DropPosition) -> None:
    assert classify_offset(offset) is expected


def test_row_offset_normalizes_pointer() -> None:
    assert row_offset(115, 100, 20) == pytest.approx(0.75)
    with pytest.raises(ValueError):
        row_offset(5, 0, 0)


def test_can_drop_rejects_self_and_descendants(nested_forest: Forest) -> None:
    a = by_text(nested_forest, "A")
    assert not can_drop(nested_forest, a.id, a.id)
    assert not can_drop(nested_forest, a.id, by_text(nested_forest, "Z").id)
    assert not can_drop(nested_forest, a.id, "missing")
    assert can_drop(nested_forest, by_text(nested_forest, "Z").id, a.id)


def test_plan_drop_returns_plan_for_valid_target(nested_forest: Forest) -> None:
    d = by_text(nested_forest, "D")
    a = by_text(nested_forest, "A")
    plan = plan_drop(nested_forest, d.id, a.id, 0.1)
    assert plan == DropPlan(source_id=d.id, target_id=a.id, position=DropPosition.BEFORE)


def test_plan_drop_never_offers_illegal_target(nested_forest: Forest) -> None:
    a = by_text(nested_forest, "A")
    for offset in (0.1, 0.5, 0.9):
        assert plan_drop(nested_forest, a.id, by_text(nested_forest, "X").id, offset) is None
        assert plan_drop(nested_forest, a.id, a.id, offset) is None


def test_gesture_starts_idle() -> None:
    gesture = DragGesture()
    assert gesture.state is DragState.IDLE
    assert gesture.hover((), "x", 0.5) is None


def test_gesture_commit_applies_move(ids: CountingIds) -> None:
    forest = parse_text("A\nC\n\tX\nD", id_factory=ids)
    c = by_text(forest, "C")
    gesture = DragGesture()

    gesture.start(c.id)
    assert gesture.state is DragState.DRAGGING
    plan = gesture.hover(forest, by_text(forest, "A").id, 0.1)
    assert plan is not None
    assert gesture.state is DragState.HOVERING

    result = gesture.drop(forest)
    assert texts(result) == ["C", "A", "D"]
    assert find_node(result, c.id).children[0].depth == 1
    assert gesture.state is DragState.IDLE


def test_gesture_invalid_hover_clears_pending_plan(nested_forest: Forest) -> None:
    a = by_text(nested_forest, "A")
    gesture = DragGesture()
    gesture.start(a.id)
    gesture.hover(nested_forest, by_text(nested_forest, "D").id, 0.5)
    assert gesture.hover(nested_forest, by_text(nested_forest, "X").id, 0.5) is None
    assert gesture.state is DragState.DRAGGING
    assert gesture.drop(nested_forest) is nested_forest
    assert gesture.state is DragState.IDLE


def test_gesture_leave_and_cancel(nested_forest: Forest) -> None:
    d = by_text(nested_forest, "D")
    gesture = DragGesture()
    gesture.start(d.id)
    gesture.hover(nested_forest, by_text(nested_forest, "A").id, 0.5)
    gesture.leave()
    assert gesture.state is DragState.DRAGGING
    gesture.cancel()
    assert gesture.state is DragState.IDLE
    assert gesture.drop(nested_forest) is nested_forest
