"""State machine for a single drag-and-drop gesture."""

from enum import StrEnum

from loguru import logger

from outline_tree.core.drop.planner import plan_drop
from outline_tree.core.tree.mutator import move
from outline_tree.models.node import DropPlan, Forest


class DragState(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING = "hovering"


class DragGesture:
    """Tracks one drag from start to drop.

    ``idle -> dragging -> (hovering)* -> idle``. Dropping with a valid plan
    applies the move; anything else cancels. Either way the gesture ends idle.
    """

    def __init__(self) -> None:
        self.source_id: str | None = None
        self.plan: DropPlan | None = None

    @property
    def state(self) -> DragState:
        if self.source_id is None:
            return DragState.IDLE
        if self.plan is None:
            return DragState.DRAGGING
        return DragState.HOVERING

    def start(self, source_id: str) -> None:
        self.source_id = source_id
        self.plan = None

    def hover(self, forest: Forest, target_id: str, offset: float) -> DropPlan | None:
        """Update the pending plan for the row under the pointer."""
        if self.source_id is None:
            return None
        self.plan = plan_drop(forest, self.source_id, target_id, offset)
        return self.plan

    def leave(self) -> None:
        """The pointer left the hovered row."""
        self.plan = None

    def cancel(self) -> None:
        self.source_id = None
        self.plan = None

    def drop(self, forest: Forest) -> Forest:
        """Finish the gesture, applying the pending move if there is one."""
        plan = self.plan
        self.cancel()
        if plan is None:
            logger.debug("Drag ended without a drop target")
            return forest
        return move(forest, plan.source_id, plan.target_id, plan.position)
