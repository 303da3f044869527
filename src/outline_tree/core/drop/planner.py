"""Classify pointer positions during a drag into validated drop plans."""

from loguru import logger

from outline_tree.config import DROP_AFTER_THRESHOLD, DROP_BEFORE_THRESHOLD
from outline_tree.core.tree.navigation import find_node, is_descendant
from outline_tree.models.node import DropPlan, DropPosition, Forest


def classify_offset(offset: float) -> DropPosition:
    """Map a vertical offset within a row (0 = top, 1 = bottom) to a drop position.

    The top 30% means ``before``, the bottom 30% ``after``, the middle ``child``.
    """
    if offset < DROP_BEFORE_THRESHOLD:
        return DropPosition.BEFORE
    if offset > DROP_AFTER_THRESHOLD:
        return DropPosition.AFTER
    return DropPosition.CHILD


def row_offset(pointer_y: float, row_top: float, row_height: float) -> float:
    """Normalize a pointer y coordinate to an offset within a row."""
    if row_height <= 0:
        msg = f"Row height must be positive, got {row_height!r}"
        raise ValueError(msg)
    return (pointer_y - row_top) / row_height


def can_drop(forest: Forest, source_id: str, target_id: str) -> bool:
    """Check that dropping ``source_id`` on ``target_id`` would be a legal move."""
    if source_id == target_id:
        return False
    source = find_node(forest, source_id)
    if source is None or find_node(forest, target_id) is None:
        return False
    return not is_descendant(source, target_id)


def plan_drop(forest: Forest, source_id: str, target_id: str, offset: float) -> DropPlan | None:
    """Build a drop plan for hovering ``target_id`` at ``offset``.

    Returns None when the drop is illegal (self, own descendant, unknown ids),
    so an invalid target is never offered.
    """
    if not can_drop(forest, source_id, target_id):
        logger.debug("No drop plan for {} onto {}", source_id, target_id)
        return None
    return DropPlan(source_id=source_id, target_id=target_id, position=classify_offset(offset))
