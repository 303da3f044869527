"""Configuration constants for outline-tree."""

import os

from loguru import logger

# Number of snapshots kept by the undo history.
HISTORY_LIMIT: int = 50

# Vertical pointer offset (0 = top of row, 1 = bottom) separating drop zones.
DROP_BEFORE_THRESHOLD: float = 0.3
DROP_AFTER_THRESHOLD: float = 0.7

# One of these per level of depth in the text form.
INDENT_CHAR: str = "\t"

HISTORY_LIMIT_ENV = "OUTLINE_TREE_HISTORY_LIMIT"


def resolve_history_limit() -> int:
    """Return the history capacity, honouring the environment override if valid."""
    raw = os.environ.get(HISTORY_LIMIT_ENV)
    if raw is None:
        return HISTORY_LIMIT
    try:
        value = int(raw)
    except ValueError:
        logger.debug("Ignoring non-integer {}={!r}", HISTORY_LIMIT_ENV, raw)
        return HISTORY_LIMIT
    if value < 1:
        logger.debug("Ignoring non-positive {}={!r}", HISTORY_LIMIT_ENV, raw)
        return HISTORY_LIMIT
    return value
