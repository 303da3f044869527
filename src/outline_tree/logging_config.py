"""Logging configuration for outline-tree."""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Send loguru output to stderr.

    ``verbose`` shows the per-edit debug trail of the tree engine; ``quiet``
    keeps only errors. ``verbose`` wins if both are set.
    """
    logger.remove()
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")
