"""Tree engine for tab-indented outlines."""

from outline_tree.core.history import History
from outline_tree.core.tree.parser import parse_text, serialize_tree
from outline_tree.models.node import DropPlan, DropPosition, FlatEntry, Forest, Node
from outline_tree.session import OutlineSession

__all__ = [
    "DropPlan",
    "DropPosition",
    "FlatEntry",
    "Forest",
    "History",
    "Node",
    "OutlineSession",
    "parse_text",
    "serialize_tree",
]
