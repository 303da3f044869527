"""Convert tab-indented text to an outline forest and back."""

import uuid
from dataclasses import dataclass, field, replace

from outline_tree.config import INDENT_CHAR
from outline_tree.models.node import Forest, Node
from outline_tree.protocols import IdFactory


def new_node_id() -> str:
    """Default id factory: a random hex id."""
    return uuid.uuid4().hex


def get_indent_depth(line: str) -> int:
    """Count the leading run of tab characters in a line."""
    return len(line) - len(line.lstrip(INDENT_CHAR))


@dataclass
class _OpenNode:
    """Mutable builder used while the parse is still attaching children."""

    id: str
    text: str
    depth: int
    children: list["_OpenNode"] = field(default_factory=list)

    def freeze(self, parent_id: str | None) -> Node:
        return Node(
            id=self.id,
            text=self.text,
            depth=self.depth,
            children=tuple(c.freeze(self.id) for c in self.children),
            parent_id=parent_id,
        )


def parse_text(
    text: str,
    *,
    id_factory: IdFactory | None = None,
    literal_depths: bool = False,
) -> Forest:
    """Parse tab-indented text into a forest.

    Blank lines are dropped. A line's depth is its count of leading tabs; other
    leading whitespace belongs to the text. A line indented more than one level
    past its predecessor becomes a child of the nearest shallower line.

    Args:
        text: The tab-indented source.
        id_factory: Generator for node ids (default: random hex).
        literal_depths: Store the raw tab count as ``depth`` instead of
            recomputing it from the nesting.

    Returns:
        Tuple of root nodes, every node expanded.
    """
    make_id = id_factory or new_node_id
    roots: list[_OpenNode] = []
    stack: list[_OpenNode] = []

    for line in text.split("\n"):
        if not line.strip():
            continue
        depth = get_indent_depth(line)
        node = _OpenNode(id=make_id(), text=line.lstrip(INDENT_CHAR).strip(), depth=depth)

        while stack and stack[-1].depth >= depth:
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    forest = tuple(r.freeze(None) for r in roots)
    if literal_depths:
        return forest
    return normalize_depths(forest)


def _with_depth(node: Node, depth: int) -> Node:
    children = tuple(_with_depth(c, depth + 1) for c in node.children)
    if node.depth == depth and all(a is b for a, b in zip(children, node.children)):
        return node
    return replace(node, depth=depth, children=children)


def normalize_depths(forest: Forest) -> Forest:
    """Recompute every depth from the nesting: roots 0, children parent + 1.

    Subtrees whose depths are already consistent are returned as-is.
    """
    updated = tuple(_with_depth(root, 0) for root in forest)
    if all(a is b for a, b in zip(updated, forest)):
        return forest
    return updated


def serialize_tree(forest: Forest) -> str:
    """Serialize a forest to tab-indented text, one line per node.

    Collapsed subtrees are written out in full. No trailing newline.
    """
    lines: list[str] = []

    def walk(node: Node) -> None:
        lines.append(f"{INDENT_CHAR * node.depth}{node.text}")
        for child in node.children:
            walk(child)

    for root in forest:
        walk(root)
    return "\n".join(lines)
