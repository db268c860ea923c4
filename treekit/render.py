"""Text renderings of an ``OrderedTree``.

``render_lines`` draws the tree sideways with box-drawing connectors::

    50
    ├── 75
    │   └── 90
    └── 10
        └── 5

Right children are drawn before left children so larger keys appear above
smaller ones when read top to bottom. ``render_levels`` produces a compact
level-by-level view marking missing children with ``·``.

Both renderers are pure functions of the tree shape.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple

from .ordered_tree import OrderedTree, TreeNode

__all__ = [
    "EMPTY_TREE",
    "render_levels",
    "render_lines",
    "render_tree",
]

EMPTY_TREE = "<empty>"

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_GAP = "    "


def render_lines(tree: OrderedTree[Any]) -> List[str]:
    """Return the box-drawing rendering of *tree*, one string per node.

    The root sits alone on the first line. An empty tree yields no lines.
    """

    root = tree.root
    if root is None:
        return []

    lines = [str(root.key)]
    stack: List[Tuple[TreeNode[Any], str, bool]] = []
    _push_children(stack, root, "")
    while stack:
        node, prefix, is_last = stack.pop()
        lines.append(prefix + (_LAST if is_last else _BRANCH) + str(node.key))
        _push_children(stack, node, prefix + (_GAP if is_last else _PIPE))
    return lines


def _push_children(
    stack: List[Tuple[TreeNode[Any], str, bool]], node: TreeNode[Any], prefix: str
) -> None:
    # Pushed left first so the right child is popped (and drawn) first.
    if node.left is not None:
        stack.append((node.left, prefix, True))
    if node.right is not None:
        stack.append((node.right, prefix, node.left is None))


def render_tree(tree: OrderedTree[Any]) -> str:
    """Join :func:`render_lines` into a single string, ``<empty>`` for no nodes."""

    lines = render_lines(tree)
    if not lines:
        return EMPTY_TREE
    return "\n".join(lines)


def render_levels(tree: OrderedTree[Any]) -> str:
    """Render *tree* level-by-level, marking missing nodes with ``·``.

    The renderer stops once the next level would hold placeholders only, so the
    output contains no trailing placeholder-only rows.
    """

    if tree.root is None:
        return EMPTY_TREE

    level: List[Optional[TreeNode[Any]]] = [tree.root]
    rows = [_format_level(level)]
    while any(node is not None and not node.is_leaf for node in level):
        level = list(_child_slots(level))
        rows.append(_format_level(level))
    return "\n".join(rows)


def _child_slots(
    level: List[Optional[TreeNode[Any]]],
) -> Iterator[Optional[TreeNode[Any]]]:
    # A missing node still owns two slots so columns stay aligned by position.
    for node in level:
        if node is None:
            yield None
            yield None
        else:
            yield node.left
            yield node.right


def _format_level(level: List[Optional[TreeNode[Any]]]) -> str:
    return " ".join("·" if node is None else str(node.key) for node in level)
