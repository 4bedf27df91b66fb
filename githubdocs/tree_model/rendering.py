"""Traversal and text renderers for built forests.

All walks use an explicit stack so very deep trees cannot exhaust the
interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .types import TreeNode

DIR_ICON = "📁"
FILE_ICON = "📄"

ASCII_BRANCH = "├── "
ASCII_LAST = "└── "
ASCII_PIPE = "│   "
ASCII_BLANK = "    "


def iter_preorder_with_depth(forest: Sequence[TreeNode]) -> Iterator[tuple[TreeNode, int]]:
    """Yield ``(node, level)`` parents-first, children in stored order."""
    stack: list[tuple[TreeNode, int]] = [(node, 0) for node in reversed(forest)]
    while stack:
        node, level = stack.pop()
        yield node, level
        stack.extend((child, level + 1) for child in reversed(node.children))


def iter_preorder(forest: Sequence[TreeNode]) -> Iterator[TreeNode]:
    for node, _level in iter_preorder_with_depth(forest):
        yield node


def iter_files(forest: Sequence[TreeNode]) -> Iterator[TreeNode]:
    """Yield file nodes only, in pre-order."""
    for node in iter_preorder(forest):
        if not node.is_dir:
            yield node


def format_tree_markdown(forest: Sequence[TreeNode]) -> str:
    """Render the forest as icon-prefixed lines, two spaces per level."""
    out: list[str] = []
    for node, level in iter_preorder_with_depth(forest):
        icon = DIR_ICON if node.is_dir else FILE_ICON
        out.append(f"{'  ' * level}{icon} {node.name}\n")
    return "".join(out)


def format_tree_ascii(forest: Sequence[TreeNode]) -> str:
    """Render the forest with box-drawing connectors for terminal output."""
    out: list[str] = []
    stack: list[tuple[TreeNode, str, bool]] = []

    def push_level(nodes: Sequence[TreeNode], indent: str) -> None:
        last_idx = len(nodes) - 1
        for idx in range(last_idx, -1, -1):
            stack.append((nodes[idx], indent, idx == last_idx))

    push_level(forest, "")
    while stack:
        node, indent, is_last = stack.pop()
        out.append(f"{indent}{ASCII_LAST if is_last else ASCII_BRANCH}{node.name}\n")
        if node.children:
            push_level(node.children, indent + (ASCII_BLANK if is_last else ASCII_PIPE))
    return "".join(out)


def tree_to_records(forest: Sequence[TreeNode]) -> list[dict[str, object]]:
    """Serialize the forest as nested ``{path, type, children}`` dicts.

    ``type`` is ``"dir"`` or ``"file"``; file records carry no ``children``.
    """
    records: list[dict[str, object]] = []
    stack: list[tuple[TreeNode, list[dict[str, object]]]] = [(node, records) for node in reversed(forest)]
    while stack:
        node, sink = stack.pop()
        record: dict[str, object] = {"path": node.path, "type": node.kind.value}
        sink.append(record)
        if node.is_dir:
            children: list[dict[str, object]] = []
            record["children"] = children
            stack.extend((child, children) for child in reversed(node.children))
    return records


__all__ = [
    "DIR_ICON",
    "FILE_ICON",
    "iter_preorder_with_depth",
    "iter_preorder",
    "iter_files",
    "format_tree_markdown",
    "format_tree_ascii",
    "tree_to_records",
]
