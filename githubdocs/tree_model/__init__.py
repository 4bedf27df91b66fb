"""Tree-model creation, traversal, and rendering.

Defines ``Entry``/``TreeNode`` and builds nested forests from flat
repository listings filtered by path rules.
"""

from __future__ import annotations

from .build import UNLIMITED_DEPTH, build_tree, entries_from_github, parent_path, path_depth
from .rendering import (
    format_tree_ascii,
    format_tree_markdown,
    iter_files,
    iter_preorder,
    iter_preorder_with_depth,
    tree_to_records,
)
from .types import Entry, EntryKind, TreeNode

__all__ = [
    "Entry",
    "EntryKind",
    "TreeNode",
    "UNLIMITED_DEPTH",
    "build_tree",
    "entries_from_github",
    "parent_path",
    "path_depth",
    "iter_preorder",
    "iter_preorder_with_depth",
    "iter_files",
    "format_tree_markdown",
    "format_tree_ascii",
    "tree_to_records",
]
