"""Reassemble a flat, unordered entry list into a nested directory forest.

Directories are materialized first and indexed by path; files are attached
afterwards. Anything whose parent directory was not materialized (filtered,
beyond ``max_depth``, or never listed) is dropped rather than re-parented.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from ..errors import InputError
from ..ignore import Rule, is_ignored
from .types import GITHUB_KIND_NAMES, Entry, EntryKind, TreeNode

logger = logging.getLogger(__name__)

UNLIMITED_DEPTH = -1


def entries_from_github(items: Iterable[Mapping[str, object]]) -> list[Entry]:
    """Convert git-tree API items into ``Entry`` values.

    ``commit`` items (submodules) are skipped; any other unknown type or a
    non-string path raises ``InputError``.
    """
    entries: list[Entry] = []
    for item in items:
        raw_type = item.get("type")
        raw_path = item.get("path")
        if raw_type == "commit":
            logger.debug("skipping submodule entry %s", raw_path)
            continue
        kind = GITHUB_KIND_NAMES.get(raw_type) if isinstance(raw_type, str) else None
        if kind is None:
            raise InputError(f"unknown tree entry type {raw_type!r} for {raw_path!r}")
        if not isinstance(raw_path, str):
            raise InputError(f"tree entry path must be a string, got {raw_path!r}")
        entries.append(Entry(path=raw_path, kind=kind))
    return entries


def path_depth(path: str) -> int:
    """Depth in ``/``-separated segments; ``a/b/c.txt`` is 3."""
    return path.count("/") + 1


def parent_path(path: str) -> str:
    """Path with its final segment removed; ``""`` for top-level paths."""
    head, sep, _tail = path.rpartition("/")
    return head if sep else ""


def validate_entries(entries: Sequence[Entry]) -> None:
    """Reject malformed or duplicate entries before any wiring happens."""
    seen: set[str] = set()
    for entry in entries:
        path = entry.path
        if not isinstance(path, str) or not path:
            raise InputError(f"entry path must be a non-empty string, got {path!r}")
        if path.startswith("/"):
            raise InputError(f"entry path must be relative: {path!r}")
        if "" in path.split("/"):
            raise InputError(f"entry path has an empty segment: {path!r}")
        if not isinstance(entry.kind, EntryKind):
            raise InputError(f"entry kind must be an EntryKind, got {entry.kind!r}")
        if path in seen:
            raise InputError(f"duplicate entry path: {path!r}")
        seen.add(path)


@dataclass
class _Slot:
    """Mutable arena cell; frozen into a ``TreeNode`` once wiring is done."""

    path: str
    kind: EntryKind
    children: list[int] = field(default_factory=list)


def _within_depth(path: str, max_depth: int) -> bool:
    return max_depth == UNLIMITED_DEPTH or path_depth(path) <= max_depth


def build_tree(
    entries: Sequence[Entry],
    rules: Sequence[Rule] = (),
    max_depth: int = UNLIMITED_DEPTH,
) -> list[TreeNode]:
    """Build the forest for ``entries`` honoring path ``rules`` and ``max_depth``.

    Children keep the relative order of their entries in the input, with
    directories ahead of files at each level. ``max_depth == -1`` means no
    depth bound.
    """
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < UNLIMITED_DEPTH:
        raise InputError(f"max_depth must be -1 or a non-negative integer, got {max_depth!r}")
    validate_entries(entries)

    arena: list[_Slot] = []
    dir_index: dict[str, int] = {}
    roots: list[int] = []

    visible = [entry for entry in entries if not is_ignored(entry.path, rules)]

    for entry in visible:
        if not entry.is_dir or not _within_depth(entry.path, max_depth):
            continue
        dir_index[entry.path] = len(arena)
        arena.append(_Slot(entry.path, EntryKind.DIRECTORY))

    def attach(slot_idx: int) -> None:
        parent = parent_path(arena[slot_idx].path)
        if not parent:
            roots.append(slot_idx)
            return
        parent_idx = dir_index.get(parent)
        if parent_idx is None:
            logger.debug("dropping orphaned %s (parent %s absent)", arena[slot_idx].path, parent)
            return
        arena[parent_idx].children.append(slot_idx)

    for slot_idx in range(len(arena)):
        attach(slot_idx)

    for entry in visible:
        if entry.is_dir or not _within_depth(entry.path, max_depth):
            continue
        arena.append(_Slot(entry.path, EntryKind.FILE))
        attach(len(arena) - 1)

    return _freeze(arena, roots)


def _freeze(arena: list[_Slot], roots: list[int]) -> list[TreeNode]:
    """Convert arena slots into immutable nodes, deepest slots first."""
    frozen: dict[int, TreeNode] = {}
    order = sorted(range(len(arena)), key=lambda idx: path_depth(arena[idx].path), reverse=True)
    for idx in order:
        slot = arena[idx]
        frozen[idx] = TreeNode(
            path=slot.path,
            kind=slot.kind,
            children=tuple(frozen[child] for child in slot.children),
        )
    return [frozen[idx] for idx in roots]


__all__ = [
    "UNLIMITED_DEPTH",
    "entries_from_github",
    "path_depth",
    "parent_path",
    "validate_entries",
    "build_tree",
]
