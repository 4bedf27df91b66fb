"""Entry and tree-node datatypes used by the builder and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "dir"


# Git tree API ``type`` values.
GITHUB_KIND_NAMES: dict[str, EntryKind] = {
    "blob": EntryKind.FILE,
    "tree": EntryKind.DIRECTORY,
}


@dataclass(frozen=True)
class Entry:
    """One flat repository path as reported by the source provider."""

    path: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class TreeNode:
    """Directory or file node; only directories carry ``children``."""

    path: str
    kind: EntryKind
    children: tuple["TreeNode", ...] = ()

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


__all__ = [
    "EntryKind",
    "GITHUB_KIND_NAMES",
    "Entry",
    "TreeNode",
]
