"""Walk a built forest and assemble the single repository document.

Per-file content retrieval is the only failure surface: a failed fetch
becomes a placeholder section and assembly continues with the next file.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from ..github.types import Contributor, RepositoryDetails
from ..ignore import Rule, filter_lines, is_ignored
from ..tree_model import TreeNode, format_tree_markdown, iter_files
from .sections import (
    CONTENTS_HEADING,
    TREE_HEADING,
    format_contributors,
    format_failed_section,
    format_file_section,
    format_repository_details,
)

logger = logging.getLogger(__name__)

FetchContent = Callable[[str], str]

DEFAULT_MAX_WORKERS = 1


@dataclass(frozen=True)
class FileSection:
    """Rendered section for one file plus whether its fetch succeeded."""

    path: str
    text: str
    ok: bool


class DocumentAssembler:
    """Build repository documents from a forest and a content fetcher.

    ``fetch_content(path)`` returns file text or raises; any exception is
    treated as a per-file retrieval failure. With ``max_workers > 1`` fetches
    run on a bounded thread pool, and sections are still emitted in pre-order.
    """

    def __init__(
        self,
        fetch_content: FetchContent,
        path_rules: Sequence[Rule] = (),
        line_rules: Sequence[Rule] = (),
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._fetch_content = fetch_content
        self._path_rules = tuple(path_rules)
        self._line_rules = tuple(line_rules)
        self._max_workers = max(1, int(max_workers))

    def render_file(self, path: str) -> FileSection:
        """Fetch, line-filter, and format one file; never raises."""
        try:
            content = self._fetch_content(path)
        except Exception as exc:
            logger.warning("content fetch failed for %s: %s", path, exc)
            return FileSection(path=path, text=format_failed_section(path), ok=False)
        return FileSection(
            path=path,
            text=format_file_section(path, filter_lines(content, self._line_rules)),
            ok=True,
        )

    def file_paths(self, forest: Sequence[TreeNode]) -> list[str]:
        """Pre-order file paths that survive the path rules."""
        return [node.path for node in iter_files(forest) if not is_ignored(node.path, self._path_rules)]

    def render_files(self, forest: Sequence[TreeNode]) -> list[FileSection]:
        paths = self.file_paths(forest)
        if self._max_workers == 1 or len(paths) <= 1:
            return [self.render_file(path) for path in paths]

        max_workers = min(self._max_workers, len(paths))
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="githubdocs-fetch") as executor:
            futures = [executor.submit(self.render_file, path) for path in paths]
            return [future.result() for future in futures]

    def assemble(
        self,
        forest: Sequence[TreeNode],
        details: RepositoryDetails | None = None,
        contributors: Sequence[Contributor] = (),
    ) -> str:
        """Return the full document: metadata, contributors, tree, then files."""
        out: list[str] = []
        if details is not None:
            out.append(format_repository_details(details))
        out.append(format_contributors(contributors))
        out.append(f"{TREE_HEADING}\n\n")
        out.append(format_tree_markdown(forest))
        out.append("\n")
        out.append(f"{CONTENTS_HEADING}\n\n")

        sections = self.render_files(forest)
        failures = sum(1 for section in sections if not section.ok)
        if failures:
            logger.info("assembled %d file sections with %d retrieval failures", len(sections), failures)
        out.extend(section.text for section in sections)
        return "".join(out)


def assemble_document(
    forest: Sequence[TreeNode],
    path_rules: Sequence[Rule],
    line_rules: Sequence[Rule],
    fetch_content: FetchContent,
    *,
    details: RepositoryDetails | None = None,
    contributors: Sequence[Contributor] = (),
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> str:
    """Functional front end for ``DocumentAssembler.assemble``."""
    assembler = DocumentAssembler(
        fetch_content,
        path_rules=path_rules,
        line_rules=line_rules,
        max_workers=max_workers,
    )
    return assembler.assemble(forest, details=details, contributors=contributors)


__all__ = [
    "FetchContent",
    "FileSection",
    "DocumentAssembler",
    "assemble_document",
]
