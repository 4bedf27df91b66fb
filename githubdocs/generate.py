"""End-to-end generation: repository URL in, rendered output text out.

Wires URL parsing, metadata lookups, tree retrieval, tree building, and
document assembly. Every step before file retrieval fails fast.

A request naming ``file_path`` skips the tree and renders that one file,
line-filtered. Its fetch failure is fatal, since nothing else is produced.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from .document import DocumentAssembler, HighlightConfig, format_file_section, render_html_page
from .errors import InputError
from .github import GitHubClient, RepoRef, parse_repo_url
from .ignore import Rule, filter_lines
from .tree_model import UNLIMITED_DEPTH, TreeNode, build_tree, format_tree_ascii, tree_to_records

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("markdown", "html", "tree", "json")
FILE_OUTPUT_FORMATS = ("markdown", "html", "json")
CONTRIBUTOR_LIMIT = 10


@dataclass(frozen=True)
class GenerationRequest:
    repo_url: str
    branch: str | None = None
    path_rules: tuple[Rule, ...] = ()
    line_rules: tuple[Rule, ...] = ()
    max_depth: int = UNLIMITED_DEPTH
    max_workers: int = 1
    output_format: str = "markdown"
    highlight: HighlightConfig = field(default_factory=HighlightConfig)
    file_path: str | None = None


@dataclass(frozen=True)
class GenerationResult:
    repo: RepoRef
    ref: str
    forest: list[TreeNode]
    output: str


def resolve_repo(repo_url: str) -> RepoRef:
    if not repo_url or not repo_url.strip():
        raise InputError("repository URL is required")
    repo = parse_repo_url(repo_url.strip())
    if repo is None:
        raise InputError(f"not a GitHub repository URL: {repo_url}")
    return repo


def _validate_file_path(file_path: str) -> str:
    path = file_path.strip().lstrip("/")
    if not path or any(not segment for segment in path.split("/")):
        raise InputError(f"invalid file path: {file_path!r}")
    return path


def generate_file(request: GenerationRequest, client: GitHubClient) -> GenerationResult:
    """Fetch one file, drop lines matching ``request.line_rules``, and render it.

    ``json`` output carries both the filtered and the original content.
    """
    if request.output_format not in FILE_OUTPUT_FORMATS:
        raise InputError(
            f"output format {request.output_format!r} does not apply to a single file; "
            f"expected one of {', '.join(FILE_OUTPUT_FORMATS)}"
        )
    path = _validate_file_path(request.file_path or "")
    repo = resolve_repo(request.repo_url)
    ref = request.branch or client.default_branch(repo)
    logger.info("fetching %s from %s@%s", path, repo.full_name, ref)

    original = client.file_content(repo, path, ref)
    content = filter_lines(original, request.line_rules)

    if request.output_format == "json":
        record = {"path": path, "content": content, "original_content": original}
        return GenerationResult(repo, ref, [], json.dumps(record, indent=2, ensure_ascii=False) + "\n")
    section = format_file_section(path, content)
    if request.output_format == "html":
        return GenerationResult(repo, ref, [], render_html_page(section, path, request.highlight))
    return GenerationResult(repo, ref, [], section)


def generate(request: GenerationRequest, client: GitHubClient) -> GenerationResult:
    """Run one generation for ``request`` using ``client`` for all I/O."""
    if request.file_path is not None:
        return generate_file(request, client)
    if request.output_format not in OUTPUT_FORMATS:
        raise InputError(f"unknown output format {request.output_format!r}; expected one of {', '.join(OUTPUT_FORMATS)}")
    repo = resolve_repo(request.repo_url)
    ref = request.branch or client.default_branch(repo)
    logger.info("building tree for %s@%s", repo.full_name, ref)

    entries = client.tree(repo, ref)
    forest = build_tree(entries, request.path_rules, request.max_depth)

    if request.output_format == "tree":
        return GenerationResult(repo, ref, forest, format_tree_ascii(forest))
    if request.output_format == "json":
        output = json.dumps(tree_to_records(forest), indent=2, ensure_ascii=False) + "\n"
        return GenerationResult(repo, ref, forest, output)

    details = client.repository_details(repo)
    contributors = client.contributors(repo, CONTRIBUTOR_LIMIT)

    def fetch_content(path: str) -> str:
        return client.file_content(repo, path, ref)

    assembler = DocumentAssembler(
        fetch_content,
        path_rules=request.path_rules,
        line_rules=request.line_rules,
        max_workers=request.max_workers,
    )
    markdown = assembler.assemble(forest, details=details, contributors=contributors)
    if request.output_format == "html":
        return GenerationResult(repo, ref, forest, render_html_page(markdown, details.name, request.highlight))
    return GenerationResult(repo, ref, forest, markdown)


__all__ = [
    "OUTPUT_FORMATS",
    "FILE_OUTPUT_FORMATS",
    "GenerationRequest",
    "GenerationResult",
    "resolve_repo",
    "generate_file",
    "generate",
]
