"""Markdown section formatters for the assembled repository document."""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..github.types import Contributor, RepositoryDetails
from .languages import fence_language

FETCH_FAILED_PLACEHOLDER = "> Failed to retrieve file content."
TREE_HEADING = "## File Structure"
CONTENTS_HEADING = "## File Contents"

MIN_FENCE_LENGTH = 3

_BACKTICK_RUN_RE = re.compile(r"`+")


def code_fence(content: str) -> str:
    """Backtick fence longer than any backtick run inside ``content``."""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(content)), default=0)
    return "`" * max(MIN_FENCE_LENGTH, longest + 1)


def format_repository_details(details: RepositoryDetails) -> str:
    """Render name, info, statistics, and the language share table."""
    out = [
        f"# {details.name}\n\n",
        "## Repository Information\n\n",
        f"- **Description**: {details.description}\n",
        f"- **Owner**: {details.owner}\n",
        f"- **Primary Language**: {details.language}\n",
        f"- **License**: {details.license}\n",
        f"- **Created**: {details.created_at}\n",
        f"- **Last Updated**: {details.updated_at}\n\n",
        "## Statistics\n\n",
        f"- **Stars**: {details.stars:,}\n",
        f"- **Forks**: {details.forks:,}\n",
        f"- **Watchers**: {details.watchers:,}\n",
        f"- **Open Issues**: {details.open_issues:,}\n",
        f"- **Default Branch**: {details.default_branch}\n\n",
    ]

    total_bytes = sum(details.languages.values())
    if details.languages and total_bytes > 0:
        out.append("## Languages\n\n")
        out.append("| Language | Share | Bytes |\n")
        out.append("| --- | --- | --- |\n")
        ranked = sorted(details.languages.items(), key=lambda item: item[1], reverse=True)
        for language, size in ranked:
            share = size / total_bytes * 100
            out.append(f"| {language} | {share:.1f}% | {size:,} |\n")
        out.append("\n")
    return "".join(out)


def format_contributors(contributors: Sequence[Contributor]) -> str:
    if not contributors:
        return ""

    out = ["## Contributors\n\n"]
    for contributor in contributors:
        out.append(f"### {contributor.login}\n\n")
        out.append(f"- **Contributions**: {contributor.contributions:,}\n")
        out.append(f"- **Profile**: [GitHub]({contributor.profile_url})\n")
        if contributor.avatar_url:
            out.append(f"\n![{contributor.login}]({contributor.avatar_url})\n\n")
    return "".join(out)


def format_file_section(path: str, content: str) -> str:
    """Heading plus a fenced block tagged by ``path``'s language."""
    fence = code_fence(content)
    return f"### {path}\n\n{fence}{fence_language(path)}\n{content}\n{fence}\n\n"


def format_failed_section(path: str) -> str:
    return f"### {path}\n\n{FETCH_FAILED_PLACEHOLDER}\n\n"


__all__ = [
    "FETCH_FAILED_PLACEHOLDER",
    "TREE_HEADING",
    "CONTENTS_HEADING",
    "code_fence",
    "format_repository_details",
    "format_contributors",
    "format_file_section",
    "format_failed_section",
]
