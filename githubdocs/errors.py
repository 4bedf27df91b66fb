"""Exception hierarchy shared by tree building, GitHub access, and the CLI."""

from __future__ import annotations


class GithubDocsError(Exception):
    """Base class for every error raised by githubdocs."""


class InputError(GithubDocsError):
    """Invalid caller input: malformed entries, URLs, depths, or rule files."""


class GitHubApiError(InputError):
    """Repository metadata or tree request failed; the whole run is aborted."""


class FetchError(GithubDocsError):
    """Retrieving one file's content failed.

    The document assembler contains this per file and renders a placeholder.
    """

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"failed to fetch {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


__all__ = [
    "GithubDocsError",
    "InputError",
    "GitHubApiError",
    "FetchError",
]
