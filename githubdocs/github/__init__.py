"""GitHub access layer: URL parsing, metadata, trees, and raw file text."""

from __future__ import annotations

from .api import API_URL, RAW_URL, GitHubClient, parse_repo_url
from .types import Contributor, RepoRef, RepositoryDetails

__all__ = [
    "API_URL",
    "RAW_URL",
    "GitHubClient",
    "parse_repo_url",
    "Contributor",
    "RepoRef",
    "RepositoryDetails",
]
