"""Thin GitHub REST client for repository metadata, trees, and raw files.

Metadata and tree failures raise ``GitHubApiError`` and abort the run.
File-content failures raise ``FetchError`` so the document assembler can
degrade them to per-file placeholders.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from urllib.parse import quote

import httpx

from ..errors import FetchError, GitHubApiError
from ..tree_model import Entry, entries_from_github
from .types import Contributor, RepoRef, RepositoryDetails

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
RAW_URL = "https://raw.githubusercontent.com"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CONTRIBUTOR_LIMIT = 10
USER_AGENT = "githubdocs"

NO_DESCRIPTION = "No description"
UNKNOWN = "Unknown"
NO_LICENSE = "No license information"

_REPO_URL_RE = re.compile(r"github\.com/([^/]+)/([^/?#]+)")


def parse_repo_url(url: str) -> RepoRef | None:
    """Extract ``owner``/``repo`` from a GitHub URL, dropping a ``.git`` suffix."""
    match = _REPO_URL_RE.search(url)
    if match is None:
        return None
    repo = match.group(2)
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        return None
    return RepoRef(owner=match.group(1), repo=repo)


def _format_date(value: object) -> str:
    """Render an ISO-8601 timestamp as ``YYYY-MM-DD``; pass through otherwise."""
    if not isinstance(value, str) or not value:
        return UNKNOWN
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def _as_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


class GitHubClient:
    """Synchronous GitHub client backed by one ``httpx.Client``."""

    def __init__(
        self,
        token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        api_url: str = API_URL,
        raw_url: str = RAW_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._api_url = api_url.rstrip("/")
        self._raw_url = raw_url.rstrip("/")
        self._http = httpx.Client(headers=headers, timeout=timeout, transport=transport, follow_redirects=True)
        self._repo_payloads: dict[RepoRef, dict[str, object]] = {}

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _get_json(self, path: str, params: dict[str, object] | None = None) -> object:
        url = f"{self._api_url}{path}"
        logger.debug("GET %s", url)
        try:
            response = self._http.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("GitHub API returned %s for %s", exc.response.status_code, url)
            raise GitHubApiError(f"GitHub API request failed ({exc.response.status_code}): {path}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("GitHub API request failed for %s: %s", url, exc)
            raise GitHubApiError(f"GitHub API request failed: {path}: {exc}") from exc

    def _repo_payload(self, repo: RepoRef) -> dict[str, object]:
        cached = self._repo_payloads.get(repo)
        if cached is not None:
            return cached
        data = self._get_json(f"/repos/{repo.owner}/{repo.repo}")
        if not isinstance(data, dict):
            raise GitHubApiError(f"unexpected repository payload for {repo.full_name}")
        self._repo_payloads[repo] = data
        return data

    def default_branch(self, repo: RepoRef) -> str:
        branch = self._repo_payload(repo).get("default_branch")
        if not isinstance(branch, str) or not branch:
            raise GitHubApiError(f"repository {repo.full_name} has no default branch")
        return branch

    def languages(self, repo: RepoRef) -> dict[str, int]:
        data = self._get_json(f"/repos/{repo.owner}/{repo.repo}/languages")
        if not isinstance(data, dict):
            return {}
        return {str(name): _as_int(size) for name, size in data.items()}

    def repository_details(self, repo: RepoRef) -> RepositoryDetails:
        """Collect the repository summary shown at the top of documents."""
        data = self._repo_payload(repo)
        owner = data.get("owner")
        license_info = data.get("license")
        owner_login = owner.get("login") if isinstance(owner, dict) else None
        license_name = license_info.get("name") if isinstance(license_info, dict) else None
        return RepositoryDetails(
            name=str(data.get("name") or repo.repo),
            description=str(data.get("description") or NO_DESCRIPTION),
            owner=str(owner_login or repo.owner),
            language=str(data.get("language") or UNKNOWN),
            license=str(license_name or NO_LICENSE),
            created_at=_format_date(data.get("created_at")),
            updated_at=_format_date(data.get("updated_at")),
            stars=_as_int(data.get("stargazers_count")),
            forks=_as_int(data.get("forks_count")),
            watchers=_as_int(data.get("subscribers_count")),
            open_issues=_as_int(data.get("open_issues_count")),
            default_branch=str(data.get("default_branch") or ""),
            languages=self.languages(repo),
        )

    def contributors(self, repo: RepoRef, limit: int = DEFAULT_CONTRIBUTOR_LIMIT) -> list[Contributor]:
        data = self._get_json(
            f"/repos/{repo.owner}/{repo.repo}/contributors",
            params={"per_page": max(1, limit)},
        )
        if not isinstance(data, list):
            return []
        contributors: list[Contributor] = []
        for item in data[:limit]:
            if not isinstance(item, dict) or not isinstance(item.get("login"), str):
                continue
            contributors.append(
                Contributor(
                    login=item["login"],
                    contributions=_as_int(item.get("contributions")),
                    avatar_url=str(item.get("avatar_url") or ""),
                    profile_url=str(item.get("html_url") or ""),
                )
            )
        return contributors

    def tree(self, repo: RepoRef, ref: str) -> list[Entry]:
        """Fetch the recursive git tree for ``ref`` as flat entries."""
        data = self._get_json(
            f"/repos/{repo.owner}/{repo.repo}/git/trees/{quote(ref, safe='')}",
            params={"recursive": "1"},
        )
        items = data.get("tree") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise GitHubApiError(f"unexpected tree payload for {repo.full_name}@{ref}")
        if data.get("truncated"):
            logger.warning("tree listing for %s@%s was truncated by GitHub", repo.full_name, ref)
        return entries_from_github(item for item in items if isinstance(item, dict))

    def file_content(self, repo: RepoRef, path: str, ref: str) -> str:
        """Return the raw file text exactly as stored, never parsed."""
        url = f"{self._raw_url}/{repo.owner}/{repo.repo}/{quote(ref, safe='')}/{quote(path)}"
        logger.debug("GET %s", url)
        try:
            response = self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(path, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(path, str(exc) or type(exc).__name__) from exc
        return response.content.decode("utf-8", errors="replace")


__all__ = [
    "API_URL",
    "RAW_URL",
    "GitHubClient",
    "parse_repo_url",
]
