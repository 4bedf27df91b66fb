"""Repository metadata datatypes returned by the GitHub client."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RepoRef:
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class RepositoryDetails:
    """Display-ready repository summary used for the document header."""

    name: str
    description: str
    owner: str
    language: str
    license: str
    created_at: str
    updated_at: str
    stars: int
    forks: int
    watchers: int
    open_issues: int
    default_branch: str
    languages: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Contributor:
    login: str
    contributions: int
    avatar_url: str
    profile_url: str


__all__ = [
    "RepoRef",
    "RepositoryDetails",
    "Contributor",
]
