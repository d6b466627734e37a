"""Port: repository service — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_viewer.domain.entities import Readme, Repository, SearchResult
from repo_viewer.domain.value_objects import RepositoryQuery


class RepositoryService(Protocol):
    """Abstract contract for reading repositories from GitHub.

    Every method raises a :class:`~repo_viewer.domain.exceptions.NetworkError`
    subclass on failure and nothing else.
    """

    async def fetch_repositories(self, query: RepositoryQuery) -> list[Repository]:
        """Return one page of an organization's repositories."""
        ...

    async def search_repositories(self, query: RepositoryQuery) -> SearchResult:
        """Return one page of search results scoped to the organization."""
        ...

    async def fetch_repository(self, owner: str, name: str) -> Repository:
        """Return a single repository."""
        ...

    async def fetch_readme_metadata(self, owner: str, name: str) -> Readme:
        """Return the README pointer record."""
        ...

    async def fetch_readme(self, url: str) -> str:
        """Return the raw README text found at *url*."""
        ...
