"""Test configuration and fixtures."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import pytest

from repo_viewer.domain.entities import Owner, Readme, Repository, SearchResult
from repo_viewer.domain.exceptions import NetworkError
from repo_viewer.domain.value_objects import RepositoryQuery
from repo_viewer.infrastructure.json_favorites_store import JsonFavoritesStore


def make_repository(repo_id: int, name: str | None = None, **fields: Any) -> Repository:
    """Build a small repository record for tests."""
    name = name or f"repo-{repo_id}"
    return Repository(
        id=repo_id,
        name=name,
        full_name=f"algorand/{name}",
        owner=Owner(login="algorand", avatar_url="https://avatars.example/u/1"),
        **fields,
    )


PageResult = list[Repository] | NetworkError


class FakeRepositoryService:
    """In-memory RepositoryService.

    Pages are keyed by page number; a page set to a ``NetworkError`` raises
    it.  When ``gate`` is set, every call blocks until the event is set, which
    keeps a request "in flight" for as long as a test needs.
    """

    def __init__(self) -> None:
        self.list_pages: dict[int, PageResult] = {}
        self.search_pages: dict[int, PageResult] = {}
        self.repositories: dict[tuple[str, str], Repository | NetworkError] = {}
        self.readmes: dict[tuple[str, str], Readme | NetworkError] = {}
        self.readme_texts: dict[str, str | NetworkError] = {}
        self.calls: list[tuple[str, Any]] = []
        self.gate: asyncio.Event | None = None

    async def fetch_repositories(self, query: RepositoryQuery) -> list[Repository]:
        self.calls.append(("list", query))
        await self._wait()
        return _unwrap(self.list_pages.get(query.page, []))

    async def search_repositories(self, query: RepositoryQuery) -> SearchResult:
        self.calls.append(("search", query))
        await self._wait()
        items = _unwrap(self.search_pages.get(query.page, []))
        return SearchResult(total_count=len(items), incomplete_results=False, items=items)

    async def fetch_repository(self, owner: str, name: str) -> Repository:
        self.calls.append(("repository", (owner, name)))
        await self._wait()
        return _unwrap(self.repositories[(owner, name)])

    async def fetch_readme_metadata(self, owner: str, name: str) -> Readme:
        self.calls.append(("readme_metadata", (owner, name)))
        await self._wait()
        return _unwrap(self.readmes.get((owner, name), Readme()))

    async def fetch_readme(self, url: str) -> str:
        self.calls.append(("readme", url))
        await self._wait()
        return _unwrap(self.readme_texts[url])

    def calls_of(self, kind: str) -> list[Any]:
        return [arg for call_kind, arg in self.calls if call_kind == kind]

    async def _wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()


def _unwrap(value: Any) -> Any:
    if isinstance(value, NetworkError):
        raise value
    return value


@pytest.fixture
def fake_service() -> FakeRepositoryService:
    return FakeRepositoryService()


@pytest.fixture
def favorites_store(tmp_path: Path) -> JsonFavoritesStore:
    return JsonFavoritesStore(tmp_path / "data" / "favorites.json")
