"""GitHub REST API adapter — implements the RepositoryService port."""

from __future__ import annotations

import logging

import httpx
from pydantic import TypeAdapter

from repo_viewer.domain.entities import Readme, Repository, SearchResult
from repo_viewer.domain.exceptions import InvalidURLError, UnderlyingError
from repo_viewer.domain.value_objects import RepositoryQuery
from repo_viewer.infrastructure.github_router import GitHubRouter
from repo_viewer.infrastructure.response_decoder import decode_json, decode_text

logger = logging.getLogger(__name__)

_repository_list = TypeAdapter(list[Repository])
_repository = TypeAdapter(Repository)
_search_result = TypeAdapter(SearchResult)
_readme = TypeAdapter(Readme)


class GitHubRestAdapter:
    """Concrete RepositoryService backed by the GitHub v3 REST API."""

    def __init__(self, client: httpx.AsyncClient, router: GitHubRouter) -> None:
        self._client = client
        self._router = router

    async def fetch_repositories(self, query: RepositoryQuery) -> list[Repository]:
        """GET /orgs/{org}/repos → [Repository]."""
        resp = await self._send(self._router.list_repositories(query))
        return decode_json(resp, _repository_list)

    async def search_repositories(self, query: RepositoryQuery) -> SearchResult:
        """GET /search/repositories?q={org}/{term} → SearchResult."""
        resp = await self._send(self._router.search_repositories(query))
        return decode_json(resp, _search_result)

    async def fetch_repository(self, owner: str, name: str) -> Repository:
        resp = await self._send(self._router.fetch_repository(owner, name))
        return decode_json(resp, _repository)

    async def fetch_readme_metadata(self, owner: str, name: str) -> Readme:
        resp = await self._send(self._router.fetch_readme_metadata(owner, name))
        return decode_json(resp, _readme)

    async def fetch_readme(self, url: str) -> str:
        """Fetch raw README text from its absolute download URL."""
        try:
            request = self._router.fetch_readme_content(url)
        except httpx.InvalidURL as exc:
            raise InvalidURLError() from exc
        resp = await self._send(request)
        return decode_text(resp)

    async def _send(self, request: httpx.Request) -> httpx.Response:
        """Send *request*, normalising transport failures."""
        logger.debug("%s %s", request.method, request.url)
        try:
            return await self._client.send(request)
        except httpx.HTTPError as exc:
            logger.warning("Transport error for %s: %s", request.url, exc)
            raise UnderlyingError(exc) from exc
