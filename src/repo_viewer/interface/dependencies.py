"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from repo_viewer.domain.ports.favorites_store import FavoritesStore
from repo_viewer.infrastructure.config import get_settings
from repo_viewer.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_viewer.infrastructure.github_router import GitHubRouter
from repo_viewer.infrastructure.json_favorites_store import JsonFavoritesStore
from repo_viewer.services.fetch_orchestrator import FetchOrchestrator
from repo_viewer.services.repository_details import RepositoryDetailsUseCase

_http_client: httpx.AsyncClient | None = None
_github_adapter: GitHubRestAdapter | None = None
_orchestrator: FetchOrchestrator | None = None
_favorites: FavoritesStore | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _github_adapter, _orchestrator, _favorites  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout_seconds))

    token = settings.github_token.get_secret_value() if settings.github_token else None
    router = GitHubRouter(base_url=settings.github_api_base_url, token=token)
    _github_adapter = GitHubRestAdapter(client=_http_client, router=router)
    _orchestrator = FetchOrchestrator(
        _github_adapter,
        per_page=settings.repositories_per_page,
        debounce_seconds=settings.search_debounce_seconds,
    )
    _favorites = JsonFavoritesStore(settings.favorites_path)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _github_adapter, _orchestrator, _favorites  # noqa: PLW0603

    if _orchestrator:
        _orchestrator.reset()
        _orchestrator = None
    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _github_adapter = None
    _favorites = None


def get_orchestrator() -> FetchOrchestrator:
    """Return the application-wide orchestrator (one owner of the list state)."""
    assert _orchestrator is not None, "startup() was not called"
    return _orchestrator


def get_favorites() -> FavoritesStore:
    assert _favorites is not None, "startup() was not called"
    return _favorites


def get_details_use_case() -> RepositoryDetailsUseCase:
    """Build the details use case with injected adapters."""
    assert _github_adapter is not None, "startup() was not called"
    return RepositoryDetailsUseCase(service=_github_adapter, favorites=get_favorites())
