"""API routes — thin controllers that delegate to the services."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from repo_viewer.domain.entities import Repository
from repo_viewer.domain.ports.favorites_store import FavoritesStore
from repo_viewer.interface.dependencies import (
    get_details_use_case,
    get_favorites,
    get_orchestrator,
)
from repo_viewer.interface.schemas import (
    BrowseRequest,
    ErrorResponse,
    FavoritesResponse,
    FavoriteToggleResponse,
    FetchStateResponse,
    RepositoryDetailsResponse,
    SearchRequest,
)
from repo_viewer.services.fetch_orchestrator import FetchOrchestrator
from repo_viewer.services.repository_details import RepositoryDetailsUseCase

router = APIRouter()


# ── Repository list ─────────────────────────────────────────────────────────


@router.get("/repositories", response_model=FetchStateResponse)
async def get_state(
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
) -> FetchStateResponse:
    """Current list state: items, loading flag, empty state and last error."""
    return FetchStateResponse.from_state(orchestrator.state)


@router.post("/repositories/load", response_model=FetchStateResponse)
async def load_first_page(
    body: BrowseRequest,
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
) -> FetchStateResponse:
    await orchestrator.load_first_page(body.organization)
    return FetchStateResponse.from_state(orchestrator.state)


@router.post("/repositories/next", response_model=FetchStateResponse)
async def load_next_page(
    body: BrowseRequest,
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
) -> FetchStateResponse:
    await orchestrator.load_next_page(body.organization)
    return FetchStateResponse.from_state(orchestrator.state)


@router.post(
    "/repositories/search",
    response_model=FetchStateResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def search(
    body: SearchRequest,
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
) -> FetchStateResponse:
    """Schedule a debounced search; poll ``GET /repositories`` for the result."""
    orchestrator.search(body.organization, body.term)
    return FetchStateResponse.from_state(orchestrator.state)


@router.post("/repositories/search/next", response_model=FetchStateResponse)
async def load_next_search_page(
    body: SearchRequest,
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
) -> FetchStateResponse:
    await orchestrator.load_next_search_page(body.organization, body.term)
    return FetchStateResponse.from_state(orchestrator.state)


# ── Repository details ──────────────────────────────────────────────────────


@router.get(
    "/repositories/{owner}/{name}",
    response_model=RepositoryDetailsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Repository not found"},
        429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
        502: {"model": ErrorResponse, "description": "GitHub API error"},
    },
)
async def get_repository(
    owner: str,
    name: str,
    use_case: RepositoryDetailsUseCase = Depends(get_details_use_case),
) -> RepositoryDetailsResponse:
    details = await use_case.load(owner, name)
    return RepositoryDetailsResponse.from_details(details)


# ── Favorites ───────────────────────────────────────────────────────────────


@router.get("/favorites", response_model=FavoritesResponse)
def list_favorites(
    favorites: FavoritesStore = Depends(get_favorites),
) -> FavoritesResponse:
    items = favorites.list()
    return FavoritesResponse(items=items, is_empty=not items)


@router.put(
    "/favorites",
    response_model=FavoritesResponse,
    responses={422: {"model": ErrorResponse, "description": "Repository has no id"}},
)
def add_favorite(
    repository: Repository,
    favorites: FavoritesStore = Depends(get_favorites),
) -> FavoritesResponse:
    favorites.add(repository)
    items = favorites.list()
    return FavoritesResponse(items=items, is_empty=not items)


@router.delete("/favorites/{repository_id}", response_model=FavoritesResponse)
def remove_favorite(
    repository_id: int,
    favorites: FavoritesStore = Depends(get_favorites),
) -> FavoritesResponse:
    favorites.remove(repository_id)
    items = favorites.list()
    return FavoritesResponse(items=items, is_empty=not items)


@router.post(
    "/favorites/toggle",
    response_model=FavoriteToggleResponse,
    responses={422: {"model": ErrorResponse, "description": "Repository has no id"}},
)
def toggle_favorite(
    repository: Repository,
    use_case: RepositoryDetailsUseCase = Depends(get_details_use_case),
) -> FavoriteToggleResponse:
    is_favorite = use_case.toggle_favorite(repository)
    return FavoriteToggleResponse(id=repository.id, is_favorite=is_favorite)
