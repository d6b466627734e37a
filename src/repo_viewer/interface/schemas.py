"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from repo_viewer.domain.entities import FetchState, FetchStatus, Organization, Repository
from repo_viewer.services.repository_details import RepositoryDetails


class BrowseRequest(BaseModel):
    """Request body for ``POST /repositories/load`` and ``/repositories/next``."""

    organization: Organization


class SearchRequest(BaseModel):
    """Request body for the search endpoints.

    The term is passed through untouched apart from surrounding whitespace;
    an empty term is reported through the fetch state, not rejected here.
    """

    organization: Organization
    term: str = ""

    @field_validator("term")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()


class FetchStateResponse(BaseModel):
    status: FetchStatus
    items: list[Repository]
    is_loading: bool
    show_empty_state: bool
    current_page: int
    organization: Organization | None = None
    search_term: str | None = None
    error: str | None = None

    @classmethod
    def from_state(cls, state: FetchState) -> FetchStateResponse:
        return cls(
            status=state.status,
            items=list(state.items),
            is_loading=state.is_loading,
            show_empty_state=state.show_empty_state,
            current_page=state.current_page,
            organization=state.organization,
            search_term=state.active_search_term,
            error=str(state.error) if state.error is not None else None,
        )


class RepositoryDetailsResponse(BaseModel):
    """Successful response from ``GET /repositories/{owner}/{name}``."""

    repository: Repository
    readme: str | None = None
    is_favorite: bool

    @classmethod
    def from_details(cls, details: RepositoryDetails) -> RepositoryDetailsResponse:
        return cls(
            repository=details.repository,
            readme=details.readme,
            is_favorite=details.is_favorite,
        )


class FavoritesResponse(BaseModel):
    items: list[Repository]
    is_empty: bool


class FavoriteToggleResponse(BaseModel):
    id: int | None
    is_favorite: bool


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
