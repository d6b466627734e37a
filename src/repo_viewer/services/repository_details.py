"""Repository details use case — one repository, its README and favorite flag."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from repo_viewer.domain.entities import Repository
from repo_viewer.domain.exceptions import MissingRepositoryIdError, NotFoundError
from repo_viewer.domain.ports.favorites_store import FavoritesStore
from repo_viewer.domain.ports.repository_service import RepositoryService

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RepositoryDetails:
    repository: Repository
    readme: str | None
    is_favorite: bool


class RepositoryDetailsUseCase:
    """Composes the repository service with the favorites store."""

    def __init__(self, service: RepositoryService, favorites: FavoritesStore) -> None:
        self._service = service
        self._favorites = favorites

    async def load(self, owner: str, name: str) -> RepositoryDetails:
        """Fetch the repository, then its README (metadata, then text)."""
        repository = await self._service.fetch_repository(owner, name)
        try:
            readme = await self.fetch_readme(owner, name)
        except NotFoundError:
            logger.info("%s/%s has no README", owner, name)
            readme = None

        return RepositoryDetails(
            repository=repository,
            readme=readme,
            is_favorite=repository.id is not None and self._favorites.is_favorite(repository.id),
        )

    async def fetch_readme(self, owner: str, name: str) -> str | None:
        """Return README text, or ``None`` when the metadata has no download URL."""
        metadata = await self._service.fetch_readme_metadata(owner, name)
        if not metadata.download_url:
            return None
        return await self._service.fetch_readme(metadata.download_url)

    def toggle_favorite(self, repository: Repository) -> bool:
        """Flip the favorite flag of *repository* and return the new value."""
        if repository.id is None:
            raise MissingRepositoryIdError("Cannot favorite a repository without an id.")
        if self._favorites.is_favorite(repository.id):
            self._favorites.remove(repository.id)
            return False
        self._favorites.add(repository)
        return True
