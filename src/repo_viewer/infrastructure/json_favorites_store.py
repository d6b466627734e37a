"""JSON-file favorites store — implements the FavoritesStore port."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from repo_viewer.domain.entities import Repository
from repo_viewer.domain.exceptions import MissingRepositoryIdError

logger = logging.getLogger(__name__)

_favorites_adapter = TypeAdapter(list[Repository])

# Only the fields a favorites list renders are persisted.
_PERSISTED_FIELDS: dict[str, Any] = {
    "id": True,
    "name": True,
    "full_name": True,
    "owner": {"login": True, "avatar_url": True},
    "html_url": True,
    "description": True,
    "language": True,
    "stargazers_count": True,
    "watchers_count": True,
    "forks_count": True,
    "topics": True,
}


class JsonFavoritesStore:
    """Keeps favorite repositories in a single JSON file.

    Args:
        path: Location of the JSON file.  Parent directories are created on
            first write.
    """

    def __init__(self, path: str | Path = "data/favorites.json") -> None:
        self.path = Path(path)

    def is_favorite(self, repository_id: int) -> bool:
        return any(repo.id == repository_id for repo in self._load())

    def add(self, repository: Repository) -> None:
        """Store *repository*, replacing any entry with the same id."""
        if repository.id is None:
            raise MissingRepositoryIdError("Cannot store a favorite without an id.")
        favorites = [repo for repo in self._load() if repo.id != repository.id]
        favorites.append(_reduce(repository))
        self._save(favorites)
        logger.info("Added favorite %s (%s)", repository.full_name or repository.name, repository.id)

    def remove(self, repository_id: int) -> None:
        favorites = self._load()
        remaining = [repo for repo in favorites if repo.id != repository_id]
        if len(remaining) == len(favorites):
            return
        self._save(remaining)
        logger.info("Removed favorite %s", repository_id)

    def list(self) -> list[Repository]:
        """Return favorites sorted by name (case-insensitive, nameless last)."""
        return sorted(
            self._load(),
            key=lambda repo: (repo.name is None, (repo.name or "").lower()),
        )

    def _load(self) -> list[Repository]:
        if not self.path.exists():
            return []
        try:
            return _favorites_adapter.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as exc:
            logger.warning("Ignoring unreadable favorites file %s: %s", self.path, exc)
            return []

    def _save(self, favorites: list[Repository]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(_favorites_adapter.dump_json(favorites, indent=2, exclude_none=True))


def _reduce(repository: Repository) -> Repository:
    return Repository.model_validate(
        repository.model_dump(include=_PERSISTED_FIELDS, exclude_none=True)
    )
