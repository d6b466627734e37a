"""Port: favorites store — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_viewer.domain.entities import Repository


class FavoritesStore(Protocol):
    """Local persistence of the user's favorite repositories, keyed by id."""

    def is_favorite(self, repository_id: int) -> bool:
        """Return whether a repository with this id is stored."""
        ...

    def add(self, repository: Repository) -> None:
        """Store *repository*, replacing any entry with the same id."""
        ...

    def remove(self, repository_id: int) -> None:
        """Delete the entry with this id; unknown ids are ignored."""
        ...

    def list(self) -> list[Repository]:
        """Return all favorites sorted by name ascending."""
        ...
