"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass

from repo_viewer.domain.entities import Organization


@dataclass(frozen=True, slots=True)
class RepositoryQuery:
    """One page of an organization listing, or of a search within it.

    Built fresh for every request; ``page`` and ``per_page`` are 1-based and
    must be positive.
    """

    organization: Organization
    page: int
    per_page: int
    search_term: str | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be positive, got {self.page}")
        if self.per_page < 1:
            raise ValueError(f"per_page must be positive, got {self.per_page}")

    @property
    def search_qualifier(self) -> str:
        """The ``q`` parameter of a search: ``{organization}/{term}``."""
        if not self.search_term:
            raise ValueError("search_qualifier requires a search term")
        return f"{self.organization.value}/{self.search_term}"
