"""Domain entities — records decoded from the GitHub REST API plus the
fetch-state snapshot published by the orchestrator.

Wire field names are snake_case and map 1:1 to attribute names.  Every field
of the remote resources is optional: only ``id``, ``name``, ``owner``,
``language``, the counters and ``topics`` drive any behaviour here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from repo_viewer.domain.exceptions import NetworkError


class Organization(str, Enum):
    """GitHub organizations whose repositories can be browsed."""

    ALGORAND = "algorand"
    PERAWALLET = "perawallet"
    ALGORAND_FOUNDATION = "algorandFoundation"

    @classmethod
    def from_index(cls, index: int) -> Organization:
        """Map a tab / segment index to an organization."""
        if index == 0:
            return cls.ALGORAND
        if index == 1:
            return cls.PERAWALLET
        return cls.ALGORAND_FOUNDATION


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Owner(_WireModel):
    login: str | None = None
    id: int | None = None
    avatar_url: str | None = None
    html_url: str | None = None
    type: str | None = None


class License(_WireModel):
    key: str | None = None
    name: str | None = None
    spdx_id: str | None = None
    url: str | None = None
    node_id: str | None = None


class Repository(_WireModel):
    """A GitHub repository resource (``GET /repos/{owner}/{repo}``)."""

    id: int | None = None
    node_id: str | None = None
    name: str | None = None
    full_name: str | None = None
    private: bool | None = None
    owner: Owner | None = None
    html_url: str | None = None
    description: str | None = None
    fork: bool | None = None
    url: str | None = None
    forks_url: str | None = None
    keys_url: str | None = None
    collaborators_url: str | None = None
    teams_url: str | None = None
    hooks_url: str | None = None
    issue_events_url: str | None = None
    events_url: str | None = None
    assignees_url: str | None = None
    branches_url: str | None = None
    tags_url: str | None = None
    blobs_url: str | None = None
    git_tags_url: str | None = None
    git_refs_url: str | None = None
    trees_url: str | None = None
    statuses_url: str | None = None
    languages_url: str | None = None
    stargazers_url: str | None = None
    contributors_url: str | None = None
    subscribers_url: str | None = None
    subscription_url: str | None = None
    commits_url: str | None = None
    git_commits_url: str | None = None
    comments_url: str | None = None
    issue_comment_url: str | None = None
    contents_url: str | None = None
    compare_url: str | None = None
    merges_url: str | None = None
    archive_url: str | None = None
    downloads_url: str | None = None
    issues_url: str | None = None
    pulls_url: str | None = None
    milestones_url: str | None = None
    notifications_url: str | None = None
    labels_url: str | None = None
    releases_url: str | None = None
    deployments_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None
    git_url: str | None = None
    ssh_url: str | None = None
    clone_url: str | None = None
    svn_url: str | None = None
    homepage: str | None = None
    size: int | None = None
    stargazers_count: int | None = None
    watchers_count: int | None = None
    language: str | None = None
    has_issues: bool | None = None
    has_projects: bool | None = None
    has_downloads: bool | None = None
    has_wiki: bool | None = None
    has_pages: bool | None = None
    has_discussions: bool | None = None
    forks_count: int | None = None
    mirror_url: str | None = None
    archived: bool | None = None
    disabled: bool | None = None
    open_issues_count: int | None = None
    license: License | None = None
    allow_forking: bool | None = None
    is_template: bool | None = None
    web_commit_signoff_required: bool | None = None
    topics: list[str] | None = None
    visibility: str | None = None
    forks: int | None = None
    open_issues: int | None = None
    watchers: int | None = None
    default_branch: str | None = None


class SearchResult(_WireModel):
    """Envelope of ``GET /search/repositories``."""

    total_count: int | None = None
    incomplete_results: bool | None = None
    items: list[Repository] = Field(default_factory=list)


class Readme(_WireModel):
    """README metadata; ``download_url`` points at the raw text."""

    download_url: str | None = None


class ErrorEnvelope(BaseModel):
    """GitHub error body: ``{"message": "..."}``."""

    message: str


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class FetchState:
    """Immutable snapshot of the repository list published to observers."""

    items: tuple[Repository, ...] = ()
    is_loading: bool = False
    error: NetworkError | None = None
    current_page: int = 0
    organization: Organization | None = None
    active_search_term: str | None = None

    @property
    def show_empty_state(self) -> bool:
        return not self.is_loading and not self.items

    @property
    def status(self) -> FetchStatus:
        if self.is_loading:
            return FetchStatus.LOADING
        if self.error is not None:
            return FetchStatus.FAILED
        if self.current_page == 0:
            return FetchStatus.IDLE
        return FetchStatus.POPULATED if self.items else FetchStatus.EMPTY
