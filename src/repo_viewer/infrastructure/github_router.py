"""Endpoint builder — maps request intents to ready-to-send ``httpx.Request``s.

Pure: no I/O happens here.  The adapter sends whatever this module builds.
"""

from __future__ import annotations

import httpx

from repo_viewer.domain.value_objects import RepositoryQuery

DEFAULT_BASE_URL = "https://api.github.com/"
_USER_AGENT = "github-repo-viewer/1.0"


class GitHubRouter:
    """Builds GitHub REST requests against a fixed base host."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, token: str | None = None) -> None:
        self._base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "User-Agent": _USER_AGENT,
        }
        if token:
            self._headers["Authorization"] = f"token {token}"

    def list_repositories(self, query: RepositoryQuery) -> httpx.Request:
        """GET orgs/{org}/repos?page=&per_page="""
        return self._get(
            f"orgs/{query.organization.value}/repos",
            params={"page": query.page, "per_page": query.per_page},
        )

    def search_repositories(self, query: RepositoryQuery) -> httpx.Request:
        """GET search/repositories?q={org}/{term}&page=&per_page="""
        return self._get(
            "search/repositories",
            params={
                "q": query.search_qualifier,
                "page": query.page,
                "per_page": query.per_page,
            },
        )

    def fetch_repository(self, owner: str, name: str) -> httpx.Request:
        return self._get(f"repos/{owner}/{name}")

    def fetch_readme_metadata(self, owner: str, name: str) -> httpx.Request:
        return self._get(f"repos/{owner}/{name}/readme")

    def fetch_readme_content(self, url: str) -> httpx.Request:
        """GET the absolute download URL verbatim (no path composition).

        Raises ``httpx.InvalidURL`` when *url* is not an absolute http(s) URL.
        """
        target = httpx.URL(url)
        if target.scheme not in ("http", "https") or not target.host:
            raise httpx.InvalidURL(f"Not an absolute URL: {url!r}")
        return httpx.Request("GET", target, headers=self._headers)

    def _get(
        self,
        path: str,
        params: dict[str, str | int] | None = None,
    ) -> httpx.Request:
        return httpx.Request(
            "GET",
            f"{self._base_url}{path}",
            params=params,
            headers=self._headers,
        )
