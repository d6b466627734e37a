"""Fetch orchestrator — paging, search debounce and the published list state.

The orchestrator is the single owner of :class:`FetchState`.  It lives on one
asyncio event loop; state only changes between awaits, so no lock is needed.
Consumers read :attr:`FetchOrchestrator.state` or :meth:`subscribe` to every
new snapshot, and never mutate it.

Two counters drive sequencing:

* the *request generation* is bumped on every dispatch and on :meth:`reset`;
  a response that comes back under an older generation is dropped;
* the *search generation* is bumped on every :meth:`search` call; a debounce
  timer only fires if no newer call arrived while it slept.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Sequence

from repo_viewer.domain.entities import FetchState, Organization, Repository
from repo_viewer.domain.exceptions import NetworkError, OtherError
from repo_viewer.domain.ports.repository_service import RepositoryService
from repo_viewer.domain.value_objects import RepositoryQuery

logger = logging.getLogger(__name__)

MISSING_SEARCH_TERM_MESSAGE = "searchTerm is not exist"

StateListener = Callable[[FetchState], None]


class FetchOrchestrator:
    """Turns browse / search intents into requests and merges the results.

    Parameters
    ----------
    service:
        Port used for every network call.
    per_page:
        Page size sent with every list and search request.
    debounce_seconds:
        Quiet period a :meth:`search` call waits for before executing.
    """

    def __init__(
        self,
        service: RepositoryService,
        per_page: int = 15,
        debounce_seconds: float = 0.5,
    ) -> None:
        self._service = service
        self._per_page = per_page
        self._debounce_seconds = debounce_seconds
        self._state = FetchState()
        self._listeners: list[StateListener] = []
        self._generation = 0
        self._search_generation = 0
        self._debounce_task: asyncio.Task[None] | None = None
        self._last_search: tuple[Organization, str] | None = None

    # ── Observation ─────────────────────────────────────────────────────

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def debounce_seconds(self) -> float:
        return self._debounce_seconds

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call *listener* with every new snapshot; returns an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Browsing ────────────────────────────────────────────────────────

    async def load_first_page(self, organization: Organization) -> None:
        """Replace the list with page 1 of *organization*'s repositories."""
        if self._state.is_loading:
            logger.debug("load_first_page(%s) ignored: a fetch is in flight", organization.value)
            return

        query = RepositoryQuery(organization, page=1, per_page=self._per_page)
        # current_page stays 0 until the page is merged.
        generation = self._begin(FetchState(organization=organization, is_loading=True))
        logger.info("Loading %s repositories", organization.value)
        await self._dispatch(generation, query.page, lambda: self._service.fetch_repositories(query))

    async def load_next_page(self, organization: Organization) -> None:
        """Append the next page of *organization*'s repositories."""
        if self._state.is_loading:
            logger.debug("load_next_page(%s) ignored: a fetch is in flight", organization.value)
            return

        query = RepositoryQuery(
            organization, page=self._state.current_page + 1, per_page=self._per_page
        )
        generation = self._begin(
            replace(
                self._state,
                organization=organization,
                active_search_term=None,
                is_loading=True,
                error=None,
            )
        )
        logger.info("Loading %s repositories, page %d", organization.value, query.page)
        await self._dispatch(generation, query.page, lambda: self._service.fetch_repositories(query))

    # ── Searching ───────────────────────────────────────────────────────

    def search(self, organization: Organization, term: str) -> asyncio.Task[None]:
        """Schedule a debounced search and return the timer task.

        Each call restarts the quiet period; only the last (organization,
        term) pair of a burst is executed.  Must be called from a running
        event loop.
        """
        self._search_generation += 1
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = asyncio.create_task(
            self._debounced_search(self._search_generation, organization, term)
        )
        return self._debounce_task

    async def load_next_search_page(self, organization: Organization, term: str) -> None:
        """Append the next page of results for *term*."""
        if self._state.is_loading:
            logger.debug("load_next_search_page(%s) ignored: a fetch is in flight", term)
            return
        if not term:
            self._publish(replace(self._state, error=OtherError(MISSING_SEARCH_TERM_MESSAGE)))
            return

        query = RepositoryQuery(
            organization,
            page=self._state.current_page + 1,
            per_page=self._per_page,
            search_term=term,
        )
        generation = self._begin(
            replace(
                self._state,
                organization=organization,
                active_search_term=term,
                is_loading=True,
                error=None,
            )
        )
        logger.info("Searching %r, page %d", query.search_qualifier, query.page)
        await self._dispatch(generation, query.page, lambda: self._search_items(query))

    def reset(self) -> None:
        """Drop pending work and return to the idle state.

        A pending debounce timer is cancelled and a response still in flight
        will be discarded when it arrives.
        """
        self._search_generation += 1
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None
        self._last_search = None
        self._generation += 1
        self._publish(FetchState())

    async def _debounced_search(self, generation: int, organization: Organization, term: str) -> None:
        await asyncio.sleep(self._debounce_seconds)
        if generation != self._search_generation:
            return
        # Past the quiet period the search is no longer cancellable by new input.
        self._debounce_task = None
        await self._perform_search(organization, term)

    async def _perform_search(self, organization: Organization, term: str) -> None:
        if (organization, term) == self._last_search:
            logger.debug("Search %s/%s suppressed: same as the previous one", organization.value, term)
            return

        if not term:
            self._last_search = (organization, term)
            self._publish(replace(self._state, error=OtherError(MISSING_SEARCH_TERM_MESSAGE)))
            return

        if self._state.is_loading:
            logger.debug("search(%s) ignored: a fetch is in flight", term)
            return

        self._last_search = (organization, term)
        query = RepositoryQuery(organization, page=1, per_page=self._per_page, search_term=term)
        generation = self._begin(
            FetchState(
                organization=organization,
                active_search_term=term,
                is_loading=True,
            )
        )
        logger.info("Searching %r", query.search_qualifier)
        await self._dispatch(generation, query.page, lambda: self._search_items(query))

    async def _search_items(self, query: RepositoryQuery) -> list[Repository]:
        result = await self._service.search_repositories(query)
        return result.items

    # ── Internals ───────────────────────────────────────────────────────

    def _begin(self, state: FetchState) -> int:
        self._generation += 1
        self._publish(state)
        return self._generation

    async def _dispatch(
        self,
        generation: int,
        page: int,
        fetch: Callable[[], Awaitable[Sequence[Repository]]],
    ) -> None:
        """Await *fetch* and merge its page, unless a newer generation exists."""
        try:
            items = await fetch()
        except NetworkError as exc:
            if self._is_stale(generation):
                return
            logger.warning("Fetch of page %d failed: %r", page, exc)
            self._publish(replace(self._state, is_loading=False, error=exc))
            return
        except BaseException:
            if not self._is_stale(generation):
                self._publish(replace(self._state, is_loading=False))
            raise

        if self._is_stale(generation):
            return
        logger.debug("Page %d returned %d repositories", page, len(items))
        self._publish(
            replace(
                self._state,
                items=self._state.items + tuple(items),
                current_page=page,
                is_loading=False,
            )
        )

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug("Discarding response of superseded request %d", generation)
            return True
        return False

    def _publish(self, state: FetchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
