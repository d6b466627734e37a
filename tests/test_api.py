"""Tests for the HTTP shell."""

from __future__ import annotations

import asyncio
import inspect

import pytest
import pytest_asyncio
from conftest import FakeRepositoryService, make_repository
from httpx import ASGITransport, AsyncClient

from repo_viewer.domain.entities import Readme
from repo_viewer.domain.exceptions import NotFoundError, OtherError
from repo_viewer.infrastructure.json_favorites_store import JsonFavoritesStore
from repo_viewer.interface import routes
from repo_viewer.interface.app import create_app
from repo_viewer.interface.dependencies import (
    get_details_use_case,
    get_favorites,
    get_orchestrator,
)
from repo_viewer.services.fetch_orchestrator import FetchOrchestrator
from repo_viewer.services.repository_details import RepositoryDetailsUseCase


@pytest.fixture
def orchestrator(fake_service: FakeRepositoryService) -> FetchOrchestrator:
    return FetchOrchestrator(fake_service, per_page=15, debounce_seconds=0.01)


@pytest_asyncio.fixture
async def client(fake_service, favorites_store, orchestrator):
    app = create_app()
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_favorites] = lambda: favorites_store
    app.dependency_overrides[get_details_use_case] = lambda: RepositoryDetailsUseCase(
        fake_service, favorites_store
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_initial_state(client: AsyncClient):
    response = await client.get("/repositories")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "idle"
    assert body["items"] == []
    assert body["show_empty_state"] is True
    assert body["error"] is None


@pytest.mark.asyncio
async def test_load_and_next_page(client: AsyncClient, fake_service: FakeRepositoryService):
    fake_service.list_pages[1] = [make_repository(1), make_repository(2)]
    fake_service.list_pages[2] = [make_repository(3)]

    first = await client.post("/repositories/load", json={"organization": "algorand"})
    second = await client.post("/repositories/next", json={"organization": "algorand"})

    assert first.status_code == 200
    assert [item["id"] for item in first.json()["items"]] == [1, 2]
    body = second.json()
    assert [item["id"] for item in body["items"]] == [1, 2, 3]
    assert body["current_page"] == 2
    assert body["organization"] == "algorand"
    assert body["status"] == "populated"


@pytest.mark.asyncio
async def test_failed_load_reports_user_message(client: AsyncClient, fake_service: FakeRepositoryService):
    fake_service.list_pages[1] = NotFoundError()

    response = await client.post("/repositories/load", json={"organization": "perawallet"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "failed"
    assert body["error"] == "not Found"


@pytest.mark.asyncio
async def test_unknown_organization_is_rejected(client: AsyncClient):
    response = await client.post("/repositories/load", json={"organization": "microsoft"})

    assert response.status_code == 422
    assert response.json()["status"] == "error"


@pytest.mark.asyncio
async def test_search_is_debounced(client: AsyncClient, fake_service: FakeRepositoryService, orchestrator):
    fake_service.search_pages[1] = [make_repository(9, "wallet")]

    response = await client.post(
        "/repositories/search", json={"organization": "perawallet", "term": " wallet "}
    )
    assert response.status_code == 202
    assert fake_service.calls_of("search") == []

    await asyncio.sleep(0.1)

    body = (await client.get("/repositories")).json()
    assert [item["name"] for item in body["items"]] == ["wallet"]
    assert body["search_term"] == "wallet"
    (query,) = fake_service.calls_of("search")
    assert query.search_qualifier == "perawallet/wallet"


@pytest.mark.asyncio
async def test_next_search_page(client: AsyncClient, fake_service: FakeRepositoryService):
    fake_service.search_pages[1] = [make_repository(1)]

    response = await client.post(
        "/repositories/search/next", json={"organization": "algorand", "term": "sdk"}
    )

    assert [item["id"] for item in response.json()["items"]] == [1]


@pytest.mark.asyncio
async def test_repository_details(client: AsyncClient, fake_service: FakeRepositoryService):
    url = "https://raw.githubusercontent.com/algorand/sdk/main/README.md"
    fake_service.repositories[("algorand", "sdk")] = make_repository(1, "sdk")
    fake_service.readmes[("algorand", "sdk")] = Readme(download_url=url)
    fake_service.readme_texts[url] = "# SDK"

    response = await client.get("/repositories/algorand/sdk")

    assert response.status_code == 200
    body = response.json()
    assert body["repository"]["full_name"] == "algorand/sdk"
    assert body["readme"] == "# SDK"
    assert body["is_favorite"] is False


@pytest.mark.asyncio
async def test_repository_details_errors(client: AsyncClient, fake_service: FakeRepositoryService):
    fake_service.repositories[("algorand", "missing")] = NotFoundError()
    fake_service.repositories[("algorand", "limited")] = OtherError("API rate limit exceeded")

    missing = await client.get("/repositories/algorand/missing")
    limited = await client.get("/repositories/algorand/limited")

    assert missing.status_code == 404
    assert missing.json() == {"status": "error", "message": "not Found"}
    assert limited.status_code == 502
    assert limited.json()["message"] == "API rate limit exceeded"


@pytest.mark.asyncio
async def test_favorites_lifecycle(client: AsyncClient, favorites_store: JsonFavoritesStore):
    empty = await client.get("/favorites")
    assert empty.json() == {"items": [], "is_empty": True}

    await client.put("/favorites", json={"id": 2, "name": "tealviewer"})
    added = await client.put("/favorites", json={"id": 1, "name": "ARCs"})
    assert [item["name"] for item in added.json()["items"]] == ["ARCs", "tealviewer"]

    removed = await client.delete("/favorites/2")
    assert [item["id"] for item in removed.json()["items"]] == [1]
    assert favorites_store.is_favorite(2) is False


@pytest.mark.asyncio
async def test_toggle_favorite(client: AsyncClient):
    on = await client.post("/favorites/toggle", json={"id": 5, "name": "sdk"})
    off = await client.post("/favorites/toggle", json={"id": 5, "name": "sdk"})

    assert on.json() == {"id": 5, "is_favorite": True}
    assert off.json() == {"id": 5, "is_favorite": False}


@pytest.mark.asyncio
async def test_favorite_without_id_is_rejected(client: AsyncClient):
    response = await client.put("/favorites", json={"name": "sdk"})

    assert response.status_code == 422
    assert response.json()["message"] == "Cannot store a favorite without an id."


@pytest.mark.asyncio
async def test_error_envelope_is_documented(client: AsyncClient):
    schema = (await client.get("/openapi.json")).json()

    assert set(schema["components"]["schemas"]["ErrorResponse"]["properties"]) == {"status", "message"}
    details = schema["paths"]["/repositories/{owner}/{name}"]["get"]["responses"]
    assert details["404"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/ErrorResponse"
    }


@pytest.mark.parametrize(
    "handler",
    [routes.list_favorites, routes.add_favorite, routes.remove_favorite, routes.toggle_favorite],
)
def test_favorites_handlers_run_in_threadpool(handler):
    assert not inspect.iscoroutinefunction(handler)
