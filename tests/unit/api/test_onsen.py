"""Tests for the onsen resource endpoints."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from onsenfinder.adapters.base.exceptions import DecodeError, EngineUnavailableError, QueryError
from onsenfinder.api.app import GREETING, create_app
from onsenfinder.api.deps import set_service
from onsenfinder.config.settings import Settings
from onsenfinder.core.service import OnsenService
from tests.conftest import InMemoryStore

HATSUNE = {"area": "東鳴子温泉", "name": "初音旅館", "address": "宮城県仙台市"}


@pytest.fixture
def client(settings: Settings, service: OnsenService) -> Iterator[TestClient]:
    """Test client over the in-memory store (lifespan is not run)."""
    app = create_app(settings)
    set_service(service)
    yield TestClient(app)
    set_service(None)


@pytest.fixture
def failing_client(settings: Settings) -> Iterator[tuple[TestClient, AsyncMock]]:
    """Test client whose store raises whatever the test configures."""
    store = AsyncMock()
    app = create_app(settings)
    set_service(OnsenService(store))
    yield TestClient(app), store
    set_service(None)


def _create(client: TestClient, body: dict | None = None) -> dict:
    resp = client.put("/onsen/", json=body or HATSUNE)
    assert resp.status_code == 200
    return resp.json()


class TestIndex:
    def test_greeting(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.text == GREETING
        assert resp.headers["content-type"].startswith("text/plain")


class TestCreateEndpoint:
    def test_create_returns_record_with_id(self, client: TestClient) -> None:
        data = _create(client)
        assert data["id"]
        assert {k: data[k] for k in HATSUNE} == HATSUNE

    def test_create_with_id_is_bad_request(self, client: TestClient, store: InMemoryStore) -> None:
        resp = client.put("/onsen/", json={**HATSUNE, "id": "mine"})
        assert resp.status_code == 400
        assert resp.json()["detail"]["error"] == "invalid_input"
        assert store.documents == {}

    def test_create_with_null_id_is_accepted(self, client: TestClient) -> None:
        assert _create(client, {**HATSUNE, "id": None})["id"]

    def test_create_missing_field_is_validation_error(self, client: TestClient) -> None:
        resp = client.put("/onsen/", json={"area": "a", "name": "n"})
        assert resp.status_code == 422

    def test_create_engine_failure_is_not_found(self, failing_client: tuple[TestClient, AsyncMock]) -> None:
        client, store = failing_client
        store.index.side_effect = EngineUnavailableError("down")
        resp = client.put("/onsen/", json=HATSUNE)
        assert resp.status_code == 404
        assert resp.json()["detail"]["error"] == "engine_unavailable"


class TestGetEndpoint:
    def test_get_existing(self, client: TestClient) -> None:
        created = _create(client)
        resp = client.get(f"/onsen/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == created

    def test_get_missing(self, client: TestClient) -> None:
        resp = client.get("/onsen/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"]["error"] == "not_found"

    def test_get_malformed_document(self, failing_client: tuple[TestClient, AsyncMock]) -> None:
        client, store = failing_client
        store.get.return_value = {"_id": "x", "_index": "onsen", "_source": {"area": "a"}}
        resp = client.get("/onsen/x")
        assert resp.status_code == 404
        assert resp.json()["detail"]["error"] == "decode_error"


class TestSearchEndpoint:
    def test_search_without_query_lists_all(self, client: TestClient) -> None:
        first = _create(client)
        second = _create(client, {"area": "鳴子温泉", "name": "中村屋旅館", "address": "宮城県大崎市"})

        for url in ("/onsen/", "/onsen/?query="):
            data = client.get(url).json()
            assert {o["id"] for o in data["onsens"]} == {first["id"], second["id"]}
            assert isinstance(data["took"], int)

    def test_search_with_query(self, client: TestClient) -> None:
        created = _create(client)
        _create(client, {"area": "鳴子温泉", "name": "中村屋旅館", "address": "宮城県大崎市"})

        resp = client.get("/onsen/", params={"query": "初音"})
        assert resp.status_code == 200
        assert [o["id"] for o in resp.json()["onsens"]] == [created["id"]]

    def test_search_engine_failure_is_not_found(self, failing_client: tuple[TestClient, AsyncMock]) -> None:
        client, store = failing_client
        store.search.side_effect = QueryError("bad query")
        resp = client.get("/onsen/", params={"query": "x"})
        assert resp.status_code == 404
        assert resp.json()["detail"]["error"] == "query_error"


class TestUpdateEndpoint:
    def test_update_with_matching_id(self, client: TestClient) -> None:
        created = _create(client)
        body = {"id": created["id"], "area": "鳴子温泉", "name": "初音旅館", "address": "宮城県大崎市"}

        resp = client.post(f"/onsen/{created['id']}", json=body)

        assert resp.status_code == 200
        assert resp.json() == body
        assert client.get(f"/onsen/{created['id']}").json() == body

    def test_update_without_id_echoes_path_id(self, client: TestClient) -> None:
        created = _create(client)
        resp = client.post(f"/onsen/{created['id']}", json=HATSUNE)
        assert resp.json() == {**HATSUNE, "id": created["id"]}

    def test_partial_update_keeps_other_fields(self, client: TestClient) -> None:
        created = _create(client)

        resp = client.post(f"/onsen/{created['id']}", json={"address": "宮城県大崎市"})

        assert resp.json() == {"id": created["id"], "address": "宮城県大崎市"}
        assert client.get(f"/onsen/{created['id']}").json() == {**created, "address": "宮城県大崎市"}

    def test_update_with_mismatched_id(self, client: TestClient, store: InMemoryStore) -> None:
        created = _create(client)
        store.calls.clear()

        resp = client.post(f"/onsen/{created['id']}", json={**HATSUNE, "id": "other", "name": "x"})

        assert resp.status_code == 404
        assert resp.json()["detail"]["error"] == "invalid_input"
        assert store.calls == []
        assert client.get(f"/onsen/{created['id']}").json() == created

    @pytest.mark.parametrize("field", ["area", "name", "address"])
    def test_update_with_null_field_is_rejected(self, client: TestClient, store: InMemoryStore, field: str) -> None:
        created = _create(client)
        store.calls.clear()

        resp = client.post(f"/onsen/{created['id']}", json={field: None})

        assert resp.status_code == 422
        assert store.calls == []
        fetched = client.get(f"/onsen/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == created

    def test_update_missing(self, client: TestClient) -> None:
        resp = client.post("/onsen/nope", json=HATSUNE)
        assert resp.status_code == 404


class TestDeleteEndpoint:
    def test_delete_then_get(self, client: TestClient) -> None:
        created = _create(client)

        resp = client.delete(f"/onsen/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"id": created["id"]}

        assert client.get(f"/onsen/{created['id']}").status_code == 404

    def test_delete_missing(self, client: TestClient) -> None:
        assert client.delete("/onsen/nope").status_code == 404

    def test_delete_decode_failure(self, failing_client: tuple[TestClient, AsyncMock]) -> None:
        client, store = failing_client
        store.delete.side_effect = DecodeError("no _id")
        resp = client.delete("/onsen/x")
        assert resp.status_code == 404
        assert resp.json()["detail"]["error"] == "decode_error"
