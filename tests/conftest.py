"""Shared test fixtures and configuration."""

from __future__ import annotations

import uuid
from typing import Any

import pytest

from onsenfinder.adapters.base.adapter import DocumentStore, SearchHits, StoreHealth
from onsenfinder.adapters.base.exceptions import DocumentNotFoundError
from onsenfinder.config.settings import Settings
from onsenfinder.core.service import OnsenService
from onsenfinder.models.onsen import Onsen


class InMemoryStore(DocumentStore):
    """Dict-backed store that mimics the engine behaviour the service relies on.

    Ids are assigned on ``index``, ``update`` merges, and ``multi_match``
    matches a substring of any listed field. ``calls`` records every store
    call so tests can assert that rejected operations never reached it.
    """

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []
        self.provisioned = False

    @property
    def name(self) -> str:
        return "memory"

    @property
    def index_name(self) -> str:
        return "onsen"

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def provision(self) -> bool:
        self.calls.append("provision")
        created = not self.provisioned
        self.provisioned = True
        return created

    async def search(self, query: dict[str, Any], size: int) -> SearchHits:
        self.calls.append("search")
        if "match_all" in query:
            matched = list(self.documents.items())
        else:
            term = query["multi_match"]["query"]
            fields = query["multi_match"]["fields"]
            matched = [
                (doc_id, body)
                for doc_id, body in self.documents.items()
                if any(term in str(body.get(field, "")) for field in fields)
            ]
        hits = [{"_id": doc_id, "_index": "onsen", "_score": 1.0, "_source": dict(body)} for doc_id, body in matched]
        return SearchHits(took=1, hits=hits[:size])

    async def get(self, document_id: str) -> dict[str, Any]:
        self.calls.append("get")
        if document_id not in self.documents:
            raise DocumentNotFoundError(f"Document '{document_id}' not found.")
        return {"_id": document_id, "_index": "onsen", "found": True, "_source": dict(self.documents[document_id])}

    async def index(self, body: dict[str, Any]) -> str:
        self.calls.append("index")
        document_id = uuid.uuid4().hex[:20]
        self.documents[document_id] = dict(body)
        return document_id

    async def update(self, document_id: str, partial: dict[str, Any]) -> None:
        self.calls.append("update")
        if document_id not in self.documents:
            raise DocumentNotFoundError(f"Document '{document_id}' not found.")
        self.documents[document_id].update(partial)

    async def delete(self, document_id: str) -> str:
        self.calls.append("delete")
        if self.documents.pop(document_id, None) is None:
            raise DocumentNotFoundError(f"Document '{document_id}' not found.")
        return document_id

    async def health_check(self) -> StoreHealth:
        return StoreHealth(status="healthy", message="in-memory")


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        engine={"hosts": ["http://localhost:9200"], "provision_on_startup": False},
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def service(store: InMemoryStore) -> OnsenService:
    return OnsenService(store)


@pytest.fixture
def hatsune() -> Onsen:
    """The 初音旅館 record used throughout the scenarios."""
    return Onsen(area="東鳴子温泉", name="初音旅館", address="宮城県仙台市")


@pytest.fixture
def nakamura() -> Onsen:
    return Onsen(area="鳴子温泉", name="中村屋旅館", address="宮城県大崎市鳴子温泉湯元")
