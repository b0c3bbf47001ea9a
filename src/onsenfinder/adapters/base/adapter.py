"""Base document store — Abstract interface for the search engine collaborator.

The store is the only component that talks to the engine. It is
responsible for:
  1. Provisioning the index schema at startup
  2. Executing search, get, index, update, and delete calls
  3. Translating engine exceptions into ``AdapterError`` subclasses
  4. Reporting health status

Stores return raw engine envelopes; turning them into ``Onsen`` records is
the job of ``onsenfinder.core.codec``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class StoreHealth(BaseModel):
    """Health status of a document store."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class StoredDocument(BaseModel):
    """Engine-side representation of a record: envelope id, index, and body."""

    document_id: str = Field(description="Engine-assigned document id")
    index: str = Field(description="Index the document lives in")
    body: dict[str, Any] = Field(default_factory=dict, description="Stored source, without the id")


class SearchHits(BaseModel):
    """Search result envelope."""

    took: int = Field(default=0, description="Engine processing time in ms")
    hits: list[dict[str, Any]] = Field(default_factory=list, description="Raw hits in relevance order")


class DocumentStore(ABC):
    """Abstract base class for document stores.

    Implementations must be safe to share between concurrent requests;
    connection pooling and transport retries belong to the implementation,
    never to the caller.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique store name (e.g., 'elasticsearch')."""

    @property
    @abstractmethod
    def index_name(self) -> str:
        """Index holding the onsen documents."""

    @abstractmethod
    async def initialize(self) -> None:
        """Open connections. Called once during application startup."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Close connections and release resources."""

    @abstractmethod
    async def provision(self) -> bool:
        """Create the index schema if it does not exist yet.

        Returns:
            True if the index was created, False if it already existed.
        """

    @abstractmethod
    async def search(self, query: dict[str, Any], size: int) -> SearchHits:
        """Run a query DSL clause against the index.

        Args:
            query: The ``query`` clause (e.g. ``{"match_all": {}}``).
            size: Maximum number of hits to return.
        """

    @abstractmethod
    async def get(self, document_id: str) -> dict[str, Any]:
        """Fetch one raw document envelope by id.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """

    @abstractmethod
    async def index(self, body: dict[str, Any]) -> str:
        """Store a new document and return the engine-assigned id."""

    @abstractmethod
    async def update(self, document_id: str, partial: dict[str, Any]) -> None:
        """Merge ``partial`` into an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """

    @abstractmethod
    async def delete(self, document_id: str) -> str:
        """Delete a document and return the id reported by the engine.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """

    @abstractmethod
    async def health_check(self) -> StoreHealth:
        """Check the health of the search engine."""
