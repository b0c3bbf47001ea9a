"""Elasticsearch store — system of record for onsen documents (Elasticsearch v8+).

Uses the async ``elasticsearch`` client. A single ``AsyncElasticsearch``
instance is shared by every request; it pools connections and performs
transport-level retries, so the store itself stays stateless per call.

The ``name`` and ``address`` fields are analyzed with kuromoji by default,
which requires the ``analysis-kuromoji`` plugin on the cluster::

    bin/elasticsearch-plugin install analysis-kuromoji
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any, NoReturn

from elasticsearch import ApiError, AsyncElasticsearch, BadRequestError, NotFoundError, TransportError

from onsenfinder.adapters.base.adapter import DocumentStore, SearchHits, StoreHealth
from onsenfinder.adapters.base.exceptions import (
    ConfigurationError,
    DecodeError,
    DocumentNotFoundError,
    EngineUnavailableError,
    QueryError,
)

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("name", "address")


class ElasticsearchStore(DocumentStore):
    """Document store backed by a single Elasticsearch index.

    Args:
        hosts: List of Elasticsearch node URLs.
        index: Index holding onsen documents.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        api_key: Optional encoded API key.
        verify_certs: Whether to verify TLS certificates.
        request_timeout: Per-request transport timeout in seconds.
        max_retries: Transport retries on connection errors.
        retry_on_timeout: Whether timeouts are retried too.
        analyzer: Analyzer applied to ``name`` and ``address`` at provisioning.
        refresh: Refresh policy passed to write calls.
        **kwargs: Additional keyword arguments forwarded to ``AsyncElasticsearch``.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        index: str = "onsen",
        username: str | None = None,
        password: str | None = None,
        api_key: str | None = None,
        verify_certs: bool = True,
        request_timeout: float = 10.0,
        max_retries: int = 3,
        retry_on_timeout: bool = False,
        analyzer: str = "kuromoji",
        refresh: str = "false",
        **kwargs: Any,
    ) -> None:
        self._hosts = hosts or ["http://localhost:9200"]
        self._index = index
        self._username = username
        self._password = password
        self._api_key = api_key
        self._verify_certs = verify_certs
        self._request_timeout = request_timeout
        self._max_retries = max_retries
        self._retry_on_timeout = retry_on_timeout
        self._analyzer = analyzer
        self._refresh = refresh
        self._extra_kwargs = kwargs
        self._client: Any = None

    @property
    def name(self) -> str:
        return "elasticsearch"

    @property
    def index_name(self) -> str:
        return self._index

    async def initialize(self) -> None:
        """Create the ``AsyncElasticsearch`` client.

        No request is sent here; an unreachable cluster surfaces on the
        first call instead of preventing startup.

        Raises:
            ConfigurationError: If only one of username and password is set.
        """
        if bool(self._username) != bool(self._password):
            raise ConfigurationError("Elasticsearch basic auth needs both username and password.")

        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
            "request_timeout": self._request_timeout,
            "max_retries": self._max_retries,
            "retry_on_timeout": self._retry_on_timeout,
        }
        if self._username and self._password:
            client_kwargs["basic_auth"] = (self._username, self._password)
        if self._api_key:
            client_kwargs["api_key"] = self._api_key

        client_kwargs.update(self._extra_kwargs)

        self._client = AsyncElasticsearch(**client_kwargs)
        logger.info("Elasticsearch client created for %s (index '%s')", self._hosts, self._index)

    async def shutdown(self) -> None:
        """Close the Elasticsearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    # ── Provisioning ─────────────────────────────────────────────────────

    def index_mappings(self) -> dict[str, Any]:
        """Mapping applied when the index is created."""
        return {
            "properties": {field: {"type": "text", "analyzer": self._analyzer} for field in _TEXT_FIELDS},
        }

    async def provision(self) -> bool:
        """Create the index with the text mapping unless it already exists."""
        client = self._require_client()
        try:
            await client.indices.create(index=self._index, mappings=self.index_mappings())
        except BadRequestError as e:
            if "resource_already_exists_exception" in str(e):
                logger.info("Index '%s' already exists", self._index)
                return False
            self._raise_translated(e, f"create index '{self._index}'")
        except (ApiError, TransportError) as e:
            self._raise_translated(e, f"create index '{self._index}'")
        logger.info("Created index '%s' with %s analyzer", self._index, self._analyzer)
        return True

    # ── Document operations ──────────────────────────────────────────────

    async def search(self, query: dict[str, Any], size: int) -> SearchHits:
        """Execute a query clause against the index."""
        client = self._require_client()
        try:
            response = await client.search(index=self._index, query=query, size=size)
        except (ApiError, TransportError) as e:
            self._raise_translated(e, "search")

        body = self._as_dict(response)
        try:
            return SearchHits(took=body["took"], hits=list(body["hits"]["hits"]))
        except (KeyError, TypeError) as e:
            raise DecodeError(f"Malformed search response: missing {e}") from e

    async def get(self, document_id: str) -> dict[str, Any]:
        """Retrieve a single document envelope by id."""
        client = self._require_client()
        try:
            response = await client.get(index=self._index, id=document_id)
        except (ApiError, TransportError) as e:
            self._raise_translated(e, f"get document '{document_id}'")
        return self._as_dict(response)

    async def index(self, body: dict[str, Any]) -> str:
        """Index a new document, letting Elasticsearch assign its id."""
        client = self._require_client()
        try:
            response = await client.index(index=self._index, document=body, refresh=self._refresh)
        except (ApiError, TransportError) as e:
            self._raise_translated(e, "index document")
        return self._response_id(response)

    async def update(self, document_id: str, partial: dict[str, Any]) -> None:
        """Apply a partial-document merge to an existing document."""
        client = self._require_client()
        try:
            await client.update(index=self._index, id=document_id, doc=partial, refresh=self._refresh)
        except (ApiError, TransportError) as e:
            self._raise_translated(e, f"update document '{document_id}'")

    async def delete(self, document_id: str) -> str:
        """Delete a document by id."""
        client = self._require_client()
        try:
            response = await client.delete(index=self._index, id=document_id, refresh=self._refresh)
        except (ApiError, TransportError) as e:
            self._raise_translated(e, f"delete document '{document_id}'")
        return self._response_id(response)

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> StoreHealth:
        """Check Elasticsearch cluster health."""
        if not self._client:
            return StoreHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = self._as_dict(await self._client.cluster.health())
            latency_ms = int((time.monotonic() - start) * 1000)

            status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}

            return StoreHealth(
                status=status_map.get(health.get("status", "red"), "unhealthy"),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            return StoreHealth(status="unhealthy", message=str(e))

    # ── Helpers ──────────────────────────────────────────────────────────

    def _require_client(self) -> Any:
        if not self._client:
            raise EngineUnavailableError("Elasticsearch client not initialized.")
        return self._client

    @staticmethod
    def _as_dict(response: Any) -> dict[str, Any]:
        """Unwrap an ``ObjectApiResponse`` (or a plain dict) into a dict."""
        return dict(getattr(response, "body", response))

    @staticmethod
    def _response_id(response: Any) -> str:
        try:
            return str(ElasticsearchStore._as_dict(response)["_id"])
        except (KeyError, TypeError) as e:
            raise DecodeError("Elasticsearch response has no '_id'") from e

    @staticmethod
    def _raise_translated(error: Exception, action: str) -> NoReturn:
        """Re-raise an engine exception as the matching ``AdapterError``."""
        if isinstance(error, NotFoundError):
            raise DocumentNotFoundError(f"Failed to {action}: not found") from error
        if isinstance(error, ApiError):
            raise QueryError(f"Failed to {action}: {error}") from error
        raise EngineUnavailableError(f"Failed to {action}: {error}") from error
