"""Integration test fixtures — a real Elasticsearch reached over HTTP.

Expects a cluster at ``ONSENFINDER_TEST_ES_URL`` (default
``http://localhost:9200``), e.g.::

    docker run -p 9200:9200 -e discovery.type=single-node -e xpack.security.enabled=false \
        docker.elastic.co/elasticsearch/elasticsearch:8.13.4

Tests are skipped when the cluster is unreachable. Set
``ONSENFINDER_TEST_ANALYZER=kuromoji`` when the plugin is installed.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import AsyncIterator

import httpx
import pytest

from onsenfinder.adapters.elasticsearch.adapter import ElasticsearchStore
from onsenfinder.core.service import OnsenService

ES_URL = os.environ.get("ONSENFINDER_TEST_ES_URL", "http://localhost:9200")
ANALYZER = os.environ.get("ONSENFINDER_TEST_ANALYZER", "standard")


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    try:
        r = httpx.get(ES_URL, timeout=5)
    except httpx.HTTPError:
        pytest.skip(f"Elasticsearch not reachable at {ES_URL}")
    if r.status_code != 200:
        pytest.skip(f"Elasticsearch at {ES_URL} returned {r.status_code}")
    return ES_URL


@pytest.fixture
async def es_store(elasticsearch_ready: str) -> AsyncIterator[ElasticsearchStore]:
    """A store on a fresh, uniquely named index, deleted afterwards."""
    index = f"onsen-test-{uuid.uuid4().hex[:8]}"
    store = ElasticsearchStore(hosts=[elasticsearch_ready], index=index, analyzer=ANALYZER, refresh="wait_for")
    await store.initialize()
    await store.provision()
    yield store
    await store._client.indices.delete(index=index, ignore_unavailable=True)
    await store.shutdown()


@pytest.fixture
def es_service(es_store: ElasticsearchStore) -> OnsenService:
    return OnsenService(es_store)
