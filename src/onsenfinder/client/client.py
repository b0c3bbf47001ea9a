"""Onsen Finder Python SDK — Async and sync clients for the onsen REST API.

Usage::

    # Async
    async with AsyncOnsenClient("http://localhost:8080") as client:
        created = await client.create({"area": "東鳴子温泉", "name": "初音旅館", "address": "宮城県仙台市"})

    # Sync (wraps async client internally)
    client = OnsenClient("http://localhost:8080")
    listing = client.search("初音")
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar, cast
from urllib.parse import quote

import httpx

_T = TypeVar("_T")

OnsenRecord = dict[str, Any]
"""A single record dict (``id``, ``area``, ``name``, ``address``)."""

OnsenListing = dict[str, Any]
"""Search response dict with ``took`` and ``onsens`` keys."""


def _onsen_path(onsen_id: str) -> str:
    # Engine ids may contain "/" or "?", which must stay inside one path segment
    return f"/onsen/{quote(onsen_id, safe='')}"


# ═══════════════════════════════════════════════════════════════════════════════
# Async client
# ═══════════════════════════════════════════════════════════════════════════════


class AsyncOnsenClient:
    """Async Python client for the Onsen Finder API.

    Non-2xx responses raise ``httpx.HTTPStatusError``.

    Args:
        base_url: Server URL, e.g. ``"http://localhost:8080"``.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            **httpx_kwargs,
        )

    async def __aenter__(self) -> AsyncOnsenClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def greeting(self) -> str:
        """Fetch the plain-text greeting served at ``/``."""
        resp = await self._client.get("/")
        resp.raise_for_status()
        return resp.text

    async def health(self) -> dict[str, Any]:
        """Check server and engine health."""
        resp = await self._client.get("/health")
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def search(self, query: str | None = None) -> OnsenListing:
        """Search records by name and address; ``None`` lists everything."""
        params = {"query": query} if query is not None else None
        resp = await self._client.get("/onsen/", params=params)
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def get(self, onsen_id: str) -> OnsenRecord:
        """Fetch one record by id."""
        resp = await self._client.get(_onsen_path(onsen_id))
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def create(self, record: OnsenRecord) -> OnsenRecord:
        """Create a record; ``record`` must not carry an ``id``.

        Returns:
            The record with its server-assigned ``id``.
        """
        resp = await self._client.put("/onsen/", json=record)
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def update(self, onsen_id: str, fields: OnsenRecord) -> OnsenRecord:
        """Merge ``fields`` into the record ``onsen_id``.

        Returns:
            The submitted fields echoed back with ``id`` set.
        """
        resp = await self._client.post(_onsen_path(onsen_id), json=fields)
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def delete(self, onsen_id: str) -> str:
        """Delete a record and return its id."""
        resp = await self._client.delete(_onsen_path(onsen_id))
        resp.raise_for_status()
        return cast(str, resp.json()["id"])


# ═══════════════════════════════════════════════════════════════════════════════
# Sync client (wraps AsyncOnsenClient)
# ═══════════════════════════════════════════════════════════════════════════════


class OnsenClient:
    """Synchronous Python client for the Onsen Finder API.

    Wraps :class:`AsyncOnsenClient` using ``asyncio.run``.

    Args:
        base_url: Server URL.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._httpx_kwargs = httpx_kwargs

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Run an async coroutine synchronously."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop and loop.is_running():
            # Already inside an event loop (e.g. Jupyter); run on a worker thread
            import concurrent.futures

            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
                return pool.submit(asyncio.run, coro).result()
        return asyncio.run(coro)

    def _make_client(self) -> AsyncOnsenClient:
        return AsyncOnsenClient(
            self._base_url,
            timeout=self._timeout,
            **self._httpx_kwargs,
        )

    def greeting(self) -> str:
        async def _call() -> str:
            async with self._make_client() as c:
                return await c.greeting()

        return self._run(_call())

    def health(self) -> dict[str, Any]:
        async def _call() -> dict[str, Any]:
            async with self._make_client() as c:
                return await c.health()

        return self._run(_call())

    def search(self, query: str | None = None) -> OnsenListing:
        """Search records by name and address; ``None`` lists everything."""

        async def _call() -> OnsenListing:
            async with self._make_client() as c:
                return await c.search(query)

        return self._run(_call())

    def get(self, onsen_id: str) -> OnsenRecord:
        async def _call() -> OnsenRecord:
            async with self._make_client() as c:
                return await c.get(onsen_id)

        return self._run(_call())

    def create(self, record: OnsenRecord) -> OnsenRecord:
        """Create a record and return it with its server-assigned ``id``."""

        async def _call() -> OnsenRecord:
            async with self._make_client() as c:
                return await c.create(record)

        return self._run(_call())

    def update(self, onsen_id: str, fields: OnsenRecord) -> OnsenRecord:
        async def _call() -> OnsenRecord:
            async with self._make_client() as c:
                return await c.update(onsen_id, fields)

        return self._run(_call())

    def delete(self, onsen_id: str) -> str:
        async def _call() -> str:
            async with self._make_client() as c:
                return await c.delete(onsen_id)

        return self._run(_call())
