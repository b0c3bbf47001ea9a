"""Onsen service — Resource operations over the document store.

Each operation is one request, one store call, one result:

    search  → build_query → store.search → decode every hit
    get     → store.get   → decode
    create  → encode      → store.index  → echo with engine-assigned id
    update  → encode_patch → store.update → echo with path id
    delete  → store.delete → deleted id

No state is kept between calls and nothing is cached; the engine is the
only system of record. Failures are logged with the operation context and
re-raised unchanged, never retried.
"""

from __future__ import annotations

import structlog

from onsenfinder.adapters.base.adapter import DocumentStore
from onsenfinder.adapters.base.exceptions import AdapterError
from onsenfinder.core import codec
from onsenfinder.core.exceptions import InvalidInputError
from onsenfinder.core.query import build_query
from onsenfinder.models.onsen import DeletedOnsen, Onsen, OnsenList, OnsenPatch

logger = structlog.get_logger(__name__)


class OnsenService:
    """Translates onsen resource operations into document store calls.

    Attributes:
        store: The document store used as system of record.
        search_size: Upper bound on hits returned by ``search``.
    """

    def __init__(self, store: DocumentStore, search_size: int = 10000) -> None:
        self.store = store
        self.search_size = search_size

    async def search(self, query: str | None = None) -> OnsenList:
        """List records matching ``query``, or every record when it is empty."""
        with structlog.contextvars.bound_contextvars(operation="search", query=query):
            try:
                result = await self.store.search(build_query(query), size=self.search_size)
                onsens = [codec.decode_stored(codec.decode_hit(hit)) for hit in result.hits]
            except AdapterError as e:
                logger.warning("Search failed", error=str(e), kind=e.kind)
                raise
            logger.info("Search complete", took=result.took, hits=len(onsens))
            return OnsenList(took=result.took, onsens=onsens)

    async def get(self, onsen_id: str) -> Onsen:
        """Fetch one record by id."""
        with structlog.contextvars.bound_contextvars(operation="get", onsen_id=onsen_id):
            try:
                raw = await self.store.get(onsen_id)
                return codec.decode_stored(codec.decode_hit(raw))
            except AdapterError as e:
                logger.warning("Get failed", error=str(e), kind=e.kind)
                raise

    async def create(self, onsen: Onsen) -> Onsen:
        """Store a new record and return it with the engine-assigned id.

        Raises:
            InvalidInputError: If ``onsen.id`` is set. The store is not called.
        """
        with structlog.contextvars.bound_contextvars(operation="create"):
            try:
                body = codec.encode(onsen)
            except InvalidInputError as e:
                logger.info("Create rejected", reason=str(e))
                raise
            try:
                document_id = await self.store.index(body)
            except AdapterError as e:
                logger.warning("Create failed", error=str(e), kind=e.kind)
                raise
            logger.info("Created onsen", onsen_id=document_id)
            return onsen.model_copy(update={"id": document_id})

    async def update(self, onsen_id: str, patch: OnsenPatch) -> OnsenPatch:
        """Merge ``patch`` into the stored record and echo it back.

        The returned value is the submitted body with ``id`` set to
        ``onsen_id``; it is not re-read from the engine.

        Raises:
            InvalidInputError: If ``patch.id`` is set and differs from
                ``onsen_id``. The store is not called.
        """
        with structlog.contextvars.bound_contextvars(operation="update", onsen_id=onsen_id):
            if patch.id is not None and patch.id != onsen_id:
                logger.info("Update rejected", body_id=patch.id)
                raise InvalidInputError(
                    f"Onsen id in body ('{patch.id}') does not match path id ('{onsen_id}')",
                    operation="update",
                )
            try:
                await self.store.update(onsen_id, codec.encode_patch(patch))
            except AdapterError as e:
                logger.warning("Update failed", error=str(e), kind=e.kind)
                raise
            logger.info("Updated onsen", fields=sorted(patch.model_fields_set - {"id"}))
            return patch.model_copy(update={"id": onsen_id})

    async def delete(self, onsen_id: str) -> DeletedOnsen:
        """Delete one record by id."""
        with structlog.contextvars.bound_contextvars(operation="delete", onsen_id=onsen_id):
            try:
                deleted_id = await self.store.delete(onsen_id)
            except AdapterError as e:
                logger.warning("Delete failed", error=str(e), kind=e.kind)
                raise
            logger.info("Deleted onsen")
            return DeletedOnsen(id=deleted_id)
