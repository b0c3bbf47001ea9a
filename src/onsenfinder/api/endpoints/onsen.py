"""Onsen endpoints — search, fetch, create, update, and delete facility records.

Every store failure (missing id, unreachable engine, engine error, malformed
payload) is reported as 404. The ``detail.error`` field names the actual
cause so clients and tests can tell them apart.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from onsenfinder.adapters.base.exceptions import AdapterError
from onsenfinder.api.deps import get_service
from onsenfinder.core.exceptions import InvalidInputError
from onsenfinder.core.service import OnsenService
from onsenfinder.models.onsen import DeletedOnsen, Onsen, OnsenList, OnsenPatch

router = APIRouter()

_NOT_FOUND = {404: {"description": "Record not found, or the search engine call failed"}}


def _http_error(status_code: int, error: InvalidInputError | AdapterError) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"error": error.kind, "message": str(error)},
    )


@router.get(
    "/",
    response_model=OnsenList,
    summary="Search Onsens",
    description=(
        "Relevance search over `name` and `address`. "
        "An absent or empty `query` lists every record."
    ),
    responses=_NOT_FOUND,
)
async def search_onsen(
    query: str | None = None,
    service: OnsenService = Depends(get_service),
) -> OnsenList:
    try:
        return await service.search(query)
    except AdapterError as e:
        raise _http_error(404, e) from e


@router.get(
    "/{onsen_id}",
    response_model=Onsen,
    summary="Get Onsen",
    responses=_NOT_FOUND,
)
async def get_onsen(
    onsen_id: str,
    service: OnsenService = Depends(get_service),
) -> Onsen:
    try:
        return await service.get(onsen_id)
    except AdapterError as e:
        raise _http_error(404, e) from e


@router.put(
    "/",
    response_model=Onsen,
    summary="Create Onsen",
    description="Store a new record. The `id` must be unset; the engine assigns it.",
    responses={400: {"description": "`id` was set in the request body"}, **_NOT_FOUND},
)
async def create_onsen(
    onsen: Onsen,
    service: OnsenService = Depends(get_service),
) -> Onsen:
    try:
        return await service.create(onsen)
    except InvalidInputError as e:
        raise _http_error(400, e) from e
    except AdapterError as e:
        raise _http_error(404, e) from e


@router.post(
    "/{onsen_id}",
    response_model=OnsenPatch,
    response_model_exclude_unset=True,
    summary="Update Onsen",
    description=(
        "Merge the submitted fields into the stored record. Fields left out "
        "of the body keep their stored values. The response echoes the "
        "submitted body with `id` set; it is not re-read from the engine."
    ),
    responses={404: {"description": "Body `id` does not match the path, or the update failed"}},
)
async def update_onsen(
    onsen_id: str,
    patch: OnsenPatch,
    service: OnsenService = Depends(get_service),
) -> OnsenPatch:
    try:
        return await service.update(onsen_id, patch)
    except (InvalidInputError, AdapterError) as e:
        raise _http_error(404, e) from e


@router.delete(
    "/{onsen_id}",
    response_model=DeletedOnsen,
    summary="Delete Onsen",
    responses=_NOT_FOUND,
)
async def delete_onsen(
    onsen_id: str,
    service: OnsenService = Depends(get_service),
) -> DeletedOnsen:
    try:
        return await service.delete(onsen_id)
    except AdapterError as e:
        raise _http_error(404, e) from e
