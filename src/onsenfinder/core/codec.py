"""Document codec — converts between ``Onsen`` records and stored engine documents.

The record identifier exists in exactly one place in each direction: in the
engine envelope (``_id``) for stored documents, and in ``Onsen.id`` for
resources. These functions are the only place where it moves between the two.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from onsenfinder.adapters.base.adapter import StoredDocument
from onsenfinder.adapters.base.exceptions import DecodeError
from onsenfinder.core.exceptions import InvalidInputError
from onsenfinder.models.onsen import Onsen, OnsenPatch


def encode(record: Onsen) -> dict[str, Any]:
    """Build the stored body for a new record.

    Raises:
        InvalidInputError: If ``record.id`` is set; ids are engine-assigned.
    """
    if record.id is not None:
        raise InvalidInputError(
            f"Onsen id must not be set on creation (got '{record.id}')",
            operation="create",
        )
    return record.model_dump(exclude={"id"})


def encode_patch(record: OnsenPatch) -> dict[str, Any]:
    """Build the partial body for a merge update.

    Only fields the caller actually sent are included, so the engine leaves
    every other stored field untouched.
    """
    return record.model_dump(exclude={"id"}, exclude_unset=True)


def decode(document_id: str, body: Any) -> Onsen:
    """Turn a stored body into a record carrying ``document_id`` as its id.

    Any ``id`` key inside the body is ignored; the envelope id wins.

    Raises:
        DecodeError: If the body does not have the onsen field set.
    """
    if not isinstance(body, Mapping):
        raise DecodeError(f"Document '{document_id}' has no object source")
    fields = {key: value for key, value in body.items() if key != "id"}
    try:
        return Onsen(id=document_id, **fields)
    except (ValidationError, TypeError) as e:
        raise DecodeError(f"Document '{document_id}' does not match the onsen schema: {e}") from e


def decode_hit(hit: Mapping[str, Any]) -> StoredDocument:
    """Unwrap a raw engine hit or get response into a ``StoredDocument``.

    Raises:
        DecodeError: If the envelope lacks ``_id`` or ``_source``.
    """
    try:
        return StoredDocument(
            document_id=str(hit["_id"]),
            index=str(hit.get("_index", "")),
            body=hit["_source"],
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise DecodeError(f"Malformed engine document: {e}") from e


def decode_stored(document: StoredDocument) -> Onsen:
    """Decode a ``StoredDocument`` into a record."""
    return decode(document.document_id, document.body)
