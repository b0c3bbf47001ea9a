"""Onsen resource models — the externally visible facility record and its envelopes."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class Onsen(BaseModel):
    """A hot-spring facility record.

    ``id`` is assigned by the search engine: it must be unset when creating
    a record and is always populated on records read back from the engine.
    """

    id: str | None = Field(default=None, description="Engine-assigned identifier")
    area: str = Field(description="Hot-spring area (地域)")
    name: str = Field(description="Facility or inn name (施設名/旅館名)")
    address: str = Field(description="Postal address (住所)")


class OnsenPatch(BaseModel):
    """Update body for ``POST /onsen/{id}``.

    Fields left out of the request are not sent to the engine, so the
    stored values survive the merge. An explicit null is rejected rather
    than merged, since a stored record must keep all three fields.
    """

    id: str | None = Field(default=None, description="Must equal the path identifier when set")
    area: str | None = Field(default=None, description="Hot-spring area")
    name: str | None = Field(default=None, description="Facility or inn name")
    address: str | None = Field(default=None, description="Postal address")

    @field_validator("area", "name", "address")
    @classmethod
    def _reject_null(cls, value: str | None) -> str:
        # Defaults are not validated, so only an explicit null reaches here
        if value is None:
            raise ValueError("must not be null; omit the field to keep the stored value")
        return value


class OnsenList(BaseModel):
    """Search response: engine processing time and the ranked records."""

    took: int = Field(description="Engine processing time in milliseconds")
    onsens: list[Onsen] = Field(default_factory=list, description="Matching records in relevance order")


class DeletedOnsen(BaseModel):
    """Delete response."""

    id: str = Field(description="Identifier of the deleted record")
