"""Pydantic v2 request/response schemas for place endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _unique_perks(perks: list[str] | None) -> list[str] | None:
    """Drop duplicate perks, keeping first-seen order."""
    if perks is None:
        return None
    return list(dict.fromkeys(perks))


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PlaceCreate(BaseModel):
    """Schema for publishing a new place."""

    title: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(None, max_length=512)
    photos: list[str] = Field(default_factory=list)
    description: str | None = None
    perks: list[str] = Field(default_factory=list)
    extra_info: str | None = None
    check_in: str | None = Field(None, max_length=20)
    check_out: str | None = Field(None, max_length=20)
    max_guests: int | None = Field(None, ge=1)
    price: Decimal | None = Field(None, ge=0)

    dedupe_perks = field_validator("perks")(_unique_perks)


class PlaceUpdate(BaseModel):
    """Schema for updating a place. ``id`` picks the place; other fields are optional."""

    id: uuid.UUID
    title: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, max_length=512)
    photos: list[str] | None = None
    description: str | None = None
    perks: list[str] | None = None
    extra_info: str | None = None
    check_in: str | None = Field(None, max_length=20)
    check_out: str | None = Field(None, max_length=20)
    max_guests: int | None = Field(None, ge=1)
    price: Decimal | None = Field(None, ge=0)

    dedupe_perks = field_validator("perks")(_unique_perks)

    @field_validator("title", "photos", "perks")
    @classmethod
    def reject_null(cls, value):
        """These columns always hold a value; omit the field to leave it unchanged."""
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PlaceResponse(BaseModel):
    """Public place information returned from the API."""

    id: uuid.UUID
    owner_id: uuid.UUID
    title: str
    address: str | None = None
    photos: list[str] = []
    description: str | None = None
    perks: list[str] = []
    extra_info: str | None = None
    check_in: str | None = None
    check_out: str | None = None
    max_guests: int | None = None
    price: Decimal | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
