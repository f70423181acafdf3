"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from staybook.schemas.place import PlaceResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a booking.

    The booking's user is always the authenticated caller; a ``user_id``
    sent in the body is ignored.
    """

    place_id: uuid.UUID
    check_in: date
    check_out: date
    number_of_guests: int = Field(1, ge=1)
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    price: Decimal | None = Field(None, ge=0)

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that check_out is strictly after check_in."""
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Booking as stored."""

    id: uuid.UUID
    place_id: uuid.UUID
    user_id: uuid.UUID
    check_in: date
    check_out: date
    number_of_guests: int
    name: str
    phone: str
    price: Decimal | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    """Booking with its place resolved inline."""

    place: PlaceResponse
