"""Booking store — create and list a user's reservations."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from staybook.errors import InternalError
from staybook.models.booking import Booking
from staybook.schemas.booking import BookingCreate
from staybook.services.place_service import get_place

logger = logging.getLogger(__name__)


async def create_booking(db: AsyncSession, user_id: uuid.UUID, body: BookingCreate) -> Booking:
    """Persist a booking made by ``user_id``.

    No overlap check is made against other bookings of the same place.

    Raises:
        NotFoundError: If the referenced place does not exist.
        InternalError: If the booking cannot be persisted.
    """
    await get_place(db, body.place_id)

    booking = Booking(user_id=user_id, **body.model_dump())
    db.add(booking)
    try:
        await db.flush()
        await db.refresh(booking)
    except SQLAlchemyError:
        logger.exception("Error creating booking for user %s", user_id)
        raise InternalError("Error creating booking!") from None

    logger.info("User %s booked place %s (booking %s)", user_id, body.place_id, booking.id)
    return booking


async def list_bookings_for_user(db: AsyncSession, user_id: uuid.UUID) -> list[Booking]:
    """Return the user's bookings, newest first, with ``place`` loaded."""
    result = await db.execute(
        select(Booking)
        .options(selectinload(Booking.place))
        .where(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc())
    )
    return list(result.scalars().all())
