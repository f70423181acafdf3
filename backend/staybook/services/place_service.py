"""Listing store — CRUD for places with owner-scoped updates."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.errors import ForbiddenError, NotFoundError
from staybook.models.place import Place
from staybook.schemas.place import PlaceCreate, PlaceUpdate

logger = logging.getLogger(__name__)


async def create_place(db: AsyncSession, owner_id: uuid.UUID, body: PlaceCreate) -> Place:
    """Persist a new place owned by ``owner_id``."""
    place = Place(owner_id=owner_id, **body.model_dump())
    db.add(place)
    await db.flush()
    await db.refresh(place)
    logger.info("User %s created place %s", owner_id, place.id)
    return place


async def list_places_by_owner(db: AsyncSession, owner_id: uuid.UUID) -> list[Place]:
    result = await db.execute(select(Place).where(Place.owner_id == owner_id).order_by(Place.created_at.desc()))
    return list(result.scalars().all())


async def list_all_places(db: AsyncSession) -> list[Place]:
    """Return every place, newest first. Unpaginated."""
    result = await db.execute(select(Place).order_by(Place.created_at.desc()))
    return list(result.scalars().all())


async def get_place(db: AsyncSession, place_id: uuid.UUID | str) -> Place:
    """Fetch one place by id.

    Raises:
        NotFoundError: If the id is malformed or no such place exists.
    """
    if not isinstance(place_id, uuid.UUID):
        try:
            place_id = uuid.UUID(place_id)
        except ValueError:
            raise NotFoundError("Place not found!") from None

    result = await db.execute(select(Place).where(Place.id == place_id))
    place = result.scalar_one_or_none()
    if place is None:
        raise NotFoundError("Place not found!")
    return place


async def update_place(db: AsyncSession, requester_id: uuid.UUID, body: PlaceUpdate) -> Place:
    """Overwrite the fields set in ``body`` on the place it names.

    Fields omitted from the request are left unchanged.

    Raises:
        NotFoundError: If the place does not exist.
        ForbiddenError: If ``requester_id`` is not the place's owner.
    """
    place = await get_place(db, body.id)
    if place.owner_id != requester_id:
        logger.warning("User %s tried to update place %s owned by %s", requester_id, place.id, place.owner_id)
        raise ForbiddenError("You don't have permission to update this place!")

    update_data = body.model_dump(exclude_unset=True, exclude={"id"})
    for field, value in update_data.items():
        setattr(place, field, value)

    db.add(place)
    await db.flush()
    await db.refresh(place)
    return place
