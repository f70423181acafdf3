"""Bookings API router.

Bookings always belong to the caller: the user id comes from the session
cookie, never from the request body.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.api.deps import get_current_session, get_db
from staybook.schemas.auth import MessageResponse, SessionClaims
from staybook.schemas.booking import BookingCreate, BookingDetailResponse, BookingResponse
from staybook.services import booking_service

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingResponse,
    summary="Book a place",
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": MessageResponse},
        status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
) -> BookingResponse:
    booking = await booking_service.create_booking(db, session.user_id, body)
    return BookingResponse.model_validate(booking)


@router.get(
    "",
    response_model=list[BookingDetailResponse],
    summary="List the caller's bookings",
    responses={status.HTTP_401_UNAUTHORIZED: {"model": MessageResponse}},
)
async def list_bookings(
    db: AsyncSession = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
) -> list[BookingDetailResponse]:
    """Return the caller's bookings, each with its place resolved."""
    bookings = await booking_service.list_bookings_for_user(db, session.user_id)
    return [BookingDetailResponse.model_validate(b) for b in bookings]
