"""Places API routes — public reads, owner-scoped writes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.api.deps import get_current_session, get_db
from staybook.schemas.auth import MessageResponse, SessionClaims
from staybook.schemas.place import PlaceCreate, PlaceResponse, PlaceUpdate
from staybook.services import place_service

router = APIRouter(prefix="/api", tags=["places"])


@router.post(
    "/places",
    response_model=PlaceResponse,
    summary="Publish a new place",
    responses={status.HTTP_401_UNAUTHORIZED: {"model": MessageResponse}},
)
async def create_place(
    body: PlaceCreate,
    db: AsyncSession = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
) -> PlaceResponse:
    """Create a place owned by the caller."""
    place = await place_service.create_place(db, session.user_id, body)
    return PlaceResponse.model_validate(place)


@router.get(
    "/user-places",
    response_model=list[PlaceResponse],
    summary="List the caller's places",
    responses={status.HTTP_401_UNAUTHORIZED: {"model": MessageResponse}},
)
async def list_user_places(
    db: AsyncSession = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
) -> list[PlaceResponse]:
    places = await place_service.list_places_by_owner(db, session.user_id)
    return [PlaceResponse.model_validate(p) for p in places]


@router.get(
    "/places/{place_id}",
    response_model=PlaceResponse,
    summary="Get a place by ID",
    responses={status.HTTP_404_NOT_FOUND: {"model": MessageResponse}},
)
async def get_place(place_id: str, db: AsyncSession = Depends(get_db)) -> PlaceResponse:
    """Retrieve a single place. Public."""
    place = await place_service.get_place(db, place_id)
    return PlaceResponse.model_validate(place)


@router.put(
    "/places",
    summary="Update one of the caller's places",
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": MessageResponse},
        status.HTTP_403_FORBIDDEN: {"model": MessageResponse},
        status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
    },
)
async def update_place(
    body: PlaceUpdate,
    db: AsyncSession = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
) -> str:
    """Update the place named by ``body.id``. Only fields present in the body change."""
    await place_service.update_place(db, session.user_id, body)
    return "ok"


@router.get("/places", response_model=list[PlaceResponse], summary="List all places")
async def list_places(db: AsyncSession = Depends(get_db)) -> list[PlaceResponse]:
    """Return every published place. Public, unpaginated."""
    places = await place_service.list_all_places(db)
    return [PlaceResponse.model_validate(p) for p in places]
