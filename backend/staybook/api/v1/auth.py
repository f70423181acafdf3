"""Auth API router — register, login, profile, logout."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.api.deps import get_db, get_optional_session
from staybook.auth.cookies import clear_session_cookie, set_session_cookie
from staybook.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    SessionClaims,
    UserResponse,
)
from staybook.services import session_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

_ERRORS = {
    status.HTTP_401_UNAUTHORIZED: {"model": MessageResponse},
    status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": MessageResponse},
}


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": MessageResponse}},
)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)) -> RegisterResponse:
    """Register a new user with name, email and password."""
    user = await session_service.register(db, body.name, body.email, body.password)
    return RegisterResponse.model_validate(user)


@router.post("/login", response_model=UserResponse, responses=_ERRORS)
async def login(body: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)) -> UserResponse:
    """Authenticate with email and password; the session is set as a cookie."""
    user, token = await session_service.login(db, body.email, body.password)
    set_session_cookie(response, token)
    logger.info("User %s logged in", user.id)
    return UserResponse.model_validate(user)


@router.get("/profile", response_model=UserResponse | None, responses=_ERRORS)
async def profile(
    db: AsyncSession = Depends(get_db),
    claims: SessionClaims | None = Depends(get_optional_session),
) -> UserResponse | None:
    """Return the logged-in user's profile, or ``null`` without a session cookie."""
    if claims is None:
        return None
    user = await session_service.get_profile(db, claims)
    return UserResponse.model_validate(user)


@router.post("/logout")
async def logout(response: Response) -> bool:
    """Clear the session cookie. Tokens are not revoked server-side."""
    clear_session_cookie(response)
    return True
