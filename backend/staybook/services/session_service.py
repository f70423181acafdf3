"""Session issuer — registration, login, and session verification."""

import asyncio
import logging
import uuid

from jose import JWTError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.auth.jwt import SESSION_TOKEN_TYPE, create_session_token, decode_token
from staybook.auth.passwords import hash_password, verify_password
from staybook.errors import AuthError, ConflictError, InternalError, NotFoundError, ValidationError
from staybook.models.user import User
from staybook.schemas.auth import SessionClaims

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def register(db: AsyncSession, name: str, email: str, password: str) -> User:
    """Create a user with a bcrypt-hashed password.

    Raises:
        ValidationError: If any field is missing or blank.
        ConflictError: If the email is already registered.
    """
    if not all(field and field.strip() for field in (name, email, password)):
        raise ValidationError("All fields are required!")

    if await get_user_by_email(db, email) is not None:
        logger.info("Registration rejected, email already in use: %s", email)
        raise ConflictError("This email is already in use!")

    hashed = await asyncio.to_thread(hash_password, password)
    user = User(name=name, email=email, hashed_password=hashed)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        logger.info("Registration rejected by unique index: %s", email)
        raise ConflictError("This email is already in use!") from None
    except SQLAlchemyError:
        logger.exception("Failed registering user %s", email)
        raise InternalError("Failed registering user!") from None

    await db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, email)
    return user


async def login(db: AsyncSession, email: str, password: str) -> tuple[User, str]:
    """Check credentials and issue a session token.

    Returns:
        The user and a signed session token embedding ``{sub, email}``.

    Raises:
        NotFoundError: If no user has this email.
        AuthError: If the password does not match.
    """
    user = await get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found!")

    if not await asyncio.to_thread(verify_password, password, user.hashed_password):
        logger.warning("Failed login for user %s", user.id)
        raise AuthError("Invalid credentials!")

    token = create_session_token(user.id, user.email)
    return user, token


def verify_session(token: str | None) -> SessionClaims:
    """Validate a session token and return the identity it carries.

    Raises:
        AuthError: If the token is missing, badly signed, expired, of another
            type, or its subject is not a user id.
    """
    if not token:
        raise AuthError("Invalid token!")

    try:
        payload = decode_token(token)
    except JWTError:
        raise AuthError("Invalid token!") from None

    if payload.get("type") != SESSION_TOKEN_TYPE:
        raise AuthError("Invalid token!")

    sub: str | None = payload.get("sub")
    email: str | None = payload.get("email")
    if sub is None or email is None:
        raise AuthError("Invalid token!")

    try:
        user_id = uuid.UUID(sub)
    except ValueError:
        raise AuthError("Invalid token!") from None

    return SessionClaims(user_id=user_id, email=email)


async def get_profile(db: AsyncSession, claims: SessionClaims) -> User:
    """Load the user behind a verified session.

    Raises:
        NotFoundError: If the user no longer exists.
    """
    result = await db.execute(select(User).where(User.id == claims.user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found!")
    return user
