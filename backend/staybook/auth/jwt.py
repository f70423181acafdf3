"""Session token creation and verification."""

import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt

from staybook.config import settings

SESSION_TOKEN_TYPE = "session"


def create_session_token(user_id: uuid.UUID | str, email: str, expires_delta: timedelta | None = None) -> str:
    """Create a signed session token for a user.

    Args:
        user_id: The user's UUID, stored in the ``sub`` claim.
        email: The user's email, stored in the ``email`` claim.
        expires_delta: Custom lifetime. Defaults to
            ``settings.session_expire_days``; when that is ``0`` and no delta
            is given the token carries no ``exp`` claim and never expires.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(timezone.utc)
    to_encode: dict = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "type": SESSION_TOKEN_TYPE,
    }
    if expires_delta is None and settings.session_expire_days > 0:
        expires_delta = timedelta(days=settings.session_expire_days)
    if expires_delta is not None:
        to_encode["exp"] = now + expires_delta
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify a session token.

    Args:
        token: Encoded JWT string.

    Returns:
        Decoded payload dictionary.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
