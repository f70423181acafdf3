"""FastAPI authentication dependencies for route protection."""

from fastapi import Depends
from fastapi.security import APIKeyCookie

from staybook.config import settings
from staybook.schemas.auth import SessionClaims
from staybook.services.session_service import verify_session

# Returns None instead of raising when the cookie is absent; the
# dependencies below decide whether that is an error.
_cookie_scheme = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


async def get_current_session(token: str | None = Depends(_cookie_scheme)) -> SessionClaims:
    """Verify the session cookie and return its claims.

    Raises:
        AuthError: If the cookie is missing or the token is invalid or expired.
    """
    return verify_session(token)


async def get_optional_session(token: str | None = Depends(_cookie_scheme)) -> SessionClaims | None:
    """Return the session claims, or ``None`` when no cookie was sent.

    A cookie that is present but invalid still raises ``AuthError``.
    """
    if token is None:
        return None
    return verify_session(token)
