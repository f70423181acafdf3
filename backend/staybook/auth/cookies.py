"""Helpers for the httpOnly session cookie."""

from fastapi import Response

from staybook.config import settings


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token to the response as an httpOnly cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        # Cross-site frontend in production needs SameSite=None, which requires Secure.
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )
