"""Shared API dependencies — single import point for all routers.

Re-exports database session and authentication dependencies, and provides
the per-process photo storage and HTTP client, so that router modules can
import everything they need from one place::

    from staybook.api.deps import get_db, get_current_session
"""

from collections.abc import AsyncIterator

import httpx
from fastapi import Request

from staybook.auth.dependencies import get_current_session, get_optional_session
from staybook.config import settings
from staybook.database import get_db
from staybook.storage import StorageClient, build_storage


def get_storage(request: Request) -> StorageClient:
    """Return the storage backend built once at startup (or on first use)."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        storage = build_storage(settings)
        request.app.state.storage = storage
    return storage


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Yield an HTTP client for fetching remote images."""
    async with httpx.AsyncClient(
        follow_redirects=True,
        timeout=settings.download_timeout_seconds,
    ) as client:
        yield client


__all__ = [
    "get_db",
    "get_current_session",
    "get_optional_session",
    "get_storage",
    "get_http_client",
]
