"""Shared test configuration and fixtures.

Each test gets its own in-memory SQLite database (aiosqlite), so tests are
fully isolated and need no external services. The app's ``get_db``,
``get_storage`` and ``get_http_client`` dependencies are overridden:
- ``get_db`` opens a session per request and commits like production.
- ``get_storage`` writes photos to a temporary directory.
- ``get_http_client`` answers remote image downloads from a mock transport.
"""

import uuid
from collections.abc import AsyncGenerator, AsyncIterator

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import staybook.models  # noqa: F401  (registers models on Base.metadata)
from staybook.api.deps import get_http_client, get_storage
from staybook.auth.jwt import create_session_token
from staybook.auth.passwords import hash_password
from staybook.config import settings
from staybook.database import Base, get_db
from staybook.main import app
from staybook.models.user import User
from staybook.storage import LocalStorageClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """A fresh in-memory database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for arranging and inspecting data outside of requests."""
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Storage and remote downloads
# ---------------------------------------------------------------------------


@pytest.fixture
def storage(tmp_path) -> LocalStorageClient:
    return LocalStorageClient(root=tmp_path / "uploads", base_url="http://testserver")


def _remote_images(request: httpx.Request) -> httpx.Response:
    """Serve fake images; any path containing ``missing`` is a 404."""
    if "missing" in request.url.path:
        return httpx.Response(404)
    return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})


@pytest.fixture
def remote_transport() -> httpx.MockTransport:
    return httpx.MockTransport(_remote_images)


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(session_factory, storage, remote_transport) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test database and storage."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_get_http_client() -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(transport=remote_transport) as remote:
            yield remote

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_http_client] = override_get_http_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: authenticated users
# ---------------------------------------------------------------------------


async def _create_user(db_session: AsyncSession, name: str, prefix: str) -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(
        email=f"{prefix}-{unique}@test.com",
        hashed_password=hash_password("testpass123"),
        name=name,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def session_headers(user: User) -> dict[str, str]:
    """Cookie header carrying a session token for ``user``."""
    token = create_session_token(user.id, user.email)
    return {"Cookie": f"{settings.session_cookie_name}={token}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create and return a test user directly in the DB."""
    return await _create_user(db_session, "Test User", "testuser")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second, unrelated user."""
    return await _create_user(db_session, "Other User", "otheruser")


@pytest.fixture
def auth_headers(test_user: User) -> dict[str, str]:
    return session_headers(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict[str, str]:
    return session_headers(other_user)


# ---------------------------------------------------------------------------
# Convenience fixtures: place helpers
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_place(client: AsyncClient, auth_headers: dict) -> dict:
    """Create and return a place owned by ``test_user`` via the API."""
    response = await client.post(
        "/api/places",
        json={
            "title": "Test Loft",
            "address": "1 Test Street, Lisbon",
            "photos": ["http://testserver/uploads/images/a.jpg"],
            "description": "A test loft for automated tests.",
            "perks": ["wifi", "parking"],
            "extra_info": "No smoking.",
            "check_in": "14:00",
            "check_out": "11:00",
            "max_guests": 4,
            "price": 120.0,
        },
        headers=auth_headers,
    )
    assert response.status_code == 200, f"Failed to create test place: {response.text}"
    return response.json()
