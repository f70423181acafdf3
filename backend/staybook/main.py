"""Staybook — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from staybook.api.v1.auth import router as auth_router
from staybook.api.v1.bookings import router as bookings_router
from staybook.api.v1.places import router as places_router
from staybook.api.v1.uploads import router as uploads_router
from staybook.config import settings
from staybook.errors import InternalError, StaybookError
from staybook.storage import build_storage

# Configure root logger so all staybook.* loggers output to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    from staybook.database import create_tables, engine

    # Startup
    app.state.storage = build_storage(settings)
    if settings.auto_create_tables:
        await create_tables()
    yield
    # Shutdown: dispose engine connections
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Booking marketplace API: accounts, listings, photos and reservations.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Photos stored by the local backend are served from here.
if settings.storage_backend == "local":
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

# Routers
app.include_router(auth_router)
app.include_router(places_router)
app.include_router(bookings_router)
app.include_router(uploads_router)


# ---------------------------------------------------------------------------
# Error rendering: every failure body is {"message": ...}
# ---------------------------------------------------------------------------


@app.exception_handler(StaybookError)
async def staybook_error_handler(request: Request, exc: StaybookError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s failed unexpectedly", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": InternalError.default_message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("type") == "missing" for err in errors):
        message = "All fields are required!"
    else:
        message = "Invalid request!"
    return JSONResponse(
        status_code=422,
        content={"message": message, "errors": jsonable_encoder(errors)},
    )


@app.get("/api/test", tags=["health"])
async def api_test() -> str:
    """Liveness check kept for the frontend's connectivity check."""
    return "test ok"


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}
