"""Photo upload API routes."""

import httpx
from fastapi import APIRouter, Depends, File, UploadFile, status

from staybook.api.deps import get_http_client, get_storage
from staybook.config import settings
from staybook.schemas.auth import MessageResponse
from staybook.schemas.upload import UploadByLinkRequest
from staybook.services import photo_service
from staybook.storage import StorageClient

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post(
    "/upload-by-link",
    summary="Import a photo from a URL",
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse}},
)
async def upload_by_link(
    body: UploadByLinkRequest,
    storage: StorageClient = Depends(get_storage),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> str:
    """Download the linked image into photo storage and return its public URL."""
    return await photo_service.fetch_remote_image(storage, body.link, client)


@router.post(
    "/upload",
    summary="Upload photos",
    responses={
        status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": MessageResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
)
async def upload(
    photos: list[UploadFile] = File(...),
    storage: StorageClient = Depends(get_storage),
) -> list[str]:
    """Store each file of the ``photos`` multipart field and return their URLs in order."""
    return await photo_service.upload_files(storage, photos, settings.max_upload_files)
