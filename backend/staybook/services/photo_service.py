"""Photo relay — stores uploaded or remotely fetched images and returns public URLs."""

import logging
import time
from collections.abc import Sequence
from pathlib import PurePosixPath

import httpx
from fastapi import UploadFile

from staybook.errors import UploadError, ValidationError
from staybook.storage import StorageClient, StorageError

logger = logging.getLogger(__name__)

PHOTO_KEY_PREFIX = "images"


def _photo_key(filename: str) -> str:
    return f"{PHOTO_KEY_PREFIX}/{filename}"


async def fetch_remote_image(storage: StorageClient, url: str, client: httpx.AsyncClient) -> str:
    """Download an image from ``url`` into storage.

    The object is named ``photo<epoch-millis>.jpg`` regardless of the source
    file name.

    Returns:
        The stored photo's public URL.

    Raises:
        UploadError: If the download or the storage write fails.
    """
    filename = f"photo{int(time.time() * 1000)}.jpg"
    key = _photo_key(filename)
    try:
        if httpx.URL(url).scheme not in ("http", "https"):
            raise httpx.UnsupportedProtocol(f"Not an http(s) URL: {url!r}")
        response = await client.get(url)
        response.raise_for_status()
        await storage.put_bytes(key, response.content, response.headers.get("content-type"))
    except (httpx.HTTPError, httpx.InvalidURL, StorageError) as exc:
        logger.warning("Error downloading image from %s: %s", url, exc)
        raise UploadError("Error downloading image!") from exc

    logger.info("Imported %s as %s", url, key)
    return storage.public_url(key)


async def upload_files(storage: StorageClient, files: Sequence[UploadFile], max_files: int) -> list[str]:
    """Store each uploaded file under its original name, one at a time.

    The first failure aborts the batch. Files stored before it are left in
    storage and no partial URL list is returned.

    Raises:
        ValidationError: If more than ``max_files`` files were sent.
        UploadError: If any file cannot be stored.
    """
    if len(files) > max_files:
        raise ValidationError(f"At most {max_files} photos can be uploaded at once!")

    urls: list[str] = []
    for file in files:
        filename = PurePosixPath(file.filename or "").name or f"photo{int(time.time() * 1000)}"
        key = _photo_key(filename)
        try:
            data = await file.read()
            await storage.put_bytes(key, data, file.content_type)
        except (OSError, StorageError) as exc:
            logger.error("Error uploading %s to photo storage: %s", filename, exc)
            raise UploadError("Error uploading photos!") from exc
        finally:
            # Closing the upload removes its spooled temp file.
            await file.close()
        urls.append(storage.public_url(key))

    logger.info("Uploaded %d photos", len(urls))
    return urls
