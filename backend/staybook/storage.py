"""Photo storage backends: local disk and S3-compatible object storage.

One backend is chosen per process from ``settings.storage_backend`` and used
for every photo, whether it was uploaded directly or imported from a link.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from staybook.config import Settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a backend cannot store an object."""


class StorageClient(Protocol):
    """Defines the operations the API needs from photo storage."""

    async def put_bytes(self, key: str, data: bytes, content_type: str | None = None) -> None:
        ...

    def public_url(self, key: str) -> str:
        ...


@dataclass
class LocalStorageClient:
    """Stores objects under ``root``; the app serves them at ``/uploads``."""

    root: Path
    base_url: str

    def __post_init__(self):
        self.root = Path(self.root)

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise StorageError(f"Key escapes storage root: {key!r}")
        return path

    async def put_bytes(self, key: str, data: bytes, content_type: str | None = None) -> None:
        path = self._path_for(key)
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as exc:
            raise StorageError(f"Failed writing {key!r}: {exc}") from exc

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def public_url(self, key: str) -> str:
        return f"{self.base_url.rstrip('/')}/uploads/{quote(key)}"


@dataclass
class S3StorageClient:
    """S3-compatible bucket storage."""

    bucket: str
    region: str
    access_key_id: str
    secret_access_key: str
    endpoint: str = ""
    public_base_url: str = ""

    def __post_init__(self):
        config = Config(signature_version="s3v4")
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region,
            aws_access_key_id=self.access_key_id or None,
            aws_secret_access_key=self.secret_access_key or None,
            config=config,
        )

    async def put_bytes(self, key: str, data: bytes, content_type: str | None = None) -> None:
        params = {"Bucket": self.bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type
        try:
            # boto3 is synchronous; keep the event loop free while it runs.
            await asyncio.to_thread(self._client.put_object, **params)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed uploading {key!r} to bucket {self.bucket!r}: {exc}") from exc

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{quote(key)}"
        if self.endpoint:
            return f"{self.endpoint.rstrip('/')}/{self.bucket}/{quote(key)}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quote(key)}"


def build_storage(settings: Settings) -> StorageClient:
    """Construct the storage backend selected by ``settings``."""
    if settings.storage_backend == "s3":
        logger.info("Using S3 photo storage (bucket=%s)", settings.s3_bucket)
        return S3StorageClient(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            endpoint=settings.s3_endpoint_url,
            public_base_url=settings.s3_public_base_url,
        )
    logger.info("Using local photo storage at %s", settings.upload_dir)
    return LocalStorageClient(root=Path(settings.upload_dir), base_url=settings.public_base_url)
