"""Pydantic v2 request schemas for photo upload endpoints."""

from pydantic import BaseModel, Field


class UploadByLinkRequest(BaseModel):
    """A remote image to import into photo storage."""

    link: str = Field(..., min_length=1)
