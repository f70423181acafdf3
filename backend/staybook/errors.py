"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; ``staybook.main`` renders
them as ``{"message": ...}`` JSON bodies.
"""

from fastapi import status


class StaybookError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error!"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StaybookError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "All fields are required!"


class ConflictError(StaybookError):
    """A unique value (e.g. email) is already taken."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "This email is already in use!"


class AuthError(StaybookError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token!"


class ForbiddenError(StaybookError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You don't have permission to perform this action!"


class NotFoundError(StaybookError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found!"


class InternalError(StaybookError):
    """Persistence or other server-side failure."""


class UploadError(StaybookError):
    """Remote download or object-storage upload failed."""

    default_message = "Error uploading photos!"
