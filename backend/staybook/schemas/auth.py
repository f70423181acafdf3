"""Pydantic v2 request/response schemas for authentication endpoints."""

import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Schema for user registration."""

    name: str = Field(..., max_length=255)
    email: EmailStr
    password: str = Field(..., max_length=128)


class LoginRequest(BaseModel):
    """Schema for email/password login."""

    email: EmailStr
    password: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RegisterResponse(BaseModel):
    """Returned after a successful registration."""

    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """Public user profile information. Never includes the password hash."""

    id: uuid.UUID
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class SessionClaims(BaseModel):
    """Identity carried by a verified session token."""

    user_id: uuid.UUID
    email: str


class MessageResponse(BaseModel):
    """Generic message response, also used for every error body."""

    message: str
