# --- File: app/schemas/auth/login.py ---
"""
Login and token schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.common.base import BaseResponseSchema, BaseSchema
from app.schemas.common.enums import UserRole

__all__ = [
    "AdminExistsResponse",
    "LoginRequest",
    "UserResponse",
    "TokenResponse",
]


class LoginRequest(BaseSchema):
    """Email and password login."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: EmailStr) -> str:
        return str(v).lower().strip()


class UserResponse(BaseResponseSchema):
    """Public view of a user account."""

    email: str
    first_name: str
    last_name: Optional[str] = None
    phone: Optional[str] = None
    role: UserRole
    is_active: bool


class TokenResponse(BaseSchema):
    """Bearer token issued on login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse


class AdminExistsResponse(BaseSchema):
    """Whether the single Admin account has been registered."""

    exists: bool
