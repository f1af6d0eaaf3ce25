"""Authentication schemas package."""

from app.schemas.auth.login import AdminExistsResponse, LoginRequest, TokenResponse, UserResponse
from app.schemas.auth.register import AccountCreate, RegisterRequest

__all__ = [
    "AccountCreate",
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "UserResponse",
    "AdminExistsResponse",
]
