"""
Authentication endpoints: registration and login.
"""

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.schemas.auth import (
    AdminExistsResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from app.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    service: AuthService = Depends(deps.get_auth_service),
) -> UserResponse:
    """Register an account. The first account must be the single Admin."""
    return service.register(payload)


@router.get("/admin-exists", response_model=AdminExistsResponse)
def admin_exists(
    service: AuthService = Depends(deps.get_auth_service),
) -> AdminExistsResponse:
    """Whether the single Admin account has been registered yet. Public."""
    return AdminExistsResponse(exists=service.admin_exists())


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(deps.get_auth_service),
) -> TokenResponse:
    return service.login(payload)
