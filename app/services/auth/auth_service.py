# app/services/auth/auth_service.py
"""
Account registration, login and token resolution.

Registration rules:
- the very first account must be an Admin
- at most one Admin exists
- Student accounts get their student record in the same transaction
"""

from datetime import timedelta

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.exceptions import AuthenticationError, ConflictError, ErrorCode, ValidationError
from app.core.security import create_access_token, decode_token, hash_password, verify_password
from app.models.base.enums import UserRole
from app.models.student import Student
from app.models.user import User
from app.repositories.student import StudentRepository
from app.repositories.user import UserRepository
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from app.services.base import BaseService


class AuthService(BaseService):
    """Registration, login and bearer-token identity."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.users = UserRepository(db_session)
        self.students = StudentRepository(db_session)

    def register(self, data: RegisterRequest) -> User:
        with self.transaction():
            if self.users.count_all() == 0 and data.role != UserRole.ADMIN:
                raise ValidationError("The first user must be an Admin")
            if data.role == UserRole.ADMIN and self.users.count_by_role(UserRole.ADMIN) > 0:
                raise ValidationError("Only one Admin is allowed")
            if self.users.find_by_email(data.email):
                raise ConflictError(
                    "A user with this email already exists",
                    ErrorCode.DUPLICATE_ENTRY,
                    {"email": data.email},
                )

            user = self.users.create(
                User(
                    email=data.email,
                    password_hash=hash_password(data.password),
                    first_name=data.first_name,
                    last_name=data.last_name,
                    phone=data.phone,
                    role=data.role,
                    is_active=True,
                )
            )
            if data.role == UserRole.STUDENT:
                self.students.create(
                    Student(
                        user_id=user.id,
                        guardian_name=data.guardian_name,
                        guardian_phone=data.guardian_phone,
                        address=data.address,
                    )
                )

        self._logger.info("User registered", extra={"new_user_id": user.id, "role": data.role.value})
        return user

    def admin_exists(self) -> bool:
        return self.users.count_by_role(UserRole.ADMIN) > 0

    def authenticate(self, email: str, password: str) -> User:
        user = self.users.find_by_email(email)
        if user is None or not user.is_active or not verify_password(password, user.password_hash):
            self._logger.warning("Login failed", extra={"email": email})
            raise AuthenticationError("Invalid email or password")
        return user

    def login(self, data: LoginRequest) -> TokenResponse:
        user = self.authenticate(data.email, data.password)
        expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        token = create_access_token(user.id, user.role.value, expires_delta=expires)
        self._logger.info("User logged in", extra={"login_user_id": user.id})
        return TokenResponse(
            access_token=token,
            expires_in=int(expires.total_seconds()),
            user=UserResponse.model_validate(user),
        )

    def user_from_token(self, token: str) -> User:
        """
        Resolve the active user behind a bearer token.

        Raises:
            AuthenticationError: invalid or expired token, or unknown/inactive user
        """
        payload = decode_token(token)
        user = self.users.find_by_id(payload["sub"])
        if user is None or not user.is_active:
            raise AuthenticationError("User not found or inactive")
        return user
