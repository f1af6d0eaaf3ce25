# app/api/deps.py
"""
FastAPI dependencies: database session, identity, role gates and services.

Example usage in a router:

    @router.get("/me")
    def read_me(current_user: User = Depends(deps.get_current_user)):
        return current_user
"""

from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core import logging as app_logging
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.db.session import SessionLocal, get_db
from app.models.base.enums import UserRole
from app.models.user import User
from app.services.auth import AuthService
from app.services.billing import BillingService
from app.services.notification import EmailProvider, NotificationService
from app.services.room import HostelStructureService, OccupancyService
from app.services.attendance import AttendanceService
from app.services.complaint import ComplaintService
from app.services.staff import StaffService
from app.services.student import StudentService

bearer_scheme = HTTPBearer(auto_error=False)


def get_session_factory() -> Callable[[], Session]:
    """Session factory for handlers that outlive a request, such as WebSockets."""
    return SessionLocal


# --- Authentication & Authorization -------------------------------------------

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user and bind it to the log context."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    user = await run_in_threadpool(AuthService(db).user_from_token, credentials.credentials)
    app_logging.user_id.set(user.id)
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency factory allowing only the given roles through."""
    allowed = tuple(roles)

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise AuthorizationError(
                "You do not have permission to perform this action",
                required_roles=[role.value for role in allowed],
            )
        return current_user

    return dependency


admin_only = require_roles(UserRole.ADMIN)
staff_only = require_roles(UserRole.ADMIN, UserRole.WARDEN)
any_role = require_roles(UserRole.ADMIN, UserRole.WARDEN, UserRole.STUDENT)
student_only = require_roles(UserRole.STUDENT)


# --- Services ------------------------------------------------------------------

@lru_cache()
def get_email_provider() -> EmailProvider:
    return EmailProvider()


def get_notification_service(
    db: Session = Depends(get_db),
    email: EmailProvider = Depends(get_email_provider),
) -> NotificationService:
    return NotificationService(db, email=email)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_structure_service(db: Session = Depends(get_db)) -> HostelStructureService:
    return HostelStructureService(db)


def get_occupancy_service(
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> OccupancyService:
    return OccupancyService(db, notifications=notifications)


def get_billing_service(
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> BillingService:
    return BillingService(db, notifications=notifications)


def get_student_service(
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> StudentService:
    return StudentService(db, notifications=notifications)


def get_complaint_service(
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> ComplaintService:
    return ComplaintService(db, notifications=notifications)


def get_staff_service(db: Session = Depends(get_db)) -> StaffService:
    return StaffService(db)


def get_attendance_service(db: Session = Depends(get_db)) -> AttendanceService:
    return AttendanceService(db)


__all__ = [
    "get_db",
    "get_session_factory",
    "get_current_user",
    "require_roles",
    "admin_only",
    "staff_only",
    "any_role",
    "student_only",
    "get_email_provider",
    "get_notification_service",
    "get_auth_service",
    "get_structure_service",
    "get_occupancy_service",
    "get_billing_service",
    "get_student_service",
    "get_complaint_service",
    "get_staff_service",
    "get_attendance_service",
]
