"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hostel ledger service
"""
from fastapi import APIRouter

from app.api.v1 import (
    attendance,
    auth,
    complaints,
    fees,
    health,
    notifications,
    rooms,
    staff,
    students,
)
from app.schemas.common import ErrorResponse

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request"},
        401: {"model": ErrorResponse, "description": "Unauthorized"},
        403: {"model": ErrorResponse, "description": "Forbidden"},
        404: {"model": ErrorResponse, "description": "Not Found"},
        409: {"model": ErrorResponse, "description": "Conflict"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    }
)

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(rooms.router)
router.include_router(fees.router)
router.include_router(students.router)
router.include_router(notifications.router)
router.include_router(complaints.router)
router.include_router(staff.router)
router.include_router(attendance.router)

__all__ = ["router"]
