"""Student schemas package."""

from app.schemas.student.student_request import StudentCreate, StudentUpdate
from app.schemas.student.student_response import (
    PlacementResponse,
    StudentProfileResponse,
    StudentResponse,
)

__all__ = [
    "StudentCreate",
    "StudentUpdate",
    "StudentResponse",
    "StudentProfileResponse",
    "PlacementResponse",
]
