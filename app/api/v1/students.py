"""
Student endpoints: the staff directory view, admin-managed accounts and
the student's own profile.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.api import deps
from app.models.user import User
from app.schemas.student import (
    StudentCreate,
    StudentProfileResponse,
    StudentResponse,
    StudentUpdate,
)
from app.services.student import StudentService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("", response_model=List[StudentResponse])
def list_students(
    _: User = Depends(deps.staff_only),
    service: StudentService = Depends(deps.get_student_service),
):
    return [StudentResponse.from_student(student) for student in service.list_students()]


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(
    payload: StudentCreate,
    _: User = Depends(deps.admin_only),
    service: StudentService = Depends(deps.get_student_service),
):
    """Create a Student account and its student record."""
    return StudentResponse.from_student(service.create_student(payload))


@router.get("/me", response_model=StudentProfileResponse)
def my_profile(
    current_user: User = Depends(deps.student_only),
    service: StudentService = Depends(deps.get_student_service),
):
    """Own profile with the current room, floor and block."""
    student, placement = service.profile_for_user(current_user)
    return StudentProfileResponse.from_profile(student, placement)


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(
    student_id: str,
    _: User = Depends(deps.staff_only),
    service: StudentService = Depends(deps.get_student_service),
):
    return StudentResponse.from_student(service.get_student(student_id))


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(
    student_id: str,
    payload: StudentUpdate,
    current_user: User = Depends(deps.any_role),
    service: StudentService = Depends(deps.get_student_service),
):
    """Partial profile update. Students may only edit themselves."""
    return StudentResponse.from_student(service.update_student(student_id, payload, current_user))


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(
    student_id: str,
    _: User = Depends(deps.staff_only),
    service: StudentService = Depends(deps.get_student_service),
):
    service.delete_student(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
