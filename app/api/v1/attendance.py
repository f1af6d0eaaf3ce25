"""
Attendance endpoints. Students are read-only.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.models.user import User
from app.schemas.attendance import AttendanceMarkRequest, AttendanceMarkResult, AttendanceSummaryRow
from app.services.attendance import AttendanceService

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.post("/mark", response_model=AttendanceMarkResult)
def mark_attendance(
    payload: AttendanceMarkRequest,
    current_user: User = Depends(deps.staff_only),
    service: AttendanceService = Depends(deps.get_attendance_service),
):
    return AttendanceMarkResult(saved=service.mark(payload, current_user))


@router.get("/summary", response_model=List[AttendanceSummaryRow])
def attendance_summary(
    month: str = Query(..., examples=["2024-05"]),
    current_user: User = Depends(deps.any_role),
    service: AttendanceService = Depends(deps.get_attendance_service),
):
    return service.summary(month, current_user)
