"""
Complaint endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.models.user import User
from app.schemas.complaint import ComplaintCreate, ComplaintResponse, ComplaintStatusUpdate
from app.services.complaint import ComplaintService

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.post("", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
def raise_complaint(
    payload: ComplaintCreate,
    current_user: User = Depends(deps.student_only),
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    """Raise a complaint. Admin and Warden are notified."""
    return ComplaintResponse.from_complaint(service.create(payload, current_user))


@router.get("", response_model=List[ComplaintResponse])
def list_complaints(
    current_user: User = Depends(deps.any_role),
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    """Newest first. Students only see their own."""
    return [ComplaintResponse.from_complaint(c) for c in service.list_for(current_user)]


@router.get("/my", response_model=List[ComplaintResponse])
def my_complaints(
    current_user: User = Depends(deps.student_only),
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    return [ComplaintResponse.from_complaint(c) for c in service.list_own(current_user)]


@router.put("/{complaint_id}/status", response_model=ComplaintResponse)
def update_complaint_status(
    complaint_id: str,
    payload: ComplaintStatusUpdate,
    current_user: User = Depends(deps.staff_only),
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    return ComplaintResponse.from_complaint(
        service.update_status(complaint_id, payload, current_user)
    )
