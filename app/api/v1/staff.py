"""
Staff directory endpoints. Admin maintains the directory; Warden can read it.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.api import deps
from app.models.user import User
from app.schemas.staff import StaffCreate, StaffResponse, StaffUpdate
from app.services.staff import StaffService

router = APIRouter(prefix="/staff", tags=["Staff"])


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
def create_staff(
    payload: StaffCreate,
    _: User = Depends(deps.admin_only),
    service: StaffService = Depends(deps.get_staff_service),
):
    return service.create_staff(payload)


@router.get("", response_model=List[StaffResponse])
def list_staff(
    _: User = Depends(deps.staff_only),
    service: StaffService = Depends(deps.get_staff_service),
):
    return service.list_staff()


@router.put("/{staff_id}", response_model=StaffResponse)
def update_staff(
    staff_id: str,
    payload: StaffUpdate,
    _: User = Depends(deps.admin_only),
    service: StaffService = Depends(deps.get_staff_service),
):
    return service.update_staff(staff_id, payload)


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_staff(
    staff_id: str,
    _: User = Depends(deps.admin_only),
    service: StaffService = Depends(deps.get_staff_service),
):
    service.delete_staff(staff_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
