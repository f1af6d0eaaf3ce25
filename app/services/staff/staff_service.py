# app/services/staff/staff_service.py
"""
Staff directory maintenance.
"""

from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import StaffNotFoundError, ValidationError
from app.models.staff import Staff
from app.repositories.complaint import ComplaintRepository
from app.repositories.staff import StaffRepository
from app.schemas.staff import StaffCreate, StaffUpdate
from app.services.base import BaseService


class StaffService(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.staff = StaffRepository(db_session)
        self.complaints = ComplaintRepository(db_session)

    def list_staff(self) -> List[Staff]:
        return self.staff.list_ordered()

    def get_staff(self, staff_id: str) -> Staff:
        member = self.staff.find_by_id(staff_id)
        if member is None:
            raise StaffNotFoundError(staff_id)
        return member

    def create_staff(self, data: StaffCreate) -> Staff:
        with self.transaction():
            member = self.staff.create(Staff(**data.model_dump()))
        self._logger.info("Staff member created", extra={"staff_id": member.id})
        return member

    def update_staff(self, staff_id: str, data: StaffUpdate) -> Staff:
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")
        if changes.get("name") is None and "name" in changes:
            raise ValidationError("Name cannot be cleared", field_errors={"name": ["required"]})
        if changes.get("role") is None and "role" in changes:
            raise ValidationError("Role cannot be cleared", field_errors={"role": ["required"]})

        with self.transaction():
            member = self.get_staff(staff_id)
            self.staff.update(member, changes)
        self._logger.info("Staff member updated", extra={"staff_id": staff_id, "fields": sorted(changes)})
        return member

    def delete_staff(self, staff_id: str) -> None:
        """Delete a staff member; complaints assigned to them become unassigned."""
        with self.transaction():
            member = self.get_staff(staff_id)
            unassigned = self.complaints.unassign_staff(staff_id)
            self.staff.delete(member)
        self._logger.info(
            "Staff member deleted",
            extra={"staff_id": staff_id, "complaints_unassigned": unassigned},
        )
