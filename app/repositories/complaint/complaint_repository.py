# app/repositories/complaint/complaint_repository.py
"""
Complaint repository.

Listings load the raising student's user and the assigned staff member in
the same query, since every response shows both names.
"""

from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, joinedload

from app.models.complaint import Complaint
from app.models.student import Student
from app.repositories.base.base_repository import BaseRepository


class ComplaintRepository(BaseRepository[Complaint]):
    """Repository for student complaints."""

    def __init__(self, db: Session):
        super().__init__(Complaint, db)

    def list_with_people(self, student_id: Optional[str] = None) -> List[Complaint]:
        """
        Complaints newest first, optionally for one student.

        Args:
            student_id: Restrict to complaints raised by this student
        """
        stmt = (
            select(Complaint)
            .options(
                joinedload(Complaint.student).joinedload(Student.user),
                joinedload(Complaint.assigned_staff),
            )
            .order_by(Complaint.created_at.desc(), Complaint.id)
        )
        if student_id is not None:
            stmt = stmt.where(Complaint.student_id == student_id)
        return self._scalars(stmt)

    def unassign_staff(self, staff_id: str) -> int:
        """Clear a staff member from every complaint assigned to them."""
        stmt = (
            update(Complaint)
            .where(Complaint.assigned_to_staff_id == staff_id)
            .values(assigned_to_staff_id=None)
        )
        return self._execute(stmt)

    def delete_for_student(self, student_id: str) -> int:
        return self._execute(delete(Complaint).where(Complaint.student_id == student_id))
