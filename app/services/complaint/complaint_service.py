# app/services/complaint/complaint_service.py
"""
Complaint lifecycle.

Students raise complaints; Admin and Warden are told in-app and by email.
Staff then move a complaint through Pending, In Progress and Resolved and
may assign a staff member. The raising student is told when it is
resolved. Notifications run after commit and never undo the write.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ComplaintNotFoundError, StaffNotFoundError
from app.models.base.enums import ComplaintStatus, UserRole
from app.models.complaint import Complaint
from app.models.user import User
from app.repositories.complaint import ComplaintRepository
from app.repositories.staff import StaffRepository
from app.repositories.student import StudentRepository
from app.schemas.complaint import ComplaintCreate, ComplaintStatusUpdate
from app.services.base import BaseService
from app.services.notification import NotificationService
from app.services.student import StudentService


class ComplaintService(BaseService):
    """Raising, listing and triaging complaints."""

    def __init__(self, db_session: Session, notifications: Optional[NotificationService] = None):
        super().__init__(db_session)
        self.complaints = ComplaintRepository(db_session)
        self.staff = StaffRepository(db_session)
        self.students = StudentRepository(db_session)
        self.student_service = StudentService(db_session)
        self.notifications = notifications

    def create(self, data: ComplaintCreate, acting_user: User) -> Complaint:
        student = self.student_service.ensure_for_user(acting_user)
        with self.transaction():
            complaint = self.complaints.create(
                Complaint(
                    student_id=student.id,
                    title=data.title,
                    description=data.description,
                    photo_url=data.photo_url,
                    status=ComplaintStatus.PENDING,
                )
            )

        self._logger.info(
            "Complaint raised",
            extra={"complaint_id": complaint.id, "student_id": student.id},
        )
        self._announce_new(complaint, acting_user)
        return complaint

    def list_for(self, user: User) -> List[Complaint]:
        """Students see their own complaints, staff see all of them."""
        if user.role == UserRole.STUDENT:
            return self.list_own(user)
        return self.complaints.list_with_people()

    def list_own(self, user: User) -> List[Complaint]:
        student = self.students.find_by_user_id(user.id)
        if student is None:
            return []
        return self.complaints.list_with_people(student.id)

    def update_status(
        self,
        complaint_id: str,
        data: ComplaintStatusUpdate,
        acting_user: Optional[User] = None,
    ) -> Complaint:
        """
        Set the status and, when given, the assigned staff member.

        Raises:
            ComplaintNotFoundError: unknown complaint
            StaffNotFoundError: unknown staff member
        """
        with self.transaction():
            complaint = self.complaints.lock_by_id(complaint_id)
            if complaint is None:
                raise ComplaintNotFoundError(complaint_id)

            changes = {"status": data.status}
            if "assigned_to_staff_id" in data.model_fields_set:
                staff_id = data.assigned_to_staff_id
                if staff_id is not None and self.staff.find_by_id(staff_id) is None:
                    raise StaffNotFoundError(staff_id)
                changes["assigned_to_staff_id"] = staff_id

            previous = complaint.status
            self.complaints.update(complaint, changes)

        self._logger.info(
            "Complaint updated",
            extra={
                "complaint_id": complaint_id,
                "from_status": previous.value,
                "to_status": data.status.value,
                "acting_user_id": acting_user.id if acting_user else None,
            },
        )
        if data.status == ComplaintStatus.RESOLVED and previous != ComplaintStatus.RESOLVED:
            self._announce_resolved(complaint)
        return complaint

    # ------------------------------------------------------------------ #
    # Notifications
    # ------------------------------------------------------------------ #
    def _announce_new(self, complaint: Complaint, student_user: User) -> None:
        if self.notifications is None:
            return
        try:
            self.notifications.notify_roles(
                f"New complaint: {complaint.title}",
                f"Raised by {student_user.full_name}",
                "/complaints",
            )
            self.notifications.email_roles(
                "complaint_new",
                {
                    "title": complaint.title,
                    "description": complaint.description,
                    "student_name": student_user.full_name,
                    "student_email": student_user.email,
                    "created_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
                },
            )
        except Exception as e:
            self._logger.warning(
                f"Complaint notification failed after commit: {e}",
                exc_info=True,
                extra={"complaint_id": complaint.id},
            )

    def _announce_resolved(self, complaint: Complaint) -> None:
        if self.notifications is None:
            return
        try:
            user = complaint.student.user
            self.notifications.notify_user(
                user.id,
                "Complaint resolved",
                f'Your complaint "{complaint.title}" has been resolved',
                "/complaints",
            )
            self.notifications.email_user(user, "complaint_resolved", {"title": complaint.title})
        except Exception as e:
            self._logger.warning(
                f"Complaint notification failed after commit: {e}",
                exc_info=True,
                extra={"complaint_id": complaint.id},
            )
