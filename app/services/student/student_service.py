# app/services/student/student_service.py
"""
Student directory: lookups, admin-managed accounts and self-service profile.

Profile edits by a student are announced to Admin and Warden. Deleting a
student is refused once the ledger references them (allocations or bills),
since that history is never deleted.
"""

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import (
    AuthorizationError,
    ConflictError,
    ErrorCode,
    StudentNotFoundError,
    ValidationError,
)
from app.core.security import hash_password
from app.models.base.enums import UserRole
from app.models.student import Student
from app.models.user import User
from app.repositories.attendance import AttendanceRepository
from app.repositories.complaint import ComplaintRepository
from app.repositories.notification import NotificationRepository
from app.repositories.payment import BillRepository
from app.repositories.room import AllocationRepository
from app.repositories.student import StudentRepository
from app.repositories.user import UserRepository
from app.schemas.student import StudentCreate, StudentUpdate
from app.services.base import BaseService
from app.services.notification import NotificationService

USER_PROFILE_FIELDS = ("first_name", "last_name", "phone")
STUDENT_PROFILE_FIELDS = ("guardian_name", "guardian_phone", "address")


class StudentService(BaseService):
    def __init__(self, db_session: Session, notifications: Optional[NotificationService] = None):
        super().__init__(db_session)
        self.students = StudentRepository(db_session)
        self.users = UserRepository(db_session)
        self.allocations = AllocationRepository(db_session)
        self.bills = BillRepository(db_session)
        self.complaints = ComplaintRepository(db_session)
        self.attendance = AttendanceRepository(db_session)
        self.inbox = NotificationRepository(db_session)
        self.notifications = notifications

    def list_students(self) -> List[Student]:
        return self.students.list_with_users()

    def get_student(self, student_id: str) -> Student:
        student = self.students.find_by_id(student_id)
        if student is None:
            raise StudentNotFoundError(student_id)
        return student

    def ensure_for_user(self, user: User) -> Student:
        """
        The student record of a Student-role user, created if missing.

        Raises:
            AuthorizationError: the user is not a Student
        """
        if user.role != UserRole.STUDENT:
            raise AuthorizationError("Only students have a student profile")
        student = self.students.find_by_user_id(user.id)
        if student is not None:
            return student
        with self.transaction():
            student = self.students.create(Student(user_id=user.id))
        self._logger.warning("Student record was missing and has been created", extra={"student_id": student.id})
        return student

    def profile_for_user(self, user: User) -> Tuple[Student, Optional[tuple]]:
        """
        Own profile with the current placement.

        Returns:
            ``(student, placement)`` where placement is
            ``(Allocation, Room, Floor, Block)`` or None
        """
        student = self.ensure_for_user(user)
        return student, self.allocations.find_active_placement(student.id)

    def create_student(self, data: StudentCreate) -> Student:
        with self.transaction():
            if self.users.find_by_email(data.email):
                raise ConflictError(
                    "A user with this email already exists",
                    ErrorCode.DUPLICATE_ENTRY,
                    {"email": data.email},
                )
            user = self.users.create(
                User(
                    email=data.email,
                    password_hash=hash_password(data.password),
                    first_name=data.first_name,
                    last_name=data.last_name,
                    phone=data.phone,
                    role=UserRole.STUDENT,
                    is_active=True,
                )
            )
            student = self.students.create(
                Student(
                    user_id=user.id,
                    guardian_name=data.guardian_name,
                    guardian_phone=data.guardian_phone,
                    address=data.address,
                )
            )

        self._logger.info("Student created", extra={"student_id": student.id, "new_user_id": user.id})
        if self.notifications is not None:
            try:
                self.notifications.email_user(user, "student_welcome", {"email": user.email})
            except Exception as e:
                self._logger.warning(f"Welcome email failed: {e}", exc_info=True)
        return student

    def update_student(self, student_id: str, data: StudentUpdate, acting_user: User) -> Student:
        """
        Partially update a student's profile.

        Students may edit only their own record.

        Raises:
            StudentNotFoundError: unknown id
            AuthorizationError: a student editing someone else
            ValidationError: nothing to update
        """
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")

        edited_by_student = acting_user.role == UserRole.STUDENT
        with self.transaction():
            student = self.get_student(student_id)
            if edited_by_student and student.user_id != acting_user.id:
                raise AuthorizationError("You can only edit your own profile")

            self.users.update(
                student.user, {k: v for k, v in changes.items() if k in USER_PROFILE_FIELDS}
            )
            self.students.update(
                student, {k: v for k, v in changes.items() if k in STUDENT_PROFILE_FIELDS}
            )
            full_name = student.user.full_name

        self._logger.info(
            "Student updated",
            extra={"student_id": student_id, "fields": sorted(changes), "by_student": edited_by_student},
        )
        if edited_by_student and self.notifications is not None:
            try:
                self.notifications.notify_roles(
                    f"Student updated profile: {full_name}",
                    f"Fields: {', '.join(sorted(changes))}",
                    "/students",
                )
            except Exception as e:
                self._logger.warning(f"Profile update notification failed: {e}", exc_info=True)
        return student

    def delete_student(self, student_id: str) -> None:
        """
        Delete a student together with their login account.

        Raises:
            StudentNotFoundError: unknown id
            ConflictError: the student has allocations or bills on record
        """
        with self.transaction():
            student = self.get_student(student_id)
            allocations = self.allocations.count_for_student(student_id)
            bills = self.bills.count_for_student(student_id)
            if allocations or bills:
                raise ConflictError(
                    "Student has allocation or billing history and cannot be deleted",
                    details={"allocations": allocations, "bills": bills},
                )

            user = student.user
            self.complaints.delete_for_student(student_id)
            self.attendance.delete_for_student(student_id)
            self.inbox.delete_for_user(user.id)
            self.students.delete(student)
            # Reload the one-to-one so the user's delete sees no child row
            self.db.expire(user, ["student"])
            self.users.delete(user)

        self._logger.info("Student deleted", extra={"student_id": student_id})
