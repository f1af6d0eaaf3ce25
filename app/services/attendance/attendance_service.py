# app/services/attendance/attendance_service.py
"""
Attendance marking and monthly summaries.

Only Admin and Warden mark attendance; students can read their own
summary and nothing else.
"""

from datetime import date
from typing import List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from app.core.exceptions import StudentNotFoundError
from app.models.attendance import Attendance
from app.models.base.enums import UserRole
from app.models.user import User
from app.repositories.attendance import AttendanceRepository
from app.repositories.student import StudentRepository
from app.schemas.attendance import AttendanceMarkRequest, AttendanceSummaryRow
from app.services.base import BaseService
from app.services.billing import normalize_month


def month_bounds(month: Union[str, date]) -> Tuple[date, date]:
    """First day of the month and first day of the next one."""
    year, month_number = (int(part) for part in normalize_month(month).split("-"))
    start = date(year, month_number, 1)
    if month_number == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month_number + 1, 1)


class AttendanceService(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.attendance = AttendanceRepository(db_session)
        self.students = StudentRepository(db_session)

    def mark(self, data: AttendanceMarkRequest, acting_user: Optional[User] = None) -> int:
        """
        Save one session's marks. The whole batch is rejected if any
        student is unknown.

        Returns:
            Number of slots written
        """
        # Last mark wins when a student appears twice
        marks = {mark.student_id: mark.status for mark in data.marks}
        with self.transaction():
            for student_id, status in marks.items():
                if self.students.find_by_id(student_id) is None:
                    raise StudentNotFoundError(student_id)
                existing = self.attendance.find_slot(student_id, data.date, data.session)
                if existing is None:
                    self.attendance.create(
                        Attendance(
                            student_id=student_id,
                            date=data.date,
                            session=data.session,
                            status=status,
                        )
                    )
                else:
                    self.attendance.update(existing, {"status": status})

        self._logger.info(
            "Attendance marked",
            extra={
                "date": data.date.isoformat(),
                "session": data.session.value,
                "marked": len(marks),
                "acting_user_id": acting_user.id if acting_user else None,
            },
        )
        return len(marks)

    def summary(self, month: Union[str, date], user: User) -> List[AttendanceSummaryRow]:
        """Per-day tallies for a month; a student only sees their own rows."""
        start, end = month_bounds(month)
        student_id = None
        if user.role == UserRole.STUDENT:
            student = self.students.find_by_user_id(user.id)
            if student is None:
                return []
            student_id = student.id

        return [
            AttendanceSummaryRow(
                student_id=row[0],
                date=row[1],
                present_day=int(row[2] or 0),
                absent_day=int(row[3] or 0),
                present_night=int(row[4] or 0),
                absent_night=int(row[5] or 0),
                present=int(row[6] or 0),
                absent=int(row[7] or 0),
                student_name=" ".join(part for part in (row[8], row[9]) if part),
            )
            for row in self.attendance.daily_summary(start, end, student_id)
        ]
