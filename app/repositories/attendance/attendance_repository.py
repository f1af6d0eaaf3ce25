# app/repositories/attendance/attendance_repository.py
"""
Attendance repository.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import case, delete, func, select
from sqlalchemy.orm import Session

from app.models.attendance import Attendance
from app.models.base.enums import AttendanceSession, AttendanceStatus
from app.models.student import Student
from app.models.user import User
from app.repositories.base.base_repository import BaseRepository


def _tally(session: Optional[AttendanceSession], status: AttendanceStatus):
    condition = Attendance.status == status
    if session is not None:
        condition = condition & (Attendance.session == session)
    return func.sum(case((condition, 1), else_=0))


class AttendanceRepository(BaseRepository[Attendance]):
    """Repository for attendance marks."""

    def __init__(self, db: Session):
        super().__init__(Attendance, db)

    def find_slot(
        self, student_id: str, day: date, session: AttendanceSession
    ) -> Optional[Attendance]:
        stmt = select(Attendance).where(
            Attendance.student_id == student_id,
            Attendance.date == day,
            Attendance.session == session,
        )
        rows = self._scalars(stmt)
        return rows[0] if rows else None

    def daily_summary(
        self,
        start: date,
        end: date,
        student_id: Optional[str] = None,
    ) -> List[tuple]:
        """
        Present/absent tallies per student per day in ``[start, end)``.

        Returns:
            Tuples of ``(student_id, date, present_day, absent_day,
            present_night, absent_night, present, absent, first_name,
            last_name)``, newest day first
        """
        stmt = (
            select(
                Attendance.student_id,
                Attendance.date,
                _tally(AttendanceSession.DAY, AttendanceStatus.PRESENT),
                _tally(AttendanceSession.DAY, AttendanceStatus.ABSENT),
                _tally(AttendanceSession.NIGHT, AttendanceStatus.PRESENT),
                _tally(AttendanceSession.NIGHT, AttendanceStatus.ABSENT),
                _tally(None, AttendanceStatus.PRESENT),
                _tally(None, AttendanceStatus.ABSENT),
                User.first_name,
                User.last_name,
            )
            .join(Student, Attendance.student_id == Student.id)
            .join(User, Student.user_id == User.id)
            .where(Attendance.date >= start, Attendance.date < end)
            .group_by(Attendance.student_id, Attendance.date, User.first_name, User.last_name)
            .order_by(Attendance.date.desc(), User.first_name, User.last_name)
        )
        if student_id is not None:
            stmt = stmt.where(Attendance.student_id == student_id)
        return self._rows(stmt)

    def delete_for_student(self, student_id: str) -> int:
        return self._execute(delete(Attendance).where(Attendance.student_id == student_id))
