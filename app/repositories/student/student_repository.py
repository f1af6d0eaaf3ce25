# app/repositories/student/student_repository.py
"""
Student repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.student import Student
from app.models.user import User
from app.repositories.base.base_repository import BaseRepository


class StudentRepository(BaseRepository[Student]):
    """Repository for student records."""

    def __init__(self, db: Session):
        super().__init__(Student, db)

    def find_by_user_id(self, user_id: str) -> Optional[Student]:
        stmt = select(Student).where(Student.user_id == user_id)
        rows = self._scalars(stmt)
        return rows[0] if rows else None

    def list_all_ids(self) -> List[str]:
        """Every student id in a stable order."""
        stmt = select(Student.id).order_by(Student.created_at, Student.id)
        return self._scalars(stmt)

    def list_with_users(self) -> List[Student]:
        stmt = (
            select(Student)
            .join(User, Student.user_id == User.id)
            .order_by(User.first_name, User.last_name)
        )
        return self._scalars(stmt)
