# app/repositories/staff/staff_repository.py
"""
Staff repository.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.staff import Staff
from app.repositories.base.base_repository import BaseRepository


class StaffRepository(BaseRepository[Staff]):
    """Repository for the staff directory."""

    def __init__(self, db: Session):
        super().__init__(Staff, db)

    def list_ordered(self) -> List[Staff]:
        return self._scalars(select(Staff).order_by(Staff.name, Staff.id))
