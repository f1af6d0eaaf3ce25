# app/repositories/room/allocation_repository.py
"""
Allocation repository.

Counting queries here are the source of truth for room occupancy; the
stored room status is only ever derived from them.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.room import Allocation, Block, Floor, Room
from app.repositories.base.base_repository import BaseRepository


class AllocationRepository(BaseRepository[Allocation]):
    """Repository for student room allocations."""

    def __init__(self, db: Session):
        super().__init__(Allocation, db)

    def count_active_for_room(
        self,
        room_id: str,
        exclude_student_id: Optional[str] = None,
    ) -> int:
        """
        Count active allocations in a room.

        Args:
            room_id: Room to count
            exclude_student_id: Leave this student's allocations out of the count
        """
        stmt = select(func.count(Allocation.id)).where(
            Allocation.room_id == room_id,
            Allocation.is_active.is_(True),
        )
        if exclude_student_id:
            stmt = stmt.where(Allocation.student_id != exclude_student_id)
        return int(self._scalar(stmt) or 0)

    def find_active_for_student(self, student_id: str) -> List[Allocation]:
        """Active allocations held by a student, oldest first."""
        stmt = (
            select(Allocation)
            .where(
                Allocation.student_id == student_id,
                Allocation.is_active.is_(True),
            )
            .order_by(Allocation.start_date, Allocation.created_at)
            .execution_options(populate_existing=True)
        )
        return self._scalars(stmt)

    def find_active_placement(self, student_id: str) -> Optional[tuple]:
        """
        The student's current allocation with its room, floor and block.

        Returns:
            ``(Allocation, Room, Floor, Block)`` or None when not placed
        """
        stmt = (
            select(Allocation, Room, Floor, Block)
            .join(Room, Allocation.room_id == Room.id)
            .join(Floor, Room.floor_id == Floor.id)
            .join(Block, Floor.block_id == Block.id)
            .where(
                Allocation.student_id == student_id,
                Allocation.is_active.is_(True),
            )
            .order_by(Allocation.start_date.desc(), Allocation.created_at.desc())
            .limit(1)
        )
        rows = self._rows(stmt)
        return tuple(rows[0]) if rows else None

    def count_for_student(self, student_id: str) -> int:
        """Allocations of any state held by a student."""
        stmt = select(func.count(Allocation.id)).where(Allocation.student_id == student_id)
        return int(self._scalar(stmt) or 0)
