# app/repositories/room/room_repository.py
"""
Room repository: hostel structure lookups and the rooms grid query.
"""

from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.room import Allocation, Block, Floor, Room
from app.models.student import Student
from app.models.user import User
from app.repositories.base.base_repository import BaseRepository


class BlockRepository(BaseRepository[Block]):
    """Repository for hostel blocks."""

    def __init__(self, db: Session):
        super().__init__(Block, db)

    def find_by_name(self, name: str) -> Optional[Block]:
        stmt = select(Block).where(Block.name == name)
        rows = self._scalars(stmt)
        return rows[0] if rows else None

    def list_ordered(self) -> List[Block]:
        return self._scalars(select(Block).order_by(Block.name))


class FloorRepository(BaseRepository[Floor]):
    """Repository for floors within blocks."""

    def __init__(self, db: Session):
        super().__init__(Floor, db)

    def find_by_block_and_name(self, block_id: str, name: str) -> Optional[Floor]:
        stmt = select(Floor).where(Floor.block_id == block_id, Floor.name == name)
        rows = self._scalars(stmt)
        return rows[0] if rows else None

    def list_for_block(self, block_id: Optional[str] = None) -> List[Floor]:
        stmt = select(Floor).join(Block, Floor.block_id == Block.id)
        if block_id:
            stmt = stmt.where(Floor.block_id == block_id)
        return self._scalars(stmt.order_by(Block.name, Floor.name))


class RoomRepository(BaseRepository[Room]):
    """
    Repository for Room entity.

    Handles:
    - Room lookups by floor and number
    - The rooms grid with live occupancy counts
    """

    def __init__(self, db: Session):
        super().__init__(Room, db)

    def find_by_floor_and_number(
        self,
        floor_id: str,
        room_number: str,
        exclude_room_id: Optional[str] = None,
    ) -> Optional[Room]:
        """Find a room by its number on a floor, optionally ignoring one room."""
        stmt = select(Room).where(
            Room.floor_id == floor_id,
            Room.room_number == room_number,
        )
        if exclude_room_id:
            stmt = stmt.where(Room.id != exclude_room_id)
        rows = self._scalars(stmt)
        return rows[0] if rows else None

    def grid_rows(self) -> List[tuple]:
        """
        Every room with its block, floor and live active allocation count.

        Returns:
            List of ``(Room, Floor, Block, active_count)`` tuples ordered by
            block name, floor name and room number
        """
        active_counts = (
            select(
                Allocation.room_id.label("room_id"),
                func.count(Allocation.id).label("active_count"),
            )
            .where(Allocation.is_active.is_(True))
            .group_by(Allocation.room_id)
            .subquery()
        )
        stmt = (
            select(
                Room,
                Floor,
                Block,
                func.coalesce(active_counts.c.active_count, 0),
            )
            .join(Floor, Room.floor_id == Floor.id)
            .join(Block, Floor.block_id == Block.id)
            .outerjoin(active_counts, active_counts.c.room_id == Room.id)
            .order_by(Block.name, Floor.name, Room.room_number)
        )
        return self._rows(stmt)

    def occupant_names(self) -> Dict[str, List[str]]:
        """Names of students holding an active allocation, keyed by room id."""
        stmt = (
            select(Allocation.room_id, User.first_name, User.last_name)
            .join(Student, Allocation.student_id == Student.id)
            .join(User, Student.user_id == User.id)
            .where(Allocation.is_active.is_(True))
            .order_by(User.first_name, User.last_name)
        )
        names: Dict[str, List[str]] = {}
        for room_id, first_name, last_name in self._rows(stmt):
            full_name = " ".join(part for part in (first_name, last_name) if part)
            names.setdefault(room_id, []).append(full_name)
        return names
