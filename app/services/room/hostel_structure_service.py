"""
Hostel structure service: blocks, floors and rooms.

Plain CRUD. Status changes on existing rooms go through the occupancy
engine, never through here.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ErrorCode, ResourceNotFoundError, RoomNotFoundError
from app.models.base.enums import OccupancyStatus
from app.models.room import Block, Floor, Room
from app.repositories.room import BlockRepository, FloorRepository, RoomRepository
from app.schemas.room import BlockCreate, FloorCreate, RoomCreate
from app.services.base import BaseService


class HostelStructureService(BaseService):
    """Create and list the block, floor and room hierarchy."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.blocks = BlockRepository(db_session)
        self.floors = FloorRepository(db_session)
        self.rooms = RoomRepository(db_session)

    # Blocks
    def create_block(self, data: BlockCreate) -> Block:
        with self.transaction():
            if self.blocks.find_by_name(data.name):
                raise ConflictError(
                    f"Block {data.name!r} already exists",
                    ErrorCode.DUPLICATE_ENTRY,
                    {"name": data.name},
                )
            block = self.blocks.create(Block(name=data.name))
        self._logger.info("Block created", extra={"block_id": block.id, "block_name": data.name})
        return block

    def list_blocks(self) -> List[Block]:
        return self.blocks.list_ordered()

    # Floors
    def create_floor(self, data: FloorCreate) -> Floor:
        with self.transaction():
            if self.blocks.find_by_id(data.block_id) is None:
                raise ResourceNotFoundError("Block", data.block_id)
            if self.floors.find_by_block_and_name(data.block_id, data.name):
                raise ConflictError(
                    f"Floor {data.name!r} already exists in this block",
                    ErrorCode.DUPLICATE_ENTRY,
                    {"block_id": data.block_id, "name": data.name},
                )
            floor = self.floors.create(Floor(block_id=data.block_id, name=data.name))
        self._logger.info("Floor created", extra={"floor_id": floor.id, "block_id": data.block_id})
        return floor

    def list_floors(self, block_id: Optional[str] = None) -> List[Floor]:
        return self.floors.list_for_block(block_id)

    # Rooms
    def create_room(self, data: RoomCreate) -> Room:
        """Create a room. New rooms start Vacant with no override."""
        with self.transaction():
            if self.floors.find_by_id(data.floor_id) is None:
                raise ResourceNotFoundError("Floor", data.floor_id)
            if self.rooms.find_by_floor_and_number(data.floor_id, data.room_number):
                raise ConflictError(
                    "Room number already exists on this floor",
                    ErrorCode.DUPLICATE_ENTRY,
                    {"floor_id": data.floor_id, "room_number": data.room_number},
                )
            room = self.rooms.create(
                Room(
                    floor_id=data.floor_id,
                    room_number=data.room_number,
                    capacity=data.capacity,
                    occupancy_status=OccupancyStatus.VACANT,
                    is_under_maintenance=False,
                )
            )
        self._logger.info(
            "Room created",
            extra={"room_id": room.id, "room_number": data.room_number, "capacity": data.capacity},
        )
        return room

    def get_room(self, room_id: str) -> Room:
        room = self.rooms.find_by_id(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room
