"""
Room endpoints: hostel structure, rooms grid, room edits and the
allocate/vacate commands.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.models.user import User
from app.schemas.room import (
    AllocateRequest,
    AllocationResponse,
    BlockCreate,
    BlockResponse,
    FloorCreate,
    FloorResponse,
    RoomCreate,
    RoomGridItem,
    RoomResponse,
    RoomUpdate,
    VacateRequest,
)
from app.services.room import HostelStructureService, OccupancyService

router = APIRouter(prefix="/rooms", tags=["Rooms"])


# Structure

@router.post("/blocks", response_model=BlockResponse, status_code=status.HTTP_201_CREATED)
def create_block(
    payload: BlockCreate,
    _: User = Depends(deps.admin_only),
    service: HostelStructureService = Depends(deps.get_structure_service),
):
    return service.create_block(payload)


@router.get("/blocks", response_model=List[BlockResponse])
def list_blocks(
    _: User = Depends(deps.staff_only),
    service: HostelStructureService = Depends(deps.get_structure_service),
):
    return service.list_blocks()


@router.post("/floors", response_model=FloorResponse, status_code=status.HTTP_201_CREATED)
def create_floor(
    payload: FloorCreate,
    _: User = Depends(deps.staff_only),
    service: HostelStructureService = Depends(deps.get_structure_service),
):
    return service.create_floor(payload)


@router.get("/floors", response_model=List[FloorResponse])
def list_floors(
    block_id: Optional[str] = Query(default=None),
    _: User = Depends(deps.staff_only),
    service: HostelStructureService = Depends(deps.get_structure_service),
):
    return service.list_floors(block_id)


@router.post("/rooms", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreate,
    _: User = Depends(deps.staff_only),
    service: HostelStructureService = Depends(deps.get_structure_service),
):
    return service.create_room(payload)


# Occupancy

@router.get("/rooms-grid", response_model=List[RoomGridItem])
def rooms_grid(
    current_user: User = Depends(deps.any_role),
    service: OccupancyService = Depends(deps.get_occupancy_service),
):
    """All rooms with live occupancy. Occupant names are hidden from students."""
    return service.rooms_grid(current_user.role)


@router.get("/rooms/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: str,
    _: User = Depends(deps.staff_only),
    service: HostelStructureService = Depends(deps.get_structure_service),
):
    return service.get_room(room_id)


@router.put("/rooms/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: str,
    payload: RoomUpdate,
    _: User = Depends(deps.staff_only),
    service: OccupancyService = Depends(deps.get_occupancy_service),
):
    return service.update_room(room_id, payload.model_dump(exclude_unset=True))


@router.post("/allocate", response_model=AllocationResponse, status_code=status.HTTP_201_CREATED)
def allocate(
    payload: AllocateRequest,
    current_user: User = Depends(deps.staff_only),
    service: OccupancyService = Depends(deps.get_occupancy_service),
):
    return service.allocate(
        payload.student_id,
        payload.room_id,
        start_date=payload.start_date,
        acting_user_id=current_user.id,
    )


@router.post("/vacate", response_model=AllocationResponse)
def vacate(
    payload: VacateRequest,
    current_user: User = Depends(deps.staff_only),
    service: OccupancyService = Depends(deps.get_occupancy_service),
):
    return service.vacate(
        payload.allocation_id,
        end_date=payload.end_date,
        acting_user_id=current_user.id,
    )
