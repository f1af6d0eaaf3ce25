"""
Room services: hostel structure and the occupancy engine.
"""

from app.services.room.hostel_structure_service import HostelStructureService
from app.services.room.occupancy_service import (
    OccupancyService,
    derive_occupancy,
    effective_status,
)

__all__ = [
    "HostelStructureService",
    "OccupancyService",
    "derive_occupancy",
    "effective_status",
]
