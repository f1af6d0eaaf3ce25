"""Staff schemas package."""

from app.schemas.staff.staff import StaffCreate, StaffResponse, StaffUpdate

__all__ = ["StaffCreate", "StaffUpdate", "StaffResponse"]
