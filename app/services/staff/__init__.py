"""Staff directory services."""

from app.services.staff.staff_service import StaffService

__all__ = ["StaffService"]
