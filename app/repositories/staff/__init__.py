"""Staff repositories package."""

from app.repositories.staff.staff_repository import StaffRepository

__all__ = ["StaffRepository"]
