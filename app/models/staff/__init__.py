"""Staff models package."""

from app.models.staff.staff import Staff

__all__ = ["Staff"]
