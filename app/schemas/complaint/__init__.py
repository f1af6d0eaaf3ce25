"""Complaint schemas package."""

from app.schemas.complaint.complaint import (
    ComplaintCreate,
    ComplaintResponse,
    ComplaintStatusUpdate,
)

__all__ = ["ComplaintCreate", "ComplaintStatusUpdate", "ComplaintResponse"]
