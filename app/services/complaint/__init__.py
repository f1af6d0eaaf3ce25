"""Complaint services."""

from app.services.complaint.complaint_service import ComplaintService

__all__ = ["ComplaintService"]
