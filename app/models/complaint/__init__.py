"""Complaint models package."""

from app.models.complaint.complaint import Complaint

__all__ = ["Complaint"]
