"""Shared service infrastructure."""

from app.services.base.base_service import BaseService

__all__ = ["BaseService"]
