"""Base repository package."""

from app.repositories.base.base_repository import BaseRepository, ModelType

__all__ = [
    "BaseRepository",
    "ModelType",
]
