"""Fee structure repositories package."""

from app.repositories.fee_structure.fee_structure_repository import FeeStructureRepository

__all__ = ["FeeStructureRepository"]
