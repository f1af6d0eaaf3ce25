"""Fee structure models package."""

from app.models.fee_structure.fee_structure import FeeStructure

__all__ = ["FeeStructure"]
