# app/repositories/fee_structure/fee_structure_repository.py
"""
Fee structure repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.fee_structure import FeeStructure
from app.repositories.base.base_repository import BaseRepository


class FeeStructureRepository(BaseRepository[FeeStructure]):
    """Repository for fee structures."""

    def __init__(self, db: Session):
        super().__init__(FeeStructure, db)

    def find_active_by_id(self, fee_structure_id: str) -> Optional[FeeStructure]:
        stmt = select(FeeStructure).where(
            FeeStructure.id == fee_structure_id,
            FeeStructure.is_active.is_(True),
        )
        rows = self._scalars(stmt)
        return rows[0] if rows else None

    def list_active(self) -> List[FeeStructure]:
        stmt = (
            select(FeeStructure)
            .where(FeeStructure.is_active.is_(True))
            .order_by(FeeStructure.name)
        )
        return self._scalars(stmt)
