# app/repositories/user/user_repository.py
"""
User repository.
"""

from typing import Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.base.enums import UserRole
from app.models.user import User
from app.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def find_by_email(self, email: str) -> Optional[User]:
        """Find user by email, case-insensitively."""
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        rows = self._scalars(stmt)
        return rows[0] if rows else None

    def count_all(self) -> int:
        return int(self._scalar(select(func.count(User.id))) or 0)

    def count_by_role(self, role: UserRole) -> int:
        stmt = select(func.count(User.id)).where(User.role == role)
        return int(self._scalar(stmt) or 0)

    def find_active_ids_by_roles(self, roles: Iterable[UserRole]) -> List[str]:
        """Ids of active users holding any of the given roles."""
        stmt = select(User.id).where(
            User.role.in_(list(roles)),
            User.is_active.is_(True),
        )
        return self._scalars(stmt)

    def find_active_by_roles(self, roles: Iterable[UserRole]) -> List[User]:
        stmt = (
            select(User)
            .where(User.role.in_(list(roles)), User.is_active.is_(True))
            .order_by(User.first_name, User.id)
        )
        return self._scalars(stmt)
