"""
User repository.

Data access for user accounts: lookups by login name and vendor code.
"""

from __future__ import annotations

from typing import List, Optional

from sqlmodel import select

from ..entities.users import User
from .base import QueryBuilder, WritableRepository


class UserRepository(WritableRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, User)

    async def get_by_id(self, user_id: str | int) -> Optional[User]:
        stmt = select(User).where(User.id == int(user_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[User]:
        stmt = select(User).where(User.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_co_ven(self, co_ven: str) -> Optional[User]:
        stmt = select(User).where(User.co_ven == co_ven)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[User]:
        """List users ordered by name."""
        stmt = QueryBuilder.apply_pagination(select(User).order_by(User.name), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
