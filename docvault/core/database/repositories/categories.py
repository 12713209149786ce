"""
Category repository.

Categories are shared by every user. Deleting one keeps its documents and
clears their ``category_id``.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import func, update
from sqlmodel import select

from docvault.core.logging_config import get_logger

from ..entities.categories import Category
from ..entities.documents import Document
from .base import WritableRepository

logger = get_logger(__name__)


class CategoryRepository(WritableRepository[Category]):
    """Repository for category data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, Category)

    async def get_by_id(self, category_id: str | int) -> Optional[Category]:
        stmt = select(Category).where(Category.id == int(category_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Category]:
        stmt = select(Category).where(Category.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(self) -> List[Category]:
        """All categories ordered by name."""
        result = await self.session.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    def _documents_count(self):
        return (
            select(Category, func.count(Document.id).label("documents_count"))
            .outerjoin(Document, (Document.category_id == Category.id) & Document.deleted_at.is_(None))
            .group_by(Category.id)
        )

    async def list_with_counts(self) -> List[Tuple[Category, int]]:
        """Categories ordered by name with their number of non-deleted documents."""
        result = await self.session.execute(self._documents_count().order_by(Category.name))
        return [(category, count) for category, count in result.all()]

    async def distribution(self, limit: int = 5) -> List[Tuple[Category, int]]:
        """Categories holding the most documents, skipping empty ones."""
        stmt = (
            self._documents_count()
            .having(func.count(Document.id) > 0)
            .order_by(func.count(Document.id).desc(), Category.name)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(category, count) for category, count in result.all()]

    async def first_or_create(self, name: str) -> Category:
        category = await self.get_by_name(name)
        if category is not None:
            return category
        logger.info(f"Creating category on the fly: {name}")
        return await self.create(Category(name=name))

    async def resolve(self, value: Optional[str | int]) -> Optional[int]:
        """
        Turn a submitted category value into a category id.

        A numeric value is taken as the id itself; any other non-empty value is
        a category name, created when it does not exist yet.
        """
        if value is None:
            return None
        value = str(value).strip()
        if not value:
            return None
        if value.isdigit():
            return int(value)
        category = await self.first_or_create(value)
        return category.id

    async def rename(self, category: Category, name: str) -> Category:
        category.name = name
        self.session.add(category)
        await self.session.commit()
        await self.session.refresh(category)
        return category

    async def delete(self, category_id: str | int) -> bool:
        """Delete a category, detaching its documents first.

        Returns:
            True if deleted, False if not found
        """
        category = await self.get_by_id(category_id)
        if category is None:
            return False

        await self.session.execute(
            update(Document).where(Document.category_id == category.id).values(category_id=None)
        )
        await self.session.delete(category)
        await self.session.commit()
        logger.info(f"Deleted category {category.id} ({category.name})")
        return True
