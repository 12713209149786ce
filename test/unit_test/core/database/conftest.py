"""Test configuration for database unit tests.

Sample rows for the primary tables; the engines and sessions come from the
shared unit test fixtures.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Awaitable, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from docvault.core.database.base import utc_now
from docvault.core.database.entities.categories import Category
from docvault.core.database.entities.documents import Document


@pytest.fixture
def add_document(session: AsyncSession) -> Callable[..., Awaitable[Document]]:
    """Insert a document; ``age_days`` moves ``created_at`` into the past."""

    async def _add(
        client_id: str,
        title: str = "Invoice",
        category: Category | None = None,
        file_size: int = 1024,
        age_days: int = 0,
        deleted: bool = False,
        **fields,
    ) -> Document:
        document = Document(
            client_id=client_id,
            title=title,
            filename=f"{title.lower().replace(' ', '_')}.pdf",
            file_path=f"documents/{client_id}/2025/01/{title}.pdf",
            file_size=file_size,
            category_id=category.id if category is not None else None,
            created_at=utc_now() - timedelta(days=age_days),
            deleted_at=utc_now() if deleted else None,
            **fields,
        )
        session.add(document)
        await session.commit()
        await session.refresh(document)
        return document

    return _add


@pytest.fixture
def add_category(session: AsyncSession) -> Callable[[str], Awaitable[Category]]:
    async def _add(name: str) -> Category:
        category = Category(name=name)
        session.add(category)
        await session.commit()
        await session.refresh(category)
        return category

    return _add
