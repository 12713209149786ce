"""Unit tests for the category repository."""

from __future__ import annotations

import pytest
from sqlmodel import select

from docvault.core.database.entities.documents import Document
from docvault.core.database.repositories import CategoryRepository

pytestmark = pytest.mark.asyncio


@pytest.fixture
def categories(session) -> CategoryRepository:
    return CategoryRepository(session)


class TestCategoryRepository:
    async def test_list_is_ordered_by_name(self, categories, add_category):
        for name in ("Invoices", "Contracts", "Permits"):
            await add_category(name)

        assert [category.name for category in await categories.list()] == ["Contracts", "Invoices", "Permits"]

    async def test_list_with_counts_skips_deleted_documents(self, categories, add_category, add_document):
        contracts = await add_category("Contracts")
        await add_category("Invoices")
        await add_document("C001", "A", category=contracts)
        await add_document("C002", "B", category=contracts)
        await add_document("C002", "C", category=contracts, deleted=True)

        counts = [(category.name, count) for category, count in await categories.list_with_counts()]

        assert counts == [("Contracts", 2), ("Invoices", 0)]

    async def test_distribution(self, categories, add_category, add_document):
        contracts = await add_category("Contracts")
        invoices = await add_category("Invoices")
        await add_category("Empty")
        await add_document("C001", "A", category=invoices)
        await add_document("C001", "B", category=invoices)
        await add_document("C002", "C", category=contracts)

        distribution = [(category.name, count) for category, count in await categories.distribution(limit=5)]

        assert distribution == [("Invoices", 2), ("Contracts", 1)]
        assert len(await categories.distribution(limit=1)) == 1

    async def test_first_or_create(self, categories, add_category):
        existing = await add_category("Contracts")

        assert (await categories.first_or_create("Contracts")).id == existing.id
        created = await categories.first_or_create("Permits")
        assert created.id != existing.id
        assert (await categories.get_by_name("Permits")).id == created.id

    @pytest.mark.parametrize("value", [None, "", "   "])
    async def test_resolve_empty(self, categories, value):
        assert await categories.resolve(value) is None

    async def test_resolve_id_and_name(self, categories, add_category):
        contracts = await add_category("Contracts")

        assert await categories.resolve(str(contracts.id)) == contracts.id
        assert await categories.resolve(contracts.id) == contracts.id
        assert await categories.resolve(" Contracts ") == contracts.id
        new_id = await categories.resolve("Permits")
        assert (await categories.get_by_id(new_id)).name == "Permits"

    async def test_rename(self, categories, add_category):
        category = await add_category("Contracts")

        await categories.rename(category, "Agreements")

        assert (await categories.get_by_id(category.id)).name == "Agreements"

    async def test_delete_detaches_documents(self, session, categories, add_category, add_document):
        category = await add_category("Contracts")
        document = await add_document("C001", category=category)

        assert await categories.delete(category.id) is True
        assert await categories.get_by_id(category.id) is None
        result = await session.execute(
            select(Document.category_id).where(Document.id == document.id)
        )
        assert result.scalar_one() is None

    async def test_delete_unknown(self, categories):
        assert await categories.delete(404) is False
