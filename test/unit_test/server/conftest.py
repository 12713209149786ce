"""Fixtures for the server tests.

The app talks to the in-memory primary and legacy databases of the shared
fixtures and stores files in a temporary storage disk. ``ASGITransport`` does
not run the lifespan, so no engine of the real configuration is touched.
"""

from datetime import datetime
from typing import AsyncGenerator, Awaitable, Callable, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from docvault.core.database.entities.categories import Category
from docvault.core.database.entities.documents import Document
from docvault.core.database.entities.users import User
from docvault.core.storage import LocalStorage
from test.unit_test.conftest import PASSWORD


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage")


@pytest_asyncio.fixture
async def users(session: AsyncSession, make_user) -> Dict[str, User]:
    """ADMIN, the MERIDA zone manager and the vendor V01."""
    accounts = {
        "admin": make_user("ADMIN", zone="ADMIN", is_admin=True),
        "merida": make_user("MERIDA", zone="MERIDA"),
        "vendor": make_user("JUAN PEREZ", co_ven="V01"),
    }
    session.add_all(accounts.values())
    await session.commit()
    return accounts


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession, legacy_data: AsyncSession, storage: LocalStorage, users
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from docvault.core.database import get_legacy_session, get_session
    from docvault.server.main import app
    from docvault.server.services.deps import get_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    async def get_legacy_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield legacy_data

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_legacy_session] = get_legacy_session_override
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def login(client: AsyncClient) -> Callable[[str], Awaitable[None]]:
    """Log the test client in as one of the seeded users."""

    async def _login(name: str) -> None:
        response = await client.post("/login", data={"name": name, "password": PASSWORD})
        assert response.status_code == 303, response.text

    return _login


@pytest.fixture
def add_category(session: AsyncSession) -> Callable[[str], Awaitable[Category]]:
    async def _add(name: str) -> Category:
        category = Category(name=name)
        session.add(category)
        await session.commit()
        await session.refresh(category)
        return category

    return _add


@pytest.fixture
def add_document(
    session: AsyncSession, storage: LocalStorage, pdf_bytes
) -> Callable[..., Awaitable[Document]]:
    """Insert a document whose PDF exists on the storage disk (unless ``with_file`` is false)."""

    async def _add(
        client_id: str,
        title: str = "Invoice",
        category: Category | None = None,
        with_file: bool = True,
        **fields,
    ) -> Document:
        file_path = f"documents/{client_id}/{datetime.now():%Y/%m}/{title.replace(' ', '_')}.pdf"
        content = pdf_bytes(1)
        if with_file:
            storage.put_bytes(file_path, content)
        document = Document(
            client_id=client_id,
            title=title,
            filename=f"{title}.pdf",
            file_path=file_path,
            file_size=len(content),
            category_id=category.id if category is not None else None,
            **fields,
        )
        session.add(document)
        await session.commit()
        await session.refresh(document)
        return document

    return _add
