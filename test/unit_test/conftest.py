"""Shared fixtures for the unit tests.

Both databases run on in-memory SQLite. ``StaticPool`` keeps a single
connection per engine so every session of a test sees the same data.
"""

from __future__ import annotations

from typing import AsyncGenerator, Callable

import fitz
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from docvault.core.database import create_all, create_all_legacy, create_sessionmaker
from docvault.core.database.entities.legacy import LegacyClient, Segment, Vendor
from docvault.core.database.entities.users import User
from docvault.core.security import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PASSWORD = "secret123"
# Hashing once keeps bcrypt out of every test
PASSWORD_HASH = hash_password(PASSWORD)


def _memory_engine():
    return create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest_asyncio.fixture
async def primary_engine():
    engine = _memory_engine()
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def legacy_engine():
    engine = _memory_engine()
    await create_all_legacy(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(primary_engine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(primary_engine)() as session:
        yield session


@pytest_asyncio.fixture
async def legacy_session(legacy_engine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(legacy_engine)() as session:
        yield session


@pytest_asyncio.fixture
async def legacy_data(legacy_session: AsyncSession) -> AsyncSession:
    """A small ERP catalog.

    Zones: MERIDA (segments 01 and 02), TACHIRA (03). Segment 04 (CARACAS)
    and 99999 are excluded from zones. Text values carry the ERP padding.
    """
    legacy_session.add_all(
        [
            Segment(co_seg="01", seg_des="01) MERIDA CENTRO   "),
            Segment(co_seg="02", seg_des="MERIDA-NORTE"),
            Segment(co_seg="03", seg_des="SAN CRISTOBAL TACHIRA"),
            Segment(co_seg="04", seg_des="CARACAS"),
            Segment(co_seg="99999", seg_des="NO USAR"),
            Vendor(co_ven="V01", ven_des="JUAN PEREZ   ", tipo="A"),
            Vendor(co_ven="V02", ven_des="ANA GOMEZ", tipo="I"),
            Vendor(co_ven="V03", ven_des="LUIS DIAZ", tipo="A"),
            LegacyClient(co_cli="C001", cli_des="ACME FARMACIA    ", co_seg="01", co_ven="V01", rif="J-001"),
            LegacyClient(co_cli="C002", cli_des="BETA DROGUERIA", co_seg="02", co_ven="V09", rif="J-002"),
            LegacyClient(
                co_cli="C003", cli_des="GAMMA TIENDA", co_seg="03", co_ven="V01", rif="J-003", inactivo=True
            ),
            LegacyClient(co_cli="C004", cli_des="DELTA COMERCIAL", co_seg="04", co_ven="V09", rif="J-004"),
        ]
    )
    await legacy_session.commit()
    # Drop the identity map so reads go through the column types
    legacy_session.expunge_all()
    return legacy_session


@pytest.fixture
def make_user() -> Callable[..., User]:
    def _make(name: str, zone: str | None = None, co_ven: str | None = None, is_admin: bool = False) -> User:
        return User(name=name, zone=zone, co_ven=co_ven, is_admin=is_admin, password_hash=PASSWORD_HASH)

    return _make


@pytest.fixture
def pdf_bytes() -> Callable[[int], bytes]:
    """Build a real PDF with ``pages`` pages, each labelled with its number."""

    def _build(pages: int = 3) -> bytes:
        with fitz.open() as doc:
            for number in range(1, pages + 1):
                page = doc.new_page()
                page.insert_text((72, 72), f"Page {number}")
            return doc.tobytes()

    return _build
