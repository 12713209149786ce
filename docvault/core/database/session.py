"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
used throughout the application: one pair for the primary database and one
for the read-only legacy ERP database.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from docvault.core.logging_config import get_logger
from docvault.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)

# Create global engines and session factories
engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)

legacy_engine = create_engine(settings.legacy_database_url)
legacy_session_maker = create_sessionmaker(legacy_engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for primary database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def get_legacy_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for legacy ERP database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session bound to the legacy database.
    """
    async with legacy_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the primary database.

    Tables are only created when ``DOCVAULT_AUTO_CREATE_TABLES`` is enabled
    (local development). In production, Alembic migrations handle all DDL.
    """
    if not settings.auto_create_tables:
        logger.debug("Automatic table creation disabled; relying on Alembic migrations")
        return
    await create_all(engine)
    logger.info("Primary database tables created")


async def dispose_engines() -> None:
    """Close the connection pools of both engines."""
    await engine.dispose()
    await legacy_engine.dispose()
