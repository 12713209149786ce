"""
Centralized database layer for DocVault.

Structure:
- entities/: SQLModel entities (primary tables and legacy ERP tables)
- repositories/: Data access layer, one repository per aggregate
- session.py: Global engines and session factories
- utils.py: Database utility functions (engine, session factory, table creation)
- seeders.py: Initial users derived from the legacy zones
"""

from .base import Base, LegacyBase
from .session import (
    async_session_maker,
    dispose_engines,
    engine,
    get_legacy_session,
    get_session,
    init_db,
    legacy_engine,
    legacy_session_maker,
)
from .utils import (
    create_all,
    create_all_legacy,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "LegacyBase",
    "async_session_maker",
    "create_all",
    "create_all_legacy",
    "create_engine",
    "create_sessionmaker",
    "dispose_engines",
    "engine",
    "get_legacy_session",
    "get_session",
    "init_db",
    "legacy_engine",
    "legacy_session_maker",
]
