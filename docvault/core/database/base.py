"""
Base database models and utilities.

This module provides the foundational database components used across
all entities using SQLModel. Two declarative bases are kept apart so each
database has its own metadata:

- ``Base``: tables owned by DocVault (users, categories, documents), managed
  by Alembic migrations.
- ``LegacyBase``: read-only tables of the legacy ERP database (clients,
  segments, vendors), never created or migrated by DocVault.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ConfigDict
from sqlalchemy import String
from sqlalchemy.orm import registry
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel

legacy_registry = registry()


def utc_now() -> datetime:
    """Current UTC time, naive: the timestamp columns carry no time zone."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(SQLModel):
    """Base class for all primary SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


class LegacyBase(SQLModel, registry=legacy_registry):
    """Base class for entities mapped onto the legacy ERP database."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def clean_legacy_text(value: Any) -> Optional[str]:
    """Trim a legacy text value, decoding raw bytes as Windows-1252."""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        value = bytes(value).decode("cp1252", errors="replace")
    if isinstance(value, str):
        return value.strip()
    return value


class LegacyText(TypeDecorator):
    """String column whose loaded values are cleaned with ``clean_legacy_text``.

    The ERP stores fixed-width ``CHAR`` columns padded with spaces, so every
    value read back is trimmed before it reaches the application.
    """

    impl = String
    cache_ok = True

    def process_result_value(self, value, dialect):
        return clean_legacy_text(value)
