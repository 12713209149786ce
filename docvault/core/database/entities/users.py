"""
User entity models.

Users are either zone managers (``zone`` set, one account per zone plus the
``ADMIN`` account) or vendors who registered with their legacy vendor code
(``co_ven`` set).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now

ADMIN_ZONE = "ADMIN"


class UserBase(Base):
    """Base fields for users."""

    name: str = Field(max_length=255, unique=True, description="Login name (zone name or vendor name)")
    zone: Optional[str] = Field(default=None, max_length=100, description="Zone managed by the user")
    co_ven: Optional[str] = Field(default=None, max_length=20, unique=True, description="Legacy vendor code")
    is_admin: bool = Field(default=False, description="Whether the user can manage everything")


class User(UserBase, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    password_hash: str = Field(description="bcrypt hash of the password")

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_administrator(self) -> bool:
        """Administrators see every client and may manage categories."""
        return bool(self.is_admin) or (self.zone or "").upper() == ADMIN_ZONE

    def __repr__(self) -> str:
        return f"User(id={self.id}, name={self.name}, zone={self.zone}, co_ven={self.co_ven})"
