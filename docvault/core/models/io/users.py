"""User and authentication I/O models."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    """Minimal user reference embedded in other payloads."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class UserRead(BaseModel):
    """Schema for the authenticated user shared with every page."""

    id: int
    name: str
    zone: Optional[str] = None
    co_ven: Optional[str] = None
    is_admin: bool = Field(
        validation_alias=AliasChoices("is_administrator", "is_admin"),
        description="Whether the user can manage categories and see every client",
    )

    model_config = ConfigDict(from_attributes=True)
