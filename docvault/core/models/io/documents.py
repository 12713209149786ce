"""
Document I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for the document endpoints.
``DocumentUpdate`` validates both form and JSON submissions of the edit dialog.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from docvault.core.formatting import format_bytes

from .categories import CategoryRead
from .users import UserSummary


class ClientSummary(BaseModel):
    """Client reference embedded in document payloads."""

    id: str
    code: str
    name: str


class DocumentRead(BaseModel):
    """Schema for reading a document."""

    id: int
    client_id: str = Field(description="Legacy client code")
    title: str
    description: Optional[str] = None
    filename: str
    file_path: str
    file_size: int
    mime_type: str
    tags: Optional[List[str]] = None
    category_id: Optional[int] = None
    category: Optional[CategoryRead] = None
    uploaded_by: Optional[UserSummary] = Field(default=None, validation_alias="uploader")
    downloaded_count: int = 0
    last_downloaded_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def formatted_size(self) -> str:
        return format_bytes(self.file_size)


class DocumentListItem(DocumentRead):
    """Document row of the documents index."""

    client: Optional[ClientSummary] = None


class DocumentUpdate(BaseModel):
    """Schema for updating document metadata."""

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    category: Optional[str] = Field(default=None, max_length=100)

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("description", "category", mode="before")
    @classmethod
    def _empty_to_none(cls, value):
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value


class DocumentSearchResult(BaseModel):
    """Entry of the quick-search dropdown."""

    id: int
    title: str
    client: Optional[ClientSummary] = None
    category: Optional[str] = None
    created_at: Optional[str] = None
