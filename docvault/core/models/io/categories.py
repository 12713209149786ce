"""Category I/O models for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CategoryRead(BaseModel):
    """Schema for reading a category."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CategoryWithCount(CategoryRead):
    """Category with its number of documents."""

    documents_count: int = 0


class CategoryShare(BaseModel):
    """Entry of the dashboard category distribution."""

    category: str
    count: int
