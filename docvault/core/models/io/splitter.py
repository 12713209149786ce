"""
PDF splitter I/O models.

Temporary paths are relative to the storage root and always point inside the
splitter temp directory; the server validates them before touching the disk.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .documents import DocumentRead


class UploadResult(BaseModel):
    success: bool = True
    temp_path: str
    page_count: int
    filename: str


class SplitRequest(BaseModel):
    """Pages to extract from an uploaded PDF, 1-based and in output order."""

    temp_path: str = Field(min_length=1)
    pages: List[int] = Field(min_length=1)

    @field_validator("pages")
    @classmethod
    def _positive(cls, pages: List[int]) -> List[int]:
        if any(page < 1 for page in pages):
            raise ValueError("Page numbers start at 1")
        return pages


class SplitResult(BaseModel):
    success: bool = True
    split_path: str
    page_count: int


class SaveToClientRequest(BaseModel):
    """Metadata of a split PDF saved as a client document."""

    split_path: Optional[str] = None
    client_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=255)
    category_id: Optional[int] = None
    description: Optional[str] = None

    @field_validator("category_id", mode="before")
    @classmethod
    def _blank_category(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SaveResult(BaseModel):
    success: bool = True
    document: DocumentRead
    message: str


class DownloadRequest(BaseModel):
    split_path: str = Field(min_length=1)
    filename: Optional[str] = None


class CleanupRequest(BaseModel):
    temp_path: str = Field(min_length=1)


class FailureResult(BaseModel):
    success: bool = False
    message: str
