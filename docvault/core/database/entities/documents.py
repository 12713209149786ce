"""
Document entity models.

A document is a PDF stored on the storage disk and attached to a client of
the legacy database. ``client_id`` holds the legacy client code (``co_cli``);
there is no foreign key because the client lives in another database.

Documents are soft deleted: ``deleted_at`` is stamped and the file is kept.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Text
from sqlmodel import Field, Relationship

from ..base import Base, utc_now
from .categories import Category
from .users import User

PDF_MIME_TYPE = "application/pdf"


class DocumentBase(Base):
    """Base fields for documents."""

    client_id: str = Field(max_length=20, index=True, description="Legacy client code (co_cli)")
    title: str = Field(max_length=255, description="Document title")
    description: Optional[str] = Field(default=None, sa_type=Text, description="Free-text description")
    filename: str = Field(max_length=255, description="Original (or sanitized) file name")
    file_path: str = Field(max_length=500, description="Path relative to the storage root")
    file_size: int = Field(default=0, description="File size in bytes")
    mime_type: str = Field(default=PDF_MIME_TYPE, max_length=100)
    tags: Optional[List[str]] = Field(default=None, sa_type=JSON, description="Free-form tags")


class Document(DocumentBase, table=True):
    """Persistent document record.

    Table: documents
    """

    __tablename__ = "documents"
    __table_args__ = ({"extend_existing": True},)

    # Primary key
    id: Optional[int] = Field(default=None, primary_key=True)

    # Foreign keys
    uploaded_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", ondelete="SET NULL")

    # Download statistics
    downloaded_count: int = Field(default=0)
    last_downloaded_at: Optional[datetime] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    category: Optional[Category] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    uploader: Optional[User] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self) -> str:
        return f"Document(id={self.id}, client_id={self.client_id}, title={self.title})"
