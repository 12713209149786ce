"""
Pagination I/O model.

Paginated lists are serialized the way the frontend's paginator component
expects them: the page items under ``data`` plus the page metadata.
"""

from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from docvault.core.database.repositories.base import PageResult

ItemType = TypeVar("ItemType")


class Paginated(BaseModel, Generic[ItemType]):
    """One page of results with its navigation metadata."""

    model_config = ConfigDict(populate_by_name=True)

    data: List[ItemType]
    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: Optional[int] = Field(default=None, alias="from")
    to: Optional[int] = None

    @classmethod
    def build(cls, page: PageResult[Any], data: List[ItemType]) -> "Paginated[ItemType]":
        return cls(
            data=data,
            current_page=page.page,
            last_page=page.last_page,
            per_page=page.per_page,
            total=page.total,
            from_=page.first_item,
            to=page.last_item,
        )
