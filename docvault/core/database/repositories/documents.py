"""
Document repository.

Every query here skips soft-deleted documents. Client names live in the
legacy database, so filters involving them receive the matching client codes
from ``LegacyClientRepository`` instead of joining across databases.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy import func, or_
from sqlmodel import select

from docvault.core.logging_config import get_logger

from ..base import utc_now
from ..entities.categories import Category
from ..entities.documents import Document
from .base import PageResult, QueryBuilder, WritableRepository, like_pattern

logger = get_logger(__name__)


def _not_deleted():
    return Document.deleted_at.is_(None)


class DocumentRepository(WritableRepository[Document]):
    """Repository for document data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, Document)

    def _select(self):
        # Reload relationships of documents already present in the session
        return select(Document).where(_not_deleted()).execution_options(populate_existing=True)

    async def create(self, document: Document) -> Document:
        await super().create(document)
        return await self.get_by_id(document.id)

    async def get_by_id(self, document_id: str | int) -> Optional[Document]:
        """Get a non-deleted document with its category and uploader loaded."""
        stmt = self._select().where(Document.id == int(document_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, document: Document) -> Document:
        document.updated_at = utc_now()
        self.session.add(document)
        await self.session.commit()
        return await self.get_by_id(document.id)

    async def soft_delete(self, document: Document) -> Document:
        """Stamp ``deleted_at``; the stored file is kept."""
        document.deleted_at = utc_now()
        self.session.add(document)
        await self.session.commit()
        logger.info(f"Soft deleted document {document.id} of client {document.client_id}")
        return document

    async def register_download(self, document: Document) -> Document:
        document.downloaded_count = (document.downloaded_count or 0) + 1
        document.last_downloaded_at = utc_now()
        self.session.add(document)
        await self.session.commit()
        return document

    async def paginate(
        self,
        page: int,
        per_page: int,
        search: Optional[str] = None,
        category: Optional[str] = None,
        client_codes: Optional[Iterable[str]] = None,
    ) -> PageResult[Document]:
        """
        Page through documents, newest first.

        Args:
            page: 1-based page number
            per_page: Page size
            search: Matches title, filename or client code; also any client in ``client_codes``
            category: Category id (numeric) or category name
            client_codes: Codes of legacy clients whose name matches ``search``
        """
        stmt = self._select()

        if search:
            pattern = like_pattern(search)
            conditions = [
                Document.title.ilike(pattern, escape="\\"),
                Document.filename.ilike(pattern, escape="\\"),
                Document.client_id.ilike(pattern, escape="\\"),
            ]
            codes = list(client_codes or [])
            if codes:
                conditions.append(Document.client_id.in_(codes))
            stmt = stmt.where(or_(*conditions))

        if category:
            category = str(category).strip()
            if category.isdigit():
                stmt = stmt.where(Document.category_id == int(category))
            else:
                stmt = stmt.where(Document.category_id.in_(select(Category.id).where(Category.name == category)))

        stmt = stmt.order_by(Document.created_at.desc(), Document.id.desc())
        return await QueryBuilder.paginate(self.session, stmt, page, per_page)

    async def for_client(self, client_code: str) -> List[Document]:
        """Documents of a client, latest first."""
        stmt = (
            self._select()
            .where(Document.client_id == client_code)
            .order_by(Document.created_at.desc(), Document.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(self, term: str, limit: int = 10) -> List[Document]:
        """Quick search on title, description and filename."""
        pattern = like_pattern(term)
        stmt = (
            self._select()
            .where(
                or_(
                    Document.title.ilike(pattern, escape="\\"),
                    Document.description.ilike(pattern, escape="\\"),
                    Document.filename.ilike(pattern, escape="\\"),
                )
            )
            .order_by(Document.created_at.desc(), Document.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def totals(self) -> Tuple[int, int, int]:
        """Number of documents, total size in bytes and total downloads."""
        stmt = select(
            func.count(Document.id),
            func.coalesce(func.sum(Document.file_size), 0),
            func.coalesce(func.sum(Document.downloaded_count), 0),
        ).where(_not_deleted())
        count, size, downloads = (await self.session.execute(stmt)).one()
        return int(count), int(size), int(downloads)

    async def recent(self, limit: int = 3) -> List[Document]:
        stmt = self._select().order_by(Document.created_at.desc(), Document.id.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def top_clients(self, limit: int = 3) -> List[Tuple[str, int, int]]:
        """``(client_code, documents_count, total_size)`` of the clients with most documents."""
        count = func.count(Document.id)
        stmt = (
            select(Document.client_id, count, func.coalesce(func.sum(Document.file_size), 0))
            .where(_not_deleted())
            .group_by(Document.client_id)
            .order_by(count.desc(), Document.client_id)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(code, int(total), int(size)) for code, total, size in result.all()]

    async def counts_by_client(self, codes: Iterable[str]) -> Dict[str, Tuple[int, int]]:
        """``code -> (documents_count, total_size)`` for the given clients."""
        codes = list(codes)
        if not codes:
            return {}
        stmt = (
            select(Document.client_id, func.count(Document.id), func.coalesce(func.sum(Document.file_size), 0))
            .where(_not_deleted(), Document.client_id.in_(codes))
            .group_by(Document.client_id)
        )
        result = await self.session.execute(stmt)
        return {code: (int(total), int(size)) for code, total, size in result.all()}

    async def category_counts_by_client(self, codes: Iterable[str]) -> Dict[str, Dict[int, int]]:
        """``code -> {category_id: documents_count}``; uncategorized documents are left out."""
        codes = list(codes)
        if not codes:
            return {}
        stmt = (
            select(Document.client_id, Document.category_id, func.count(Document.id))
            .where(_not_deleted(), Document.client_id.in_(codes), Document.category_id.is_not(None))
            .group_by(Document.client_id, Document.category_id)
        )
        counts: Dict[str, Dict[int, int]] = {}
        for code, category_id, total in (await self.session.execute(stmt)).all():
            counts.setdefault(code, {})[category_id] = int(total)
        return counts

    async def client_codes_with_documents(self) -> Set[str]:
        stmt = select(Document.client_id).where(_not_deleted()).distinct()
        result = await self.session.execute(stmt)
        return set(result.scalars().all())
