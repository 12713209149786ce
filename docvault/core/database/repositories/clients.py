"""
Legacy client repository.

Clients are read from the legacy ERP and filtered by what the current user
may see:

- administrators see every client;
- vendors see the clients assigned to their vendor code;
- zone managers see the clients whose segment belongs to their zone;
- anybody else sees nothing.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy import bindparam, false, func, or_
from sqlmodel import select

from docvault.core.logging_config import get_logger

from ..entities.legacy import LegacyClient
from ..entities.users import User
from .base import BaseRepository, PageResult, QueryBuilder, like_pattern
from .lookups import LegacyLookupRepository

logger = get_logger(__name__)

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"
FILES_WITH = "with_files"
FILES_WITHOUT = "without_files"


def _inline_codes(codes: Iterable[str]):
    """Expanding IN list rendered as literals: SQL Server allows 2100 bind parameters per statement."""
    return bindparam("client_codes", value=sorted(codes), expanding=True, literal_execute=True)


class LegacyClientRepository(BaseRepository[LegacyClient]):
    """Read-only repository over the legacy ``clientes`` table."""

    def __init__(self, session) -> None:
        super().__init__(session, LegacyClient)
        self.lookups = LegacyLookupRepository(session)

    async def access_condition(self, user: User):
        """SQL condition restricting clients to those ``user`` may see; ``None`` means no restriction."""
        if user.is_administrator:
            return None
        if user.co_ven:
            return LegacyClient.co_ven == user.co_ven
        if user.zone:
            codes = await self.lookups.zone_segment_codes(user.zone)
            if not codes:
                logger.warning(f"Zone {user.zone} of user {user.id} has no legacy segments")
                return false()
            return LegacyClient.co_seg.in_(sorted(codes))
        return false()

    async def accessible_statement(self, user: User):
        """``select(LegacyClient)`` limited to the clients ``user`` may see."""
        stmt = select(LegacyClient)
        condition = await self.access_condition(user)
        if condition is not None:
            stmt = stmt.where(condition)
        return stmt

    async def get_by_id(self, code: str | int) -> Optional[LegacyClient]:
        result = await self.session.execute(select(LegacyClient).where(LegacyClient.co_cli == str(code)))
        return result.scalar_one_or_none()

    async def get_accessible(self, user: User, code: str) -> Optional[LegacyClient]:
        """The client ``code`` if ``user`` may see it."""
        stmt = (await self.accessible_statement(user)).where(LegacyClient.co_cli == code)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, codes: Iterable[str]) -> Dict[str, LegacyClient]:
        """``co_cli -> client`` for the codes that exist."""
        codes = list(codes)
        if not codes:
            return {}
        result = await self.session.execute(select(LegacyClient).where(LegacyClient.co_cli.in_(codes)))
        return {client.co_cli: client for client in result.scalars().all()}

    async def paginate(
        self,
        user: User,
        page: int,
        per_page: int,
        search: Optional[str] = None,
        status: Optional[str] = None,
        file_status: Optional[str] = None,
        codes_with_files: Optional[Set[str]] = None,
    ) -> PageResult[LegacyClient]:
        """
        Page through the clients ``user`` may see, ordered by name.

        Args:
            search: Matches code, name or tax id
            status: ``active`` or ``inactive``
            file_status: ``with_files`` or ``without_files``, evaluated against ``codes_with_files``
            codes_with_files: Codes of clients holding at least one document
        """
        stmt = await self.accessible_statement(user)

        if search:
            pattern = like_pattern(search)
            stmt = stmt.where(
                or_(
                    LegacyClient.co_cli.ilike(pattern, escape="\\"),
                    LegacyClient.cli_des.ilike(pattern, escape="\\"),
                    LegacyClient.rif.ilike(pattern, escape="\\"),
                )
            )

        if status == STATUS_ACTIVE:
            stmt = stmt.where(LegacyClient.inactivo == False)  # noqa: E712
        elif status == STATUS_INACTIVE:
            stmt = stmt.where(LegacyClient.inactivo == True)  # noqa: E712

        if file_status in (FILES_WITH, FILES_WITHOUT):
            codes = codes_with_files or set()
            if file_status == FILES_WITH:
                stmt = stmt.where(LegacyClient.co_cli.in_(_inline_codes(codes)) if codes else false())
            elif codes:
                stmt = stmt.where(LegacyClient.co_cli.not_in(_inline_codes(codes)))

        stmt = stmt.order_by(LegacyClient.cli_des, LegacyClient.co_cli)
        return await QueryBuilder.paginate(self.session, stmt, page, per_page)

    async def active_options(self, user: User) -> List[LegacyClient]:
        """Active clients ``user`` may see, ordered by name (for selectors)."""
        stmt = (
            (await self.accessible_statement(user))
            .where(LegacyClient.inactivo == False)  # noqa: E712
            .order_by(LegacyClient.cli_des, LegacyClient.co_cli)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_active(self) -> int:
        stmt = select(func.count()).select_from(LegacyClient).where(LegacyClient.inactivo == False)  # noqa: E712
        return (await self.session.execute(stmt)).scalar_one()

    async def codes_matching(self, term: str) -> List[str]:
        """Codes of the clients whose code or name contains ``term``."""
        pattern = like_pattern(term)
        stmt = select(LegacyClient.co_cli).where(
            or_(
                LegacyClient.co_cli.ilike(pattern, escape="\\"),
                LegacyClient.cli_des.ilike(pattern, escape="\\"),
            )
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
