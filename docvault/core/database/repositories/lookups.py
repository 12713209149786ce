"""
Legacy lookup repository.

Read-only access to the legacy segment and vendor catalogs.
"""

from __future__ import annotations

from typing import List, Optional, Set, Tuple

from sqlmodel import select

from docvault.core.zones import segments_for_zone

from ..entities.legacy import ACTIVE_VENDOR_TYPE, Segment, Vendor
from .base import BaseRepository


class LegacyLookupRepository(BaseRepository[Segment]):
    """Segments and vendors of the legacy ERP."""

    def __init__(self, session) -> None:
        super().__init__(session, Segment)

    async def get_by_id(self, co_seg: str | int) -> Optional[Segment]:
        result = await self.session.execute(select(Segment).where(Segment.co_seg == str(co_seg)))
        return result.scalar_one_or_none()

    async def segments(self) -> List[Tuple[str, Optional[str]]]:
        """All ``(co_seg, seg_des)`` pairs."""
        result = await self.session.execute(select(Segment.co_seg, Segment.seg_des).order_by(Segment.co_seg))
        return [(co_seg, seg_des) for co_seg, seg_des in result.all()]

    async def zone_segment_codes(self, zone: str) -> Set[str]:
        """Segment codes grouped under ``zone``."""
        return segments_for_zone(zone, await self.segments())

    async def find_active_vendor(self, co_ven: str) -> Optional[Vendor]:
        stmt = select(Vendor).where(Vendor.co_ven == co_ven, Vendor.tipo == ACTIVE_VENDOR_TYPE).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()
