"""
Zone access rules.

Zone managers see the clients of every legacy segment belonging to their zone.
A segment has no zone column in the legacy ERP, so the zone is parsed out of
the free-text segment description (``seg_des``), mirroring the grouping the
back office has always used in its reports.
"""

import re
from typing import Iterable, Optional, Tuple

TACHIRA_ZONE = "TACHIRA"

# Any of these fragments folds the segment into the TACHIRA zone
TACHIRA_MARKERS = ("TACHIRA", "S/C", "FRONTERA", "PANAMERICANA", "LLANO", "PLAZA")

EXCLUDED_SEGMENT_CODE = "99999"

EXCLUDED_MARKERS = (
    "NO USAR",
    "INACTIVO",
    "CERRADO",
    "DISPONIBLE",
    "PEDIDOS",
    "NACIONAL",
    "INTERNO",
    "CASA",
    "COJE/ VALEN",
)

# ")" must appear within the first 14 characters to be treated as a prefix, e.g. "01) MERIDA CENTRO"
_PREFIX_WINDOW = 14

_SEPARATORS = re.compile(r"[-/]")


def _first_word(text: str) -> str:
    return text.split(" ", 1)[0]


def derive_zone(seg_des: Optional[str]) -> Optional[str]:
    """
    Derive the zone name from a legacy segment description.

    Returns:
        The upper-cased zone, or ``None`` when the description yields no zone.
    """
    if not seg_des:
        return None

    upper = seg_des.upper()
    if any(marker in upper for marker in TACHIRA_MARKERS):
        return TACHIRA_ZONE

    paren = seg_des.find(")")
    if 0 <= paren < _PREFIX_WINDOW:
        zone = _first_word(seg_des[paren + 1 :].lstrip())
    else:
        zone = _first_word(_SEPARATORS.sub(" ", seg_des))

    zone = zone.strip().upper()
    return zone or None


def is_excluded_segment(co_seg: Optional[str], seg_des: Optional[str]) -> bool:
    """Whether a segment is ignored when grouping segments into zones."""
    if (co_seg or "").strip() == EXCLUDED_SEGMENT_CODE:
        return True

    description = (seg_des or "").upper()
    if any(marker in description for marker in EXCLUDED_MARKERS):
        return True
    return description.strip() == "CARACAS"


def group_segments_by_zone(segments: Iterable[Tuple[str, Optional[str]]]) -> dict[str, set[str]]:
    """
    Group ``(co_seg, seg_des)`` pairs by their derived zone.

    Excluded segments and segments without a zone are skipped.
    """
    zones: dict[str, set[str]] = {}
    for co_seg, seg_des in segments:
        if is_excluded_segment(co_seg, seg_des):
            continue
        zone = derive_zone(seg_des)
        if not zone:
            continue
        zones.setdefault(zone, set()).add(co_seg)
    return zones


def list_zones(segments: Iterable[Tuple[str, Optional[str]]]) -> list[str]:
    """Sorted distinct zones found in the given segments."""
    return sorted(group_segments_by_zone(segments))


def segments_for_zone(zone: str, segments: Iterable[Tuple[str, Optional[str]]]) -> set[str]:
    """Segment codes that belong to ``zone``."""
    return group_segments_by_zone(segments).get(zone.strip().upper(), set())
