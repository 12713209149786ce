"""Human-readable formatting helpers shared by the dashboard and client pages."""

from datetime import datetime, timezone
from typing import Optional

_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(size: Optional[int], precision: int = 2) -> str:
    """
    Format a byte count with the largest fitting binary unit.

    The value is divided by 1024 only while it is strictly greater than 1024,
    so ``1024`` stays ``"1024 B"`` and ``1536`` becomes ``"1.5 KB"``.

    Args:
        size: Number of bytes; ``None``, zero or negative values render as ``"0 B"``
        precision: Decimal places kept before trailing zeros are dropped

    Returns:
        The formatted size, e.g. ``"12.25 MB"``
    """
    if not size or size <= 0:
        return "0 B"

    value = float(size)
    unit = 0
    while value > 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1

    rounded = f"{round(value, precision):.{precision}f}" if precision > 0 else str(int(round(value)))
    if "." in rounded:
        rounded = rounded.rstrip("0").rstrip(".")
    return f"{rounded} {_UNITS[unit]}"


_PERIODS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def diff_for_humans(moment: Optional[datetime], now: Optional[datetime] = None) -> Optional[str]:
    """Describe how long ago ``moment`` happened, e.g. ``"3 hours ago"``."""
    if moment is None:
        return None

    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    if moment.tzinfo is not None and now.tzinfo is None:
        moment = moment.replace(tzinfo=None)

    seconds = int((now - moment).total_seconds())
    if seconds < 1:
        return "just now"

    for name, length in _PERIODS:
        amount = seconds // length
        if amount >= 1:
            return f"{amount} {name}{'' if amount == 1 else 's'} ago"
    return "just now"
