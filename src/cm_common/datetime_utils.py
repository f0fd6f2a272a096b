"""UTC datetime utilities."""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def epoch_ms() -> int:
    """Wall-clock milliseconds since the Unix epoch (rate-limit clock)."""
    return int(time.time() * 1000)


def month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Return [first instant of the month, first instant of next month)."""
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end
