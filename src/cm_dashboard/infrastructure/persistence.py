"""Dashboard aggregate queries (read-only, raw SQL)."""

from datetime import date, datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

_EVENTS_IN_RANGE = text(
    "SELECT COUNT(*) FROM events WHERE event_date >= :start AND event_date < :end"
)
_ACTIVE_MEMBERS = text("SELECT COUNT(*) FROM members WHERE status = 'active'")
_VISITORS_IN_RANGE = text(
    "SELECT COUNT(*) FROM visitors WHERE visit_date >= :start AND visit_date < :end"
)


class DashboardRepository:
    async def count_events_between(
        self, db: AsyncSession, start: datetime, end: datetime
    ) -> int:
        result = await db.execute(_EVENTS_IN_RANGE, {"start": start, "end": end})
        return int(result.scalar_one())

    async def count_active_members(self, db: AsyncSession) -> int:
        result = await db.execute(_ACTIVE_MEMBERS)
        return int(result.scalar_one())

    async def count_visitors_between(self, db: AsyncSession, start: date, end: date) -> int:
        # visit_date is a DATE column
        result = await db.execute(_VISITORS_IN_RANGE, {"start": start, "end": end})
        return int(result.scalar_one())
