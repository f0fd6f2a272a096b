"""Dashboard statistics for the panel home page."""

from collections.abc import Callable
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.datetime_utils import month_bounds, utc_now
from src.cm_dashboard.infrastructure.persistence import DashboardRepository


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    events_this_month: int = Field(..., alias="eventsThisMonth")
    active_members: int = Field(..., alias="activeMembers")
    visitors_this_month: int = Field(..., alias="visitorsThisMonth")


class DashboardService:
    def __init__(
        self,
        repo: DashboardRepository | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repo = repo or DashboardRepository()
        self._clock = clock

    async def get_stats(self, db: AsyncSession) -> DashboardStats:
        """Counts for the current UTC calendar month."""
        start, end = month_bounds(self._clock())
        return DashboardStats(
            events_this_month=await self._repo.count_events_between(db, start, end),
            active_members=await self._repo.count_active_members(db),
            visitors_this_month=await self._repo.count_visitors_between(
                db, start.date(), end.date()
            ),
        )
