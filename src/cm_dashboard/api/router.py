"""Dashboard API: GET /dashboard/stats (admin/leader)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.database import get_db_session
from src.cm_dashboard.application.service import DashboardService, DashboardStats
from src.cm_gateway.auth.dependencies import staff_guard
from src.cm_gateway.auth.principal import SessionPrincipal

router = APIRouter(prefix="/dashboard", tags=["dashboard"])
_service = DashboardService()


@router.get("/stats", response_model=DashboardStats, response_model_by_alias=True)
async def get_stats(
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> DashboardStats:
    return await _service.get_stats(db)
