"""Pastoral visit REST endpoints (admin/leader only).

GET    /pastoral-visits   - most recent visit first
GET    /pastoral-visits/{id}
POST   /pastoral-visits
PATCH  /pastoral-visits/{id}
DELETE /pastoral-visits/{id}
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.database import get_db_session
from src.cm_common.record_service import RecordService
from src.cm_common.response import success_flag
from src.cm_pastoral.application.schemas import PastoralVisitCreate, PastoralVisitUpdate
from src.cm_pastoral.infrastructure.persistence import PastoralVisitRepository
from src.cm_gateway.auth.dependencies import staff_guard
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.security.payload import read_payload

router = APIRouter(prefix="/pastoral-visits", tags=["pastoral_visits"])

_service = RecordService("pastoral_visit", PastoralVisitRepository())


@router.get("", response_model=None)
async def list_pastoral_visits(
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[dict[str, Any]]:
    return await _service.list_records(db)


@router.get("/{visit_id}", response_model=None)
async def get_pastoral_visit(
    visit_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, Any]:
    return await _service.get_record(db, visit_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pastoral_visit(
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, str]:
    body = await read_payload(request, PastoralVisitCreate)
    record_id = await _service.create_record(db, body)
    return {"id": record_id}


@router.patch("/{visit_id}")
async def update_pastoral_visit(
    visit_id: str,
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    body = await read_payload(request, PastoralVisitUpdate)
    await _service.update_record(db, visit_id, body)
    return success_flag()


@router.delete("/{visit_id}")
async def delete_pastoral_visit(
    visit_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    await _service.delete_record(db, visit_id)
    return success_flag()
