"""Events REST endpoints.

GET    /events          - public, upcoming first
GET    /events/{id}     - public
POST   /events          - admin/leader
PATCH  /events/{id}     - admin/leader
DELETE /events/{id}     - admin/leader
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.database import get_db_session
from src.cm_common.record_service import RecordService
from src.cm_common.response import success_flag
from src.cm_events.application.schemas import EventCreate, EventUpdate
from src.cm_events.infrastructure.persistence import EventRepository
from src.cm_gateway.auth.dependencies import public_guard, staff_guard
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.security.payload import read_payload

router = APIRouter(prefix="/events", tags=["events"])

_service = RecordService("event", EventRepository())


@router.get("", response_model=None)
async def list_events(
    _: Annotated[SessionPrincipal | None, Depends(public_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[dict[str, Any]]:
    return await _service.list_records(db)


@router.get("/{event_id}", response_model=None)
async def get_event(
    event_id: str,
    _: Annotated[SessionPrincipal | None, Depends(public_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, Any]:
    return await _service.get_record(db, event_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    request: Request,
    principal: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, str]:
    body = await read_payload(request, EventCreate)
    record_id = await _service.create_record(db, body, created_by=principal.user_id)
    return {"id": record_id}


@router.patch("/{event_id}")
async def update_event(
    event_id: str,
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    body = await read_payload(request, EventUpdate)
    await _service.update_record(db, event_id, body)
    return success_flag()


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    await _service.delete_record(db, event_id)
    return success_flag()
