"""Visitor REST endpoints (admin/leader only).

GET    /visitors          - most recent visit first
GET    /visitors/{id}
POST   /visitors
PATCH  /visitors/{id}
DELETE /visitors/{id}
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.database import get_db_session
from src.cm_common.record_service import RecordService
from src.cm_common.response import success_flag
from src.cm_visitors.application.schemas import VisitorCreate, VisitorUpdate
from src.cm_visitors.infrastructure.persistence import VisitorRepository
from src.cm_gateway.auth.dependencies import staff_guard
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.security.payload import read_payload

router = APIRouter(prefix="/visitors", tags=["visitors"])

_service = RecordService("visitor", VisitorRepository())


@router.get("", response_model=None)
async def list_visitors(
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[dict[str, Any]]:
    return await _service.list_records(db)


@router.get("/{visitor_id}", response_model=None)
async def get_visitor(
    visitor_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, Any]:
    return await _service.get_record(db, visitor_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_visitor(
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, str]:
    body = await read_payload(request, VisitorCreate)
    record_id = await _service.create_record(db, body)
    return {"id": record_id}


@router.patch("/{visitor_id}")
async def update_visitor(
    visitor_id: str,
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    body = await read_payload(request, VisitorUpdate)
    await _service.update_record(db, visitor_id, body)
    return success_flag()


@router.delete("/{visitor_id}")
async def delete_visitor(
    visitor_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    await _service.delete_record(db, visitor_id)
    return success_flag()
