"""Live stream REST endpoints.

GET    /streams          - public, by scheduled date
GET    /streams/{id}    - public
POST   /streams         - admin/leader
PATCH  /streams/{id}    - admin/leader
DELETE /streams/{id}    - admin/leader
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.database import get_db_session
from src.cm_common.record_service import RecordService
from src.cm_common.response import success_flag
from src.cm_streams.application.schemas import StreamCreate, StreamUpdate
from src.cm_streams.infrastructure.persistence import StreamRepository
from src.cm_gateway.auth.dependencies import public_guard, staff_guard
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.security.payload import read_payload

router = APIRouter(prefix="/streams", tags=["streams"])

_service = RecordService("stream", StreamRepository())


@router.get("", response_model=None)
async def list_streams(
    _: Annotated[SessionPrincipal | None, Depends(public_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[dict[str, Any]]:
    return await _service.list_records(db)


@router.get("/{stream_id}", response_model=None)
async def get_stream(
    stream_id: str,
    _: Annotated[SessionPrincipal | None, Depends(public_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, Any]:
    return await _service.get_record(db, stream_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_stream(
    request: Request,
    principal: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, str]:
    body = await read_payload(request, StreamCreate)
    record_id = await _service.create_record(db, body, created_by=principal.user_id)
    return {"id": record_id}


@router.patch("/{stream_id}")
async def update_stream(
    stream_id: str,
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    body = await read_payload(request, StreamUpdate)
    await _service.update_record(db, stream_id, body)
    return success_flag()


@router.delete("/{stream_id}")
async def delete_stream(
    stream_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    await _service.delete_record(db, stream_id)
    return success_flag()
