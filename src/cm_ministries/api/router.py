"""Ministry REST endpoints (admin/leader only).

GET    /ministries        - by name
GET    /ministries/{id}
POST   /ministries
PATCH  /ministries/{id}
DELETE /ministries/{id}
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.database import get_db_session
from src.cm_common.record_service import RecordService
from src.cm_common.response import success_flag
from src.cm_ministries.application.schemas import MinistryCreate, MinistryUpdate
from src.cm_ministries.infrastructure.persistence import MinistryRepository
from src.cm_gateway.auth.dependencies import staff_guard
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.security.payload import read_payload

router = APIRouter(prefix="/ministries", tags=["ministries"])

_service = RecordService("ministry", MinistryRepository())


@router.get("", response_model=None)
async def list_ministries(
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[dict[str, Any]]:
    return await _service.list_records(db)


@router.get("/{ministry_id}", response_model=None)
async def get_ministry(
    ministry_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, Any]:
    return await _service.get_record(db, ministry_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_ministry(
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, str]:
    body = await read_payload(request, MinistryCreate)
    record_id = await _service.create_record(db, body)
    return {"id": record_id}


@router.patch("/{ministry_id}")
async def update_ministry(
    ministry_id: str,
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    body = await read_payload(request, MinistryUpdate)
    await _service.update_record(db, ministry_id, body)
    return success_flag()


@router.delete("/{ministry_id}")
async def delete_ministry(
    ministry_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    await _service.delete_record(db, ministry_id)
    return success_flag()
