"""Member directory REST endpoints (admin/leader only).

GET    /members           - alphabetical by full name
GET    /members/{id}
POST   /members
PATCH  /members/{id}
DELETE /members/{id}
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.database import get_db_session
from src.cm_common.record_service import RecordService
from src.cm_common.response import success_flag
from src.cm_members.application.schemas import MemberCreate, MemberUpdate
from src.cm_members.infrastructure.persistence import MemberRepository
from src.cm_gateway.auth.dependencies import staff_guard
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.security.payload import read_payload

router = APIRouter(prefix="/members", tags=["members"])

_service = RecordService("member", MemberRepository())


@router.get("", response_model=None)
async def list_members(
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[dict[str, Any]]:
    return await _service.list_records(db)


@router.get("/{member_id}", response_model=None)
async def get_member(
    member_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, Any]:
    return await _service.get_record(db, member_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_member(
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, str]:
    body = await read_payload(request, MemberCreate)
    record_id = await _service.create_record(db, body)
    return {"id": record_id}


@router.patch("/{member_id}")
async def update_member(
    member_id: str,
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    body = await read_payload(request, MemberUpdate)
    await _service.update_record(db, member_id, body)
    return success_flag()


@router.delete("/{member_id}")
async def delete_member(
    member_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    await _service.delete_record(db, member_id)
    return success_flag()
