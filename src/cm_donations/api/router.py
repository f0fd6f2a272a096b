"""Donation ledger REST endpoints (admin/leader only).

GET    /donations         - newest donation first
GET    /donations/{id}
POST   /donations
PATCH  /donations/{id}
DELETE /donations/{id}
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.database import get_db_session
from src.cm_common.record_service import RecordService
from src.cm_common.response import success_flag
from src.cm_donations.application.schemas import DonationCreate, DonationUpdate
from src.cm_donations.infrastructure.persistence import DonationRepository
from src.cm_gateway.auth.dependencies import staff_guard
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.security.payload import read_payload

router = APIRouter(prefix="/donations", tags=["donations"])

_service = RecordService("donation", DonationRepository())


@router.get("", response_model=None)
async def list_donations(
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[dict[str, Any]]:
    return await _service.list_records(db)


@router.get("/{donation_id}", response_model=None)
async def get_donation(
    donation_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, Any]:
    return await _service.get_record(db, donation_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_donation(
    request: Request,
    principal: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, str]:
    body = await read_payload(request, DonationCreate)
    record_id = await _service.create_record(db, body, created_by=principal.user_id)
    return {"id": record_id}


@router.patch("/{donation_id}")
async def update_donation(
    donation_id: str,
    request: Request,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    body = await read_payload(request, DonationUpdate)
    await _service.update_record(db, donation_id, body)
    return success_flag()


@router.delete("/{donation_id}")
async def delete_donation(
    donation_id: str,
    _: Annotated[SessionPrincipal, Depends(staff_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> dict[str, bool]:
    await _service.delete_record(db, donation_id)
    return success_flag()
