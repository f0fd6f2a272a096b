"""Auth API router: login, logout, register, me.

login/register share the auth_strict rate-limit preset (5 req/min per
client). register is admin-only: the caller picks the new user's role.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.database import get_db_session
from src.cm_common.response import success_flag
from src.cm_gateway.auth.dependencies import login_guard, register_guard, session_guard
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.auth.session import create_session, destroy_session
from src.cm_gateway.security.payload import read_payload
from src.cm_gateway.user.db_models import UserModel
from src.cm_gateway.user.schemas import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    RegisterRequest,
    UserInfo,
)
from src.cm_gateway.user.service import UserService, to_principal

router = APIRouter(prefix="/auth", tags=["auth"])
_service = UserService()


def _user_info(user: UserModel) -> UserInfo:
    return UserInfo(id=str(user.id), email=user.email, name=user.name, role=user.role)


@router.post("/login", response_model=LoginResponse, summary="Sign in with email + password")
async def login(
    request: Request,
    response: Response,
    _: Annotated[SessionPrincipal | None, Depends(login_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> LoginResponse:
    body = await read_payload(request, LoginRequest)
    user = await _service.login(body.email, body.password, db)
    create_session(response, to_principal(user))
    return LoginResponse(user=_user_info(user))


@router.post("/logout", summary="Clear the session cookie")
async def logout(
    response: Response,
    _: Annotated[SessionPrincipal | None, Depends(session_guard)],
) -> dict[str, bool]:
    destroy_session(response)
    return success_flag()


@router.get("/me", response_model=MeResponse, summary="Current user, or null")
async def me(
    principal: Annotated[SessionPrincipal | None, Depends(session_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> MeResponse:
    if principal is None:
        return MeResponse(user=None)
    user = await _service.get_user(db, principal.user_id)
    return MeResponse(user=_user_info(user) if user is not None else None)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=UserInfo,
    summary="Create a panel user (admin only)",
)
async def register(
    request: Request,
    _: Annotated[SessionPrincipal, Depends(register_guard)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserInfo:
    body = await read_payload(request, RegisterRequest)
    user = await _service.register(body.email, body.password, body.name, body.role, db)
    return _user_info(user)
