"""Session cookie handling (the token-issuance side of the session).

The token travels in an httpOnly cookie; API clients that cannot hold
cookies may send it as "Authorization: Bearer <token>" instead.
"""

from fastapi import Request, Response

from config.settings import settings
from src.cm_gateway.auth.jwt_handler import create_session_token, verify_session_token
from src.cm_gateway.auth.principal import SessionPrincipal

_SESSION_MAX_AGE = 60 * 60 * 24 * settings.SESSION_EXPIRE_DAYS


def extract_session_token(request: Request) -> str | None:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token

    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def get_session(request: Request) -> SessionPrincipal | None:
    return verify_session_token(extract_session_token(request))


def create_session(response: Response, principal: SessionPrincipal) -> str:
    token = create_session_token(principal)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=_SESSION_MAX_AGE,
        path="/",
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="lax",
    )
    return token


def destroy_session(response: Response) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
