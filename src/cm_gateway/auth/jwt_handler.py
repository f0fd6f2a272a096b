"""Session token creation and verification (HS256 JWT).

Claims: sub (user id), email, name, role, iat, exp. Tokens live for
SESSION_EXPIRE_DAYS and are carried in the httpOnly "session" cookie.

NOTE: No revocation list. Logging out deletes the cookie, but a copied
token stays valid until it expires.
"""

import logging
from datetime import timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.cm_common.datetime_utils import utc_now
from src.cm_common.enums import Role
from src.cm_gateway.auth.principal import SessionPrincipal

logger = logging.getLogger("cm.security")

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_SESSION_EXPIRE = timedelta(days=settings.SESSION_EXPIRE_DAYS)


def create_session_token(principal: SessionPrincipal) -> str:
    """Sign a session token for an authenticated user."""
    now = utc_now()
    payload = {
        "sub": principal.user_id,
        "email": principal.email,
        "name": principal.name,
        "role": principal.role.value,
        "iat": now,
        "exp": now + _SESSION_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def verify_session_token(token: str | None) -> SessionPrincipal | None:
    """Decode a session token into a principal.

    Returns None for a missing token and for every verification failure
    (bad signature, expired, malformed, missing claims, unknown role).
    Callers cannot tell those cases apart on purpose.
    """
    if not token:
        return None

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        logger.info("session token rejected: signature/expiry check failed")
        return None

    user_id = payload.get("sub")
    email = payload.get("email")
    role = payload.get("role")
    name = payload.get("name")
    if not isinstance(user_id, str) or not user_id or not isinstance(email, str):
        logger.info("session token rejected: missing identity claims")
        return None
    try:
        parsed_role = Role(role)
    except (TypeError, ValueError):
        logger.info("session token rejected: unknown role %r", role)
        return None

    return SessionPrincipal(
        user_id=user_id,
        email=email,
        role=parsed_role,
        name=name if isinstance(name, str) else None,
    )
