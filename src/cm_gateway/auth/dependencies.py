"""FastAPI guard dependencies.

Every protected route runs the same chain, stopping at the first failure:

    rate limit → session → role gate

then the handler reads its body with read_payload() (sanitize → validate).

Usage in any router:
    from src.cm_gateway.auth.dependencies import public_guard, staff_guard

    @router.post("")
    async def create(principal: Annotated[SessionPrincipal, Depends(staff_guard)]):
        ...
"""

import logging
from collections.abc import Iterable

from fastapi import Request, Response

from src.cm_common.enums import Role
from src.cm_common.errors import ForbiddenRoleError, UnauthenticatedError
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.auth.session import get_session
from src.cm_gateway.middleware.rate_limit import enforce_rate_limit
from src.cm_gateway.middleware.request_log import request_id_of
from src.cm_gateway.security.rate_limiter import (
    AUTH_STRICT_CONFIG,
    DEFAULT_CONFIG,
    STRICT_CONFIG,
    RateLimitConfig,
)
from src.cm_gateway.security.roles import ADMIN_ONLY, STAFF, authorize

logger = logging.getLogger("cm.security")


class Guard:
    """Rate limit, then (optionally) require a session whose role is allowed.

    roles=None makes the route public: the session is still resolved so
    handlers can personalise, but an anonymous caller is let through.
    """

    def __init__(
        self,
        config: RateLimitConfig,
        roles: Iterable[Role] | None = None,
    ) -> None:
        self.config = config
        self.roles = frozenset(roles) if roles is not None else None

    async def __call__(self, request: Request, response: Response) -> SessionPrincipal | None:
        await enforce_rate_limit(request, response, self.config)

        principal = get_session(request)
        if self.roles is None:
            return principal

        if principal is None:
            raise UnauthenticatedError()
        if not authorize(principal, self.roles):
            logger.info(
                "role %s denied on %s %s %s",
                principal.role.value,
                request.method,
                request.url.path,
                request_id_of(request),
            )
            raise ForbiddenRoleError(principal.role.value)
        return principal


# Public reads of the marketing site (events, streams)
public_guard = Guard(DEFAULT_CONFIG)
# Public session endpoints (logout, me)
session_guard = Guard(STRICT_CONFIG)
# Credential endpoints
login_guard = Guard(AUTH_STRICT_CONFIG)
register_guard = Guard(AUTH_STRICT_CONFIG, ADMIN_ONLY)
# Panel API
staff_guard = Guard(STRICT_CONFIG, STAFF)
