"""Role gate: does the caller's role belong to the endpoint's role set?

Levels:
  ADMIN_ONLY  - user management (register)
  STAFF       - every panel read/write
  ANY_MEMBER  - any signed-in user
Public endpoints do not consult the gate at all.
"""

from collections.abc import Iterable

from src.cm_common.enums import Role
from src.cm_gateway.auth.principal import SessionPrincipal

ADMIN_ONLY: frozenset[Role] = frozenset({Role.ADMIN})
STAFF: frozenset[Role] = frozenset({Role.ADMIN, Role.LEADER})
ANY_MEMBER: frozenset[Role] = frozenset({Role.ADMIN, Role.LEADER, Role.MEMBER})


def authorize(principal: SessionPrincipal | None, required_roles: Iterable[Role | str]) -> bool:
    if principal is None:
        return False
    allowed = {Role(r) for r in required_roles}
    return principal.role in allowed
