"""Authenticated caller identity, decoded from the session token."""

from dataclasses import dataclass

from src.cm_common.enums import Role


@dataclass(frozen=True)
class SessionPrincipal:
    user_id: str
    email: str
    role: Role
    name: str | None = None
