"""Pydantic request/response schemas for the auth endpoints."""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.cm_common.enums import Role
from src.cm_gateway.security.sanitize import SanitizedStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: SanitizedStr = Field(..., min_length=1, max_length=100)
    role: Role

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        """Enforce: uppercase, lowercase, digit and special character."""
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"[0-9]", v):
            raise ValueError("Password must contain at least one number")
        if not re.search(r"[^A-Za-z0-9]", v):
            raise ValueError("Password must contain at least one special character")
        return v


class UserInfo(BaseModel):
    """Public user fields: never includes the password hash."""

    id: str
    email: str
    name: str
    role: str


class LoginResponse(BaseModel):
    user: UserInfo


class MeResponse(BaseModel):
    user: UserInfo | None
