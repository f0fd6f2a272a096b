"""Pydantic payload schemas for church members."""

from datetime import date
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.cm_common.enums import ActiveStatus
from src.cm_common.fields import PartialUpdateModel
from src.cm_gateway.security.sanitize import SanitizedStr


class MemberCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    full_name: SanitizedStr = Field(..., min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: SanitizedStr | None = Field(None, max_length=50)
    address: SanitizedStr | None = Field(None, max_length=200)
    birth_date: date | None = None
    baptism_date: date | None = None
    membership_date: date | None = None
    status: ActiveStatus = ActiveStatus.ACTIVE
    notes: SanitizedStr | None = Field(None, max_length=2000)


class MemberUpdate(PartialUpdateModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("full_name", "status")

    full_name: SanitizedStr | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: SanitizedStr | None = Field(None, max_length=50)
    address: SanitizedStr | None = Field(None, max_length=200)
    birth_date: date | None = None
    baptism_date: date | None = None
    membership_date: date | None = None
    status: ActiveStatus | None = None
    notes: SanitizedStr | None = Field(None, max_length=2000)
