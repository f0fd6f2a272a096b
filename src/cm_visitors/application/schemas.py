"""Pydantic payload schemas for first-time visitors.

visit_date defaults to the current UTC date when the form omits it.
"""

from datetime import date
from typing import ClassVar

from pydantic import BaseModel, EmailStr, Field

from src.cm_common.datetime_utils import utc_now
from src.cm_common.fields import PartialUpdateModel
from src.cm_gateway.security.sanitize import SanitizedStr


def _today() -> date:
    return utc_now().date()


class VisitorCreate(BaseModel):
    full_name: SanitizedStr = Field(..., min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: SanitizedStr | None = Field(None, max_length=50)
    visit_date: date = Field(default_factory=_today)
    source: SanitizedStr | None = Field(None, max_length=100)
    interested_in: list[SanitizedStr] = Field(default_factory=list)
    notes: SanitizedStr | None = Field(None, max_length=2000)
    followed_up: bool = False
    follow_up_needed: bool = False


class VisitorUpdate(PartialUpdateModel):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "full_name", "visit_date", "interested_in", "followed_up", "follow_up_needed",
    )

    full_name: SanitizedStr | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: SanitizedStr | None = Field(None, max_length=50)
    visit_date: date | None = None
    source: SanitizedStr | None = Field(None, max_length=100)
    interested_in: list[SanitizedStr] | None = None
    notes: SanitizedStr | None = Field(None, max_length=2000)
    followed_up: bool | None = None
    follow_up_needed: bool | None = None
