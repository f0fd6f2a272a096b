"""Pydantic payload schemas for events.

Events are public on the marketing site (GET) and managed from the
panel (POST/PATCH/DELETE, admin or leader).
"""

from typing import ClassVar

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from src.cm_common.enums import EventStatus
from src.cm_common.fields import PartialUpdateModel, UrlStr
from src.cm_gateway.security.sanitize import SanitizedStr


class EventCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: SanitizedStr = Field(..., min_length=1, max_length=200)
    description: SanitizedStr | None = Field(None, max_length=2000)
    event_date: AwareDatetime
    end_date: AwareDatetime | None = None
    location: SanitizedStr | None = Field(None, max_length=200)
    event_type: SanitizedStr | None = Field(None, max_length=50)
    image_url: UrlStr | None = None
    status: EventStatus = EventStatus.SCHEDULED
    follow_up_needed: bool = False


class EventUpdate(PartialUpdateModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "event_date", "status", "follow_up_needed")

    title: SanitizedStr | None = Field(None, min_length=1, max_length=200)
    description: SanitizedStr | None = Field(None, max_length=2000)
    event_date: AwareDatetime | None = None
    end_date: AwareDatetime | None = None
    location: SanitizedStr | None = Field(None, max_length=200)
    event_type: SanitizedStr | None = Field(None, max_length=50)
    image_url: UrlStr | None = None
    status: EventStatus | None = None
    follow_up_needed: bool | None = None
