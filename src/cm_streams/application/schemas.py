"""Pydantic payload schemas for live streams."""

from typing import ClassVar

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from src.cm_common.enums import StreamPlatform, StreamStatus
from src.cm_common.fields import PartialUpdateModel, UrlStr
from src.cm_gateway.security.sanitize import SanitizedStr


class StreamCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: SanitizedStr = Field(..., min_length=1, max_length=200)
    description: SanitizedStr | None = Field(None, max_length=2000)
    stream_url: UrlStr
    platform: StreamPlatform | None = None
    scheduled_date: AwareDatetime
    status: StreamStatus = StreamStatus.SCHEDULED
    thumbnail_url: UrlStr | None = None


class StreamUpdate(PartialUpdateModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("title", "stream_url", "scheduled_date", "status")

    title: SanitizedStr | None = Field(None, min_length=1, max_length=200)
    description: SanitizedStr | None = Field(None, max_length=2000)
    stream_url: UrlStr | None = None
    platform: StreamPlatform | None = None
    scheduled_date: AwareDatetime | None = None
    status: StreamStatus | None = None
    thumbnail_url: UrlStr | None = None
