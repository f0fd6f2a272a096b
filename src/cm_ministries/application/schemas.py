"""Pydantic payload schemas for ministries."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from src.cm_common.enums import ActiveStatus
from src.cm_common.fields import PartialUpdateModel
from src.cm_gateway.security.sanitize import SanitizedStr


class MinistryCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: SanitizedStr = Field(..., min_length=1, max_length=100)
    description: SanitizedStr | None = Field(None, max_length=1000)
    leader_id: str | None = None
    meeting_schedule: SanitizedStr | None = Field(None, max_length=200)
    status: ActiveStatus = ActiveStatus.ACTIVE


class MinistryUpdate(PartialUpdateModel):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "status")

    name: SanitizedStr | None = Field(None, min_length=1, max_length=100)
    description: SanitizedStr | None = Field(None, max_length=1000)
    leader_id: str | None = None
    meeting_schedule: SanitizedStr | None = Field(None, max_length=200)
    status: ActiveStatus | None = None
