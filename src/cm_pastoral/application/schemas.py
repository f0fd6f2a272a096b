"""Pydantic payload schemas for pastoral visits.

A visit references a member or a visitor (either may be absent) and the
pastor (a panel user) who made it.
"""

from typing import ClassVar

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from src.cm_common.enums import PastoralVisitStatus, VisitType
from src.cm_common.fields import PartialUpdateModel
from src.cm_gateway.security.sanitize import SanitizedStr


class PastoralVisitCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    member_id: str | None = None
    visitor_id: str | None = None
    visit_date: AwareDatetime
    visit_type: VisitType
    pastor_id: str | None = None
    notes: SanitizedStr | None = Field(None, max_length=2000)
    follow_up_needed: bool = False
    status: PastoralVisitStatus = PastoralVisitStatus.SCHEDULED


class PastoralVisitUpdate(PartialUpdateModel):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "visit_date", "visit_type", "follow_up_needed", "status",
    )

    member_id: str | None = None
    visitor_id: str | None = None
    visit_date: AwareDatetime | None = None
    visit_type: VisitType | None = None
    pastor_id: str | None = None
    notes: SanitizedStr | None = Field(None, max_length=2000)
    follow_up_needed: bool | None = None
    status: PastoralVisitStatus | None = None
