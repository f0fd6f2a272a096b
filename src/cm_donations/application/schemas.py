"""Pydantic payload schemas for donations.

Amounts are Decimal end to end (NUMERIC(12, 2) column); floats are never
used for money.
"""

from decimal import Decimal
from typing import ClassVar

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from src.cm_common.enums import DonationType, PaymentMethod
from src.cm_common.fields import PartialUpdateModel
from src.cm_gateway.security.sanitize import SanitizedStr


class DonationCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    donor_name: SanitizedStr = Field(..., min_length=1, max_length=100)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    donation_type: DonationType
    payment_method: PaymentMethod | None = None
    donation_date: AwareDatetime
    notes: SanitizedStr | None = Field(None, max_length=2000)
    receipt_number: SanitizedStr | None = Field(None, max_length=100)
    follow_up_needed: bool = False


class DonationUpdate(PartialUpdateModel):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "donor_name", "amount", "donation_type", "donation_date", "follow_up_needed",
    )

    donor_name: SanitizedStr | None = Field(None, min_length=1, max_length=100)
    amount: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    donation_type: DonationType | None = None
    payment_method: PaymentMethod | None = None
    donation_date: AwareDatetime | None = None
    notes: SanitizedStr | None = Field(None, max_length=2000)
    receipt_number: SanitizedStr | None = Field(None, max_length=100)
    follow_up_needed: bool | None = None
