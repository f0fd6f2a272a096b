"""Donation repository: the donations table (alembic/versions/008_create_donations.py)."""

from src.cm_common.table_repository import TableRepository


class DonationRepository(TableRepository):
    def __init__(self) -> None:
        super().__init__(
            table="donations",
            columns=(
                "donor_name", "amount", "donation_type", "payment_method", "donation_date",
                "notes", "receipt_number", "follow_up_needed", "created_by",
            ),
            order_by="donation_date DESC",
        )
