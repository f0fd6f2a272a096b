"""008: create donations table

Revision ID: 008
Revises: 007
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "008"
down_revision: Union[str, None] = "007"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE donations (
            id                  TEXT            PRIMARY KEY,
            donor_name          VARCHAR(100)    NOT NULL,
            amount              NUMERIC(12, 2)  NOT NULL,
            donation_type       VARCHAR(16)     NOT NULL,
            payment_method      VARCHAR(16),
            donation_date       TIMESTAMPTZ     NOT NULL,
            notes               TEXT,
            receipt_number      VARCHAR(100),
            follow_up_needed    BOOLEAN         NOT NULL DEFAULT FALSE,
            created_by          TEXT            REFERENCES users(id) ON DELETE SET NULL,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_donations_amount_positive CHECK (amount > 0),
            CONSTRAINT ck_donations_type CHECK (
                donation_type IN ('offering', 'tithe', 'special', 'other')
            ),
            CONSTRAINT ck_donations_payment_method CHECK (
                payment_method IN ('cash', 'check', 'card', 'bank_transfer', 'other')
            )
        );
    """)
    op.execute("CREATE INDEX idx_donations_donation_date ON donations (donation_date DESC);")
    op.execute("""
        CREATE TRIGGER trg_donations_updated_at
            BEFORE UPDATE ON donations
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS donations CASCADE;")
