"""003: create members table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE members (
            id                  TEXT            PRIMARY KEY,
            full_name           VARCHAR(100)    NOT NULL,
            email               VARCHAR(255),
            phone               VARCHAR(50),
            address             VARCHAR(200),
            birth_date          DATE,
            baptism_date        DATE,
            membership_date     DATE,
            status              VARCHAR(16)     NOT NULL DEFAULT 'active',
            notes               TEXT,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_members_status CHECK (status IN ('active', 'inactive'))
        );
    """)
    op.execute("CREATE INDEX idx_members_full_name ON members (full_name);")
    op.execute("CREATE INDEX idx_members_status ON members (status);")
    op.execute("""
        CREATE TRIGGER trg_members_updated_at
            BEFORE UPDATE ON members
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS members CASCADE;")
