"""007: create ministries table

Revision ID: 007
Revises: 006
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ministries (
            id                  TEXT            PRIMARY KEY,
            name                VARCHAR(100)    NOT NULL,
            description         VARCHAR(1000),
            leader_id           TEXT            REFERENCES members(id) ON DELETE SET NULL,
            meeting_schedule    VARCHAR(200),
            status              VARCHAR(16)     NOT NULL DEFAULT 'active',
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_ministries_status CHECK (status IN ('active', 'inactive'))
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_ministries_updated_at
            BEFORE UPDATE ON ministries
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ministries CASCADE;")
