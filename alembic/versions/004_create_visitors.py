"""004: create visitors table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE visitors (
            id                  TEXT            PRIMARY KEY,
            full_name           VARCHAR(100)    NOT NULL,
            email               VARCHAR(255),
            phone               VARCHAR(50),
            visit_date          DATE            NOT NULL DEFAULT CURRENT_DATE,
            source              VARCHAR(100),
            interested_in       TEXT[]          NOT NULL DEFAULT '{}',
            notes               TEXT,
            followed_up         BOOLEAN         NOT NULL DEFAULT FALSE,
            follow_up_needed    BOOLEAN         NOT NULL DEFAULT FALSE,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_visitors_visit_date ON visitors (visit_date DESC);")
    op.execute("""
        CREATE TRIGGER trg_visitors_updated_at
            BEFORE UPDATE ON visitors
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS visitors CASCADE;")
