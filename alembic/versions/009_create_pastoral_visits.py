"""009: create pastoral_visits table

Revision ID: 009
Revises: 008
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "009"
down_revision: Union[str, None] = "008"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE pastoral_visits (
            id                  TEXT            PRIMARY KEY,
            member_id           TEXT            REFERENCES members(id) ON DELETE SET NULL,
            visitor_id          TEXT            REFERENCES visitors(id) ON DELETE SET NULL,
            visit_date          TIMESTAMPTZ     NOT NULL,
            visit_type          VARCHAR(16)     NOT NULL,
            pastor_id           TEXT            REFERENCES users(id) ON DELETE SET NULL,
            notes               TEXT,
            follow_up_needed    BOOLEAN         NOT NULL DEFAULT FALSE,
            status              VARCHAR(16)     NOT NULL DEFAULT 'scheduled',
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_pastoral_visits_type CHECK (
                visit_type IN ('home', 'hospital', 'phone', 'video', 'other')
            ),
            CONSTRAINT ck_pastoral_visits_status CHECK (
                status IN ('scheduled', 'completed', 'cancelled')
            )
        );
    """)
    op.execute("CREATE INDEX idx_pastoral_visits_visit_date ON pastoral_visits (visit_date DESC);")
    op.execute("""
        CREATE TRIGGER trg_pastoral_visits_updated_at
            BEFORE UPDATE ON pastoral_visits
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS pastoral_visits CASCADE;")
