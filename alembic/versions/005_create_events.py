"""005: create events table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE events (
            id                  TEXT            PRIMARY KEY,
            title               VARCHAR(200)    NOT NULL,
            description         TEXT,
            event_date          TIMESTAMPTZ     NOT NULL,
            end_date            TIMESTAMPTZ,
            location            VARCHAR(200),
            event_type          VARCHAR(50),
            image_url           TEXT,
            status              VARCHAR(16)     NOT NULL DEFAULT 'scheduled',
            follow_up_needed    BOOLEAN         NOT NULL DEFAULT FALSE,
            created_by          TEXT            REFERENCES users(id) ON DELETE SET NULL,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_events_status CHECK (
                status IN ('scheduled', 'ongoing', 'completed', 'cancelled')
            )
        );
    """)
    op.execute("CREATE INDEX idx_events_event_date ON events (event_date);")
    op.execute("""
        CREATE TRIGGER trg_events_updated_at
            BEFORE UPDATE ON events
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS events CASCADE;")
