"""006: create streams table

Revision ID: 006
Revises: 005
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE streams (
            id                  TEXT            PRIMARY KEY,
            title               VARCHAR(200)    NOT NULL,
            description         TEXT,
            stream_url          TEXT            NOT NULL,
            platform            VARCHAR(16),
            scheduled_date      TIMESTAMPTZ     NOT NULL,
            status              VARCHAR(16)     NOT NULL DEFAULT 'scheduled',
            thumbnail_url       TEXT,
            created_by          TEXT            REFERENCES users(id) ON DELETE SET NULL,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_streams_platform CHECK (
                platform IN ('youtube', 'facebook', 'twitch', 'zoom', 'other')
            ),
            CONSTRAINT ck_streams_status CHECK (
                status IN ('scheduled', 'live', 'ended', 'cancelled')
            )
        );
    """)
    op.execute("CREATE INDEX idx_streams_scheduled_date ON streams (scheduled_date);")
    op.execute("""
        CREATE TRIGGER trg_streams_updated_at
            BEFORE UPDATE ON streams
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS streams CASCADE;")
