"""001: create events table and the updated_at trigger function

Revision ID: 001
Revises: 
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_touch_updated_at()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TABLE events (
            id              VARCHAR(64)     PRIMARY KEY,
            title           VARCHAR(255)    NOT NULL,
            description     TEXT,
            date            TIMESTAMPTZ,
            time            VARCHAR(32),
            location        VARCHAR(255)    NOT NULL,
            image_url       VARCHAR(500),
            organizer       VARCHAR(255),
            capacity        INT             NOT NULL DEFAULT 100,
            attendees       INT             NOT NULL DEFAULT 0,
            status          VARCHAR(20)     NOT NULL DEFAULT 'active',
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_events_capacity_gte_0  CHECK (capacity >= 0),
            CONSTRAINT ck_events_attendees_gte_0 CHECK (attendees >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_events_updated_at
            BEFORE UPDATE ON events
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS events;")
    op.execute("DROP FUNCTION IF EXISTS fn_touch_updated_at();")
