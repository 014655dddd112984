"""003: create user_events (attendance) table

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
        CREATE TABLE user_events (
            user_id         VARCHAR(128)    NOT NULL,
            event_id        VARCHAR(64)     NOT NULL REFERENCES events(id) ON DELETE CASCADE,
            status          VARCHAR(20)     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            PRIMARY KEY (user_id, event_id),
            CONSTRAINT ck_user_events_status CHECK (
                status IN ('attending', 'interested', 'not_attending')
            )
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_events;")
