"""002: create ticket_tiers table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ticket_tiers (
            event_id        VARCHAR(64)     NOT NULL REFERENCES events(id) ON DELETE CASCADE,
            id              VARCHAR(64)     NOT NULL,
            name            VARCHAR(100)    NOT NULL,
            description     TEXT,
            price           NUMERIC(10, 2)  NOT NULL,
            available       INT             NOT NULL DEFAULT 0,
            max_per_order   INT             NOT NULL DEFAULT 10,
            sort_order      SMALLINT        NOT NULL DEFAULT 0,
            PRIMARY KEY (event_id, id),
            CONSTRAINT ck_ticket_tiers_price_gte_0     CHECK (price >= 0),
            CONSTRAINT ck_ticket_tiers_available_gte_0 CHECK (available >= 0),
            CONSTRAINT ck_ticket_tiers_max_gte_1       CHECK (max_per_order >= 1)
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ticket_tiers;")
