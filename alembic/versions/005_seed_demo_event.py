"""005: seed a demo event with standard and VIP tiers

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
        INSERT INTO events (id, title, description, date, time, location, organizer, capacity)
        VALUES (
            'EVT-JAZZ-2026',
            'Cape Town Jazz Night',
            'An evening of live jazz on the waterfront.',
            '2026-12-12 18:00:00+02',
            '18:00',
            'CTICC (Cape Town International Convention Centre)',
            'EventHub South Africa',
            500
        )
        ON CONFLICT (id) DO NOTHING;
    """)
    op.execute("""
        INSERT INTO ticket_tiers (event_id, id, name, description, price, available, max_per_order, sort_order)
        VALUES
            ('EVT-JAZZ-2026', 'standard', 'Standard', 'General admission', 150.00, 400, 10, 0),
            ('EVT-JAZZ-2026', 'vip', 'VIP', 'Front rows and lounge access', 300.00, 100, 4, 1)
        ON CONFLICT (event_id, id) DO NOTHING;
    """)


def downgrade() -> None:
    op.execute("DELETE FROM ticket_tiers WHERE event_id = 'EVT-JAZZ-2026';")
    op.execute("DELETE FROM events WHERE id = 'EVT-JAZZ-2026';")
