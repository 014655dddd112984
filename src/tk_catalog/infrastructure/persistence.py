"""EventRepository: concrete implementation of EventStoreProtocol.

All queries use raw text() SQL (no ORM).
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.tk_catalog.domain.models import Event, TicketTier

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_GET_EVENT_SQL = text("""
    SELECT id, title, description, date, time, location, image_url,
           organizer, capacity, attendees, status, created_at, updated_at
    FROM events
    WHERE id = :event_id
""")

_LIST_TIERS_SQL = text("""
    SELECT id, name, description, price, available, max_per_order
    FROM ticket_tiers
    WHERE event_id = :event_id
    ORDER BY sort_order, price, id
""")

_INCREMENT_ATTENDEES_SQL = text("""
    UPDATE events
    SET attendees = COALESCE(attendees, 0) + :delta
    WHERE id = :event_id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_event(row: Any) -> Event:
    return Event(
        id=row.id,
        title=row.title,
        description=row.description,
        date=row.date,
        time=row.time,
        location=row.location,
        image_url=row.image_url,
        organizer=row.organizer,
        capacity=row.capacity,
        attendees=row.attendees or 0,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _row_to_tier(row: Any) -> TicketTier:
    return TicketTier(
        id=row.id,
        name=row.name,
        description=row.description,
        unit_price=row.price,
        available=row.available,
        max_per_order=row.max_per_order or settings.DEFAULT_MAX_PER_ORDER,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class EventRepository:
    async def get_by_id(self, db: AsyncSession, event_id: str) -> Event | None:
        result = await db.execute(_GET_EVENT_SQL, {"event_id": event_id})
        row = result.fetchone()
        return _row_to_event(row) if row else None

    async def list_ticket_tiers(self, db: AsyncSession, event_id: str) -> list[TicketTier]:
        result = await db.execute(_LIST_TIERS_SQL, {"event_id": event_id})
        return [_row_to_tier(row) for row in result.fetchall()]

    async def increment_attendees(self, db: AsyncSession, event_id: str, delta: int) -> None:
        await db.execute(_INCREMENT_ATTENDEES_SQL, {"event_id": event_id, "delta": delta})
