"""EventStore Protocol — the external event store as seen by checkout.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tk_catalog.domain.models import Event, TicketTier


class EventStoreProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, event_id: str) -> Event | None: ...

    async def list_ticket_tiers(self, db: AsyncSession, event_id: str) -> list[TicketTier]: ...

    async def increment_attendees(self, db: AsyncSession, event_id: str, delta: int) -> None: ...
