"""CatalogApplicationService: read-only access to an event's ticket tiers."""

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.tk_catalog.application.schemas import TicketCatalogResponse, TicketTierItem
from src.tk_catalog.domain.models import Event, TicketTier
from src.tk_catalog.domain.repository import EventStoreProtocol
from src.tk_catalog.infrastructure.persistence import EventRepository
from src.tk_common.errors import EventNotFoundError


class CatalogApplicationService:
    def __init__(self, repo: EventStoreProtocol | None = None) -> None:
        self._repo: EventStoreProtocol = repo or EventRepository()

    async def load_tiers(
        self, db: AsyncSession, event_id: str
    ) -> tuple[Event, list[TicketTier]]:
        event = await self._repo.get_by_id(db, event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        tiers = await self._repo.list_ticket_tiers(db, event_id)
        return event, tiers

    async def get_ticket_catalog(self, db: AsyncSession, event_id: str) -> TicketCatalogResponse:
        event, tiers = await self.load_tiers(db, event_id)
        return TicketCatalogResponse(
            event_id=event.id,
            event_title=event.title,
            currency=settings.CURRENCY,
            tiers=[TicketTierItem.from_domain(t) for t in tiers],
        )
