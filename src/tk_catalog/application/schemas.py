"""Pydantic schemas for the ticket catalog API."""

from decimal import Decimal

from pydantic import BaseModel

from config.settings import settings
from src.tk_catalog.domain.models import TicketTier
from src.tk_common.money import money_display


class TicketTierItem(BaseModel):
    id: str
    name: str
    description: str | None
    unit_price: Decimal
    unit_price_display: str
    available: int
    max_per_order: int
    purchase_limit: int

    @classmethod
    def from_domain(cls, tier: TicketTier) -> "TicketTierItem":
        return cls(
            id=tier.id,
            name=tier.name,
            description=tier.description,
            unit_price=tier.unit_price,
            unit_price_display=money_display(tier.unit_price, settings.CURRENCY_SYMBOL),
            available=tier.available,
            max_per_order=tier.max_per_order,
            purchase_limit=tier.purchase_limit,
        )


class TicketCatalogResponse(BaseModel):
    event_id: str
    event_title: str
    currency: str
    tiers: list[TicketTierItem]
