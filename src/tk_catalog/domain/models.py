"""Domain models for tk_catalog: pure dataclasses, no persistence concerns."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class TicketTier:
    """Snapshot of a purchasable ticket tier, taken when the cart is built.

    `available` is authoritative in the event store and is not decremented
    by checkout.
    """

    id: str
    name: str
    unit_price: Decimal
    available: int
    max_per_order: int
    description: str | None = None

    def __post_init__(self) -> None:
        if self.unit_price < 0:
            raise ValueError("unit_price cannot be negative")
        if self.available < 0:
            raise ValueError("available cannot be negative")
        if self.max_per_order < 1:
            raise ValueError("max_per_order must be at least 1")

    @property
    def purchase_limit(self) -> int:
        return min(self.available, self.max_per_order)


@dataclass
class Event:
    id: str
    title: str
    description: str | None
    date: datetime | None
    time: str | None
    location: str
    image_url: str | None
    organizer: str | None
    capacity: int
    attendees: int
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
