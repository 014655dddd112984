"""Rendered tickets and ticket ID parsing.

A ticket ID is "<reference>-<tier_id>-<seat>", where reference is
"ORD-<ms>-<suffix>" and seat is 1-based per tier within the order.
Tier IDs may themselves contain hyphens.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.tk_order.domain.models import Order

_REFERENCE_PARTS = 3


@dataclass(frozen=True)
class RenderedTicket:
    ticket_id: str
    tier_id: str
    tier_name: str
    unit_price: Decimal
    seat_index: int

    @property
    def qr_payload(self) -> str:
        return self.ticket_id


@dataclass(frozen=True)
class TicketId:
    reference: str
    tier_id: str
    seat_index: int

    def __str__(self) -> str:
        return f"{self.reference}-{self.tier_id}-{self.seat_index}"

    @classmethod
    def parse(cls, value: str) -> "TicketId":
        """Raises ValueError when value is not a well-formed ticket ID."""
        parts = value.split("-")
        if len(parts) < _REFERENCE_PARTS + 2:
            raise ValueError(f"Invalid ticket format: {value}")
        reference = "-".join(parts[:_REFERENCE_PARTS])
        tier_id = "-".join(parts[_REFERENCE_PARTS:-1])
        if not tier_id or not parts[-1].isdigit():
            raise ValueError(f"Invalid ticket format: {value}")
        parsed = cls(reference=reference, tier_id=tier_id, seat_index=int(parts[-1]))
        if str(parsed) != value:
            raise ValueError(f"Invalid ticket format: {value}")
        return parsed


def build_rendered_tickets(order: Order) -> list[RenderedTicket]:
    """One RenderedTicket per purchased seat, in line order."""
    return [
        RenderedTicket(
            ticket_id=str(TicketId(order.reference, line.tier_id, seat)),
            tier_id=line.tier_id,
            tier_name=line.name,
            unit_price=line.unit_price,
            seat_index=seat,
        )
        for line in order.lines
        for seat in range(1, line.quantity + 1)
    ]
