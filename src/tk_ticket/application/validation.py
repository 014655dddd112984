"""TicketValidationService: checks a scanned ticket ID against its order.

Validation is read-only: a ticket is not marked as used, so the same ticket
validates every time it is scanned.
"""

from src.tk_common.enums import OrderStatus
from src.tk_common.reference import is_valid_reference
from src.tk_order.domain.repository import OrderStoreProtocol
from src.tk_order.infrastructure.persistence import RedisOrderStore
from src.tk_ticket.application.schemas import TicketDetails, TicketValidationResponse
from src.tk_ticket.domain.models import TicketId


def _invalid(message: str) -> TicketValidationResponse:
    return TicketValidationResponse(valid=False, message=message)


class TicketValidationService:
    def __init__(self, store: OrderStoreProtocol | None = None) -> None:
        self._store: OrderStoreProtocol = store or RedisOrderStore()

    async def validate(self, raw_ticket_id: str) -> TicketValidationResponse:
        try:
            ticket_id = TicketId.parse(raw_ticket_id)
        except ValueError:
            return _invalid("Invalid ticket format")
        if not is_valid_reference(ticket_id.reference):
            return _invalid("Invalid ticket format")

        order = await self._store.get(ticket_id.reference)
        if order is None:
            return _invalid("Order not found")
        if order.status != OrderStatus.COMPLETED:
            return _invalid("Order is not completed")

        line = order.find_line(ticket_id.tier_id)
        if line is None:
            return _invalid("Ticket type not found in order")
        if not 1 <= ticket_id.seat_index <= line.quantity:
            return _invalid("Invalid ticket index")

        return TicketValidationResponse(
            valid=True,
            message="Ticket is valid",
            ticket_details=TicketDetails(
                event_id=order.event_id,
                event_title=order.event.title,
                ticket_type=line.name,
                seat_index=ticket_id.seat_index,
                order_reference=order.reference,
            ),
        )
