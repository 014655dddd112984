"""Delivery domain models."""

from dataclasses import dataclass

from src.tk_common.enums import DeliveryChannel
from src.tk_order.domain.models import Order
from src.tk_ticket.application.renderer import TicketDocument


@dataclass(frozen=True)
class TicketEmail:
    order: Order
    recipient_email: str
    recipient_name: str
    document: TicketDocument


@dataclass
class DeliveryResult:
    channel: DeliveryChannel
    success: bool
    error: str | None = None
    message: str | None = None
    document: TicketDocument | None = None
