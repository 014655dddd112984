"""EmailService Protocol: sends rendered tickets to the buyer."""

from typing import Protocol

from src.tk_delivery.domain.models import TicketEmail


class EmailServiceProtocol(Protocol):
    async def send_tickets(self, email: TicketEmail) -> None:
        """Send the ticket document; raises EmailDeliveryError on failure."""
        ...
