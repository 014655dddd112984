"""Email delivery of ticket PDFs.

HttpEmailService posts to a transactional-mail HTTP API (JSON body with a
base64 PDF attachment). With no EMAIL_API_URL configured, SimulatedEmailService
only logs the send and reports success.
"""

import base64
import logging

import httpx

from config.settings import settings
from src.tk_common.errors import EmailDeliveryError
from src.tk_delivery.domain.models import TicketEmail
from src.tk_delivery.domain.protocols import EmailServiceProtocol

logger = logging.getLogger("tk.delivery")


def _subject(email: TicketEmail) -> str:
    return f"Your tickets for {email.order.event.title} ({email.order.reference})"


def _body(email: TicketEmail) -> str:
    order = email.order
    return (
        f"Hi {email.recipient_name},\n\n"
        f"Thank you for your purchase. Your {order.total_tickets} ticket(s) for "
        f"{order.event.title} at {order.event.location} are attached.\n"
        f"Order reference: {order.reference}\n\n"
        "Please present each ticket (printed or digital) at the event entrance."
    )


class HttpEmailService:
    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        sender: str = settings.EMAIL_FROM,
        timeout: float = settings.EMAIL_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._sender = sender
        self._timeout = timeout
        self._transport = transport

    async def send_tickets(self, email: TicketEmail) -> None:
        reference = email.order.reference
        payload = {
            "from": self._sender,
            "to": [{"email": email.recipient_email, "name": email.recipient_name}],
            "subject": _subject(email),
            "text": _body(email),
            "attachments": [
                {
                    "filename": email.document.filename,
                    "content_type": email.document.media_type,
                    "content": base64.b64encode(email.document.content).decode(),
                }
            ],
        }
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(self._api_url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(reference, str(exc) or type(exc).__name__) from exc
        if resp.status_code >= 300:
            raise EmailDeliveryError(reference, f"mail API returned {resp.status_code}")
        logger.info("tickets emailed ref=%s to=%s", reference, email.recipient_email)


class SimulatedEmailService:
    async def send_tickets(self, email: TicketEmail) -> None:
        logger.info(
            "simulated ticket email ref=%s to=%s (%d bytes)",
            email.order.reference,
            email.recipient_email,
            len(email.document.content),
        )


def build_email_service() -> EmailServiceProtocol:
    if settings.EMAIL_API_URL:
        return HttpEmailService(settings.EMAIL_API_URL, settings.EMAIL_API_KEY)
    return SimulatedEmailService()
