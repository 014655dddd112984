"""DeliveryDispatcher: hands rendered tickets to the buyer.

Channels:
  download  render the PDF and mark delivery_status.download = available
  email     render, send to billing.email, mark delivery_status.email sent/failed

Delivery never touches order status: a completed order stays completed even
when email delivery fails. Both channels can be re-invoked at will.
"""

import asyncio
import logging

from src.tk_common.enums import DeliveryChannel, DownloadStatus, EmailDeliveryStatus
from src.tk_common.errors import AppError
from src.tk_delivery.domain.models import DeliveryResult, TicketEmail
from src.tk_delivery.domain.protocols import EmailServiceProtocol
from src.tk_delivery.infrastructure.email_client import build_email_service
from src.tk_order.domain.models import Order
from src.tk_order.domain.repository import OrderStoreProtocol
from src.tk_ticket.application.renderer import TicketDocument, TicketRenderer

logger = logging.getLogger("tk.delivery")


class DeliveryDispatcher:
    def __init__(
        self,
        store: OrderStoreProtocol,
        renderer: TicketRenderer | None = None,
        email_service: EmailServiceProtocol | None = None,
    ) -> None:
        self._store = store
        self._renderer = renderer or TicketRenderer()
        self._email = email_service or build_email_service()

    async def deliver(self, order: Order, channel: DeliveryChannel) -> DeliveryResult:
        if channel == DeliveryChannel.DOWNLOAD:
            document = await self.download(order)
            return DeliveryResult(channel=channel, success=True, document=document)
        return await self.send_email(order)

    async def download(self, order: Order) -> TicketDocument:
        """Render the ticket PDF. TicketRenderError propagates to the caller."""
        document = await self._render(order)
        if order.delivery_status.download != DownloadStatus.AVAILABLE:
            order.delivery_status.download = DownloadStatus.AVAILABLE
            await self._store.save(order)
        return document

    async def send_email(self, order: Order) -> DeliveryResult:
        try:
            document = await self._render(order)
            await self._email.send_tickets(
                TicketEmail(
                    order=order,
                    recipient_email=order.billing.email,
                    recipient_name=order.billing.name,
                    document=document,
                )
            )
        except AppError as exc:
            logger.warning("email delivery failed ref=%s: %s", order.reference, exc.message)
            await self._record_email_status(order, EmailDeliveryStatus.FAILED)
            return DeliveryResult(
                channel=DeliveryChannel.EMAIL, success=False, error=exc.kind, message=exc.message
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("email delivery crashed ref=%s", order.reference)
            await self._record_email_status(order, EmailDeliveryStatus.FAILED)
            return DeliveryResult(
                channel=DeliveryChannel.EMAIL,
                success=False,
                error="DELIVERY_ERROR",
                message=str(exc) or type(exc).__name__,
            )

        await self._record_email_status(order, EmailDeliveryStatus.SENT)
        return DeliveryResult(channel=DeliveryChannel.EMAIL, success=True)

    async def _render(self, order: Order) -> TicketDocument:
        return await asyncio.to_thread(self._renderer.render, order)

    async def _record_email_status(self, order: Order, status: EmailDeliveryStatus) -> None:
        order.delivery_status.email = status
        try:
            await self._store.save(order)
        except AppError as exc:
            # The email outcome stands; only the status write is lost.
            logger.warning(
                "email status %s not persisted ref=%s: %s", status.value, order.reference, exc.message
            )
