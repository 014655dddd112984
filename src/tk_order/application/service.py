# src/tk_order/application/service.py
"""OrderApplicationService: order lookups and ticket delivery on demand."""
from src.tk_common.enums import DeliveryChannel
from src.tk_common.errors import OrderNotFoundError
from src.tk_delivery.application.dispatcher import DeliveryDispatcher
from src.tk_order.application.schemas import EmailTicketsResponse, OrderDetails
from src.tk_order.domain.models import Order
from src.tk_order.domain.repository import OrderStoreProtocol
from src.tk_ticket.application.renderer import TicketDocument


class OrderApplicationService:
    def __init__(
        self,
        store: OrderStoreProtocol,
        dispatcher: DeliveryDispatcher | None = None,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher or DeliveryDispatcher(store)

    async def _require(self, reference: str) -> Order:
        order = await self._store.get(reference)
        if order is None:
            raise OrderNotFoundError(reference)
        return order

    async def get_order(self, reference: str) -> OrderDetails:
        return OrderDetails.from_domain(await self._require(reference))

    async def list_orders(self, user_id: str) -> list[OrderDetails]:
        orders = await self._store.list_by_user(user_id)
        return [OrderDetails.from_domain(o) for o in orders]

    async def download_tickets(self, reference: str) -> TicketDocument:
        order = await self._require(reference)
        return await self._dispatcher.download(order)

    async def email_tickets(self, reference: str) -> EmailTicketsResponse:
        order = await self._require(reference)
        result = await self._dispatcher.deliver(order, DeliveryChannel.EMAIL)
        return EmailTicketsResponse(
            success=result.success, error=result.error, message=result.message
        )
