"""CartApplicationService: replays quantity adjustments through CartBuilder."""

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.tk_cart.application.schemas import QuoteRequest, QuoteResponse
from src.tk_cart.domain.cart import CartBuilder
from src.tk_catalog.application.service import CatalogApplicationService


class CartApplicationService:
    def __init__(self, catalog: CatalogApplicationService | None = None) -> None:
        self._catalog = catalog or CatalogApplicationService()

    async def quote(self, db: AsyncSession, req: QuoteRequest) -> QuoteResponse:
        _, tiers = await self._catalog.load_tiers(db, req.event_id)
        cart = CartBuilder(tiers, fee_rate=settings.SERVICE_FEE_RATE)
        for adjustment in req.adjustments:
            cart.set_quantity(adjustment.tier_id, adjustment.delta)
        return QuoteResponse.build(
            event_id=req.event_id,
            currency=settings.CURRENCY,
            lines=cart.lines,
            totals=cart.get_totals(),
        )
