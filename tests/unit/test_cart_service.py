"""Unit tests for CartApplicationService.quote."""
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.tk_cart.application.schemas import QuantityAdjustment, QuoteRequest
from src.tk_cart.application.service import CartApplicationService
from src.tk_catalog.domain.models import TicketTier
from src.tk_common.errors import EventNotFoundError
from tests.factories import make_event


def _make_catalog(tiers: list[TicketTier]) -> MagicMock:
    catalog = MagicMock()
    catalog.load_tiers = AsyncMock(return_value=(make_event(), tiers))
    return catalog


TIERS = [
    TicketTier(id="standard", name="Standard", unit_price=Decimal("100.00"),
               available=100, max_per_order=10),
    TicketTier(id="vip", name="VIP", unit_price=Decimal("100.00"),
               available=1, max_per_order=4),
]


class TestQuote:
    @pytest.mark.asyncio
    async def test_quote_totals(self) -> None:
        svc = CartApplicationService(catalog=_make_catalog(TIERS))
        req = QuoteRequest(
            event_id="EVT-1",
            adjustments=[
                QuantityAdjustment(tier_id="standard", delta=2),
                QuantityAdjustment(tier_id="vip", delta=1),
            ],
        )
        resp = await svc.quote(MagicMock(), req)
        assert resp.total_tickets == 3
        assert resp.subtotal == Decimal("300.00")
        assert resp.service_fee == Decimal("15.00")
        assert resp.total == Decimal("315.00")

    @pytest.mark.asyncio
    async def test_quote_clamps_and_ignores_unknown(self) -> None:
        svc = CartApplicationService(catalog=_make_catalog(TIERS))
        req = QuoteRequest(
            event_id="EVT-1",
            adjustments=[
                QuantityAdjustment(tier_id="vip", delta=5),
                QuantityAdjustment(tier_id="balcony", delta=2),
            ],
        )
        resp = await svc.quote(MagicMock(), req)
        assert [line.quantity for line in resp.lines] == [0, 1]

    @pytest.mark.asyncio
    async def test_no_adjustments_is_zero(self) -> None:
        svc = CartApplicationService(catalog=_make_catalog(TIERS))
        resp = await svc.quote(MagicMock(), QuoteRequest(event_id="EVT-1"))
        assert resp.total == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_unknown_event_propagates(self) -> None:
        catalog = MagicMock()
        catalog.load_tiers = AsyncMock(side_effect=EventNotFoundError("EVT-404"))
        svc = CartApplicationService(catalog=catalog)
        with pytest.raises(EventNotFoundError):
            await svc.quote(MagicMock(), QuoteRequest(event_id="EVT-404"))
