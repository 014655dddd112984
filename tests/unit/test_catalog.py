"""Unit tests for the event catalog: raw SQL repository and application service."""
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.tk_catalog.application.service import CatalogApplicationService
from src.tk_catalog.domain.models import TicketTier
from src.tk_catalog.infrastructure.persistence import EventRepository
from src.tk_common.errors import EventNotFoundError
from tests.factories import make_event


def _make_event_row(**kwargs) -> MagicMock:
    row = MagicMock()
    event = make_event(**kwargs)
    for name in (
        "id", "title", "description", "date", "time", "location", "image_url",
        "organizer", "capacity", "attendees", "status", "created_at", "updated_at",
    ):
        setattr(row, name, getattr(event, name))
    return row


def _make_tier_row(**kwargs) -> MagicMock:
    row = MagicMock()
    row.id = kwargs.get("id", "standard")
    row.name = kwargs.get("name", "Standard")
    row.description = kwargs.get("description")
    row.price = kwargs.get("price", Decimal("150.00"))
    row.available = kwargs.get("available", 100)
    row.max_per_order = kwargs.get("max_per_order", 10)
    return row


def _tier(tier_id: str = "standard", price: str = "150.00") -> TicketTier:
    return TicketTier(id=tier_id, name=tier_id.title(), unit_price=Decimal(price),
                      available=50, max_per_order=10)


class TestEventRepository:
    @pytest.mark.asyncio
    async def test_get_by_id_maps_row(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchone.return_value = _make_event_row(attendees=None)
        db.execute.return_value = result
        event = await EventRepository().get_by_id(db, "EVT-1")
        assert event is not None
        assert event.title == "Cape Town Jazz Night"
        assert event.attendees == 0

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchone.return_value = None
        db.execute.return_value = result
        assert await EventRepository().get_by_id(db, "EVT-404") is None

    @pytest.mark.asyncio
    async def test_list_ticket_tiers(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchall.return_value = [
            _make_tier_row(),
            _make_tier_row(id="vip", name="VIP", price=Decimal("300.00"), max_per_order=None),
        ]
        db.execute.return_value = result
        tiers = await EventRepository().list_ticket_tiers(db, "EVT-1")
        assert [t.id for t in tiers] == ["standard", "vip"]
        assert tiers[1].unit_price == Decimal("300.00")
        assert tiers[1].max_per_order == 10

    @pytest.mark.asyncio
    async def test_increment_attendees(self) -> None:
        db = AsyncMock()
        await EventRepository().increment_attendees(db, "EVT-1", 3)
        params = db.execute.call_args.args[1]
        assert params == {"event_id": "EVT-1", "delta": 3}


class TestCatalogApplicationService:
    @pytest.mark.asyncio
    async def test_catalog(self) -> None:
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=make_event())
        repo.list_ticket_tiers = AsyncMock(return_value=[_tier(), _tier("vip", "1500.00")])
        svc = CatalogApplicationService(repo=repo)

        resp = await svc.get_ticket_catalog(MagicMock(), "EVT-1")

        assert resp.event_id == "EVT-1"
        assert resp.currency == "ZAR"
        assert [t.id for t in resp.tiers] == ["standard", "vip"]
        assert resp.tiers[1].unit_price_display == "R 1,500.00"
        assert resp.tiers[0].purchase_limit == 10

    @pytest.mark.asyncio
    async def test_unknown_event(self) -> None:
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=None)
        repo.list_ticket_tiers = AsyncMock()
        svc = CatalogApplicationService(repo=repo)
        with pytest.raises(EventNotFoundError):
            await svc.get_ticket_catalog(MagicMock(), "EVT-404")
        repo.list_ticket_tiers.assert_not_awaited()
