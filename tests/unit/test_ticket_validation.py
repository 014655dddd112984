"""Tests for ticket ID parsing and TicketValidationService."""
from decimal import Decimal

import pytest

from src.tk_cart.domain.pricing import SelectedLine
from src.tk_ticket.application.validation import TicketValidationService
from src.tk_ticket.domain.models import TicketId
from tests.factories import REFERENCE, InMemoryOrderStore, make_order


class TestTicketIdParse:
    def test_round_trip(self) -> None:
        ticket = TicketId.parse(f"{REFERENCE}-vip-1")
        assert ticket.reference == REFERENCE
        assert ticket.tier_id == "vip"
        assert ticket.seat_index == 1
        assert str(ticket) == f"{REFERENCE}-vip-1"

    def test_hyphenated_tier(self) -> None:
        ticket = TicketId.parse(f"{REFERENCE}-early-bird-3")
        assert ticket.tier_id == "early-bird"
        assert ticket.seat_index == 3

    @pytest.mark.parametrize(
        "raw",
        ["", "ORD-1-abc", f"{REFERENCE}-vip", f"{REFERENCE}-vip-x", f"{REFERENCE}--1",
         f"{REFERENCE}-standard-01", f"{REFERENCE}-standard-0002"],
    )
    def test_malformed(self, raw: str) -> None:
        with pytest.raises(ValueError):
            TicketId.parse(raw)


@pytest.fixture
def store_with_order(order_store: InMemoryOrderStore) -> InMemoryOrderStore:
    order_store.orders[REFERENCE] = make_order(
        lines=[
            SelectedLine("standard", "Standard", Decimal("100.00"), 2),
            SelectedLine("early-bird", "Early Bird", Decimal("80.00"), 1),
        ]
    )
    return order_store


class TestTicketValidationService:
    @pytest.mark.asyncio
    async def test_valid_ticket(self, store_with_order: InMemoryOrderStore) -> None:
        resp = await TicketValidationService(store_with_order).validate(
            f"{REFERENCE}-standard-2"
        )
        assert resp.valid is True
        assert resp.message == "Ticket is valid"
        assert resp.ticket_details.ticket_type == "Standard"
        assert resp.ticket_details.seat_index == 2
        assert resp.ticket_details.order_reference == REFERENCE

    @pytest.mark.asyncio
    async def test_hyphenated_tier_valid(self, store_with_order: InMemoryOrderStore) -> None:
        resp = await TicketValidationService(store_with_order).validate(
            f"{REFERENCE}-early-bird-1"
        )
        assert resp.valid is True

    @pytest.mark.asyncio
    async def test_validation_is_repeatable(self, store_with_order: InMemoryOrderStore) -> None:
        svc = TicketValidationService(store_with_order)
        first = await svc.validate(f"{REFERENCE}-standard-1")
        second = await svc.validate(f"{REFERENCE}-standard-1")
        assert first.valid and second.valid

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw, message",
        [
            ("not-a-ticket", "Invalid ticket format"),
            (f"{REFERENCE}-standard-01", "Invalid ticket format"),
            ("ORD-1-DEADBEEF-standard-1", "Invalid ticket format"),
            ("ORD-1-deadbeef-standard-1", "Order not found"),
            (f"{REFERENCE}-vip-1", "Ticket type not found in order"),
            (f"{REFERENCE}-standard-3", "Invalid ticket index"),
            (f"{REFERENCE}-standard-0", "Invalid ticket index"),
        ],
    )
    async def test_invalid(
        self, store_with_order: InMemoryOrderStore, raw: str, message: str
    ) -> None:
        resp = await TicketValidationService(store_with_order).validate(raw)
        assert resp.valid is False
        assert resp.message == message
        assert resp.ticket_details is None

    @pytest.mark.asyncio
    async def test_order_not_completed(self, order_store: InMemoryOrderStore) -> None:
        order_store.orders[REFERENCE] = make_order(completed=False)
        resp = await TicketValidationService(order_store).validate(f"{REFERENCE}-vip-1")
        assert resp.valid is False
        assert resp.message == "Order is not completed"
