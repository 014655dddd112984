"""Tests for tk_order domain models."""

from decimal import Decimal

import pytest

from src.tk_cart.domain.pricing import SelectedLine
from src.tk_common.enums import (
    DeliveryMethod,
    DownloadStatus,
    EmailDeliveryStatus,
    OrderStatus,
)
from src.tk_common.errors import EmptyCartError, InvalidStatusTransitionError
from src.tk_order.domain.models import (
    DeliveryStatus,
    IdempotencyClaim,
    validate_billing,
)
from tests.factories import make_billing, make_order


class TestOrderCreate:
    def test_totals_derived_from_lines(self) -> None:
        order = make_order(completed=False)
        assert order.subtotal == Decimal("300.00")
        assert order.service_fee == Decimal("15.00")
        assert order.total == Decimal("315.00")
        assert order.total == order.subtotal + order.service_fee
        assert order.service_fee_rate == Decimal("0.05")

    def test_starts_pending(self) -> None:
        assert make_order(completed=False).status == OrderStatus.PENDING

    def test_drops_zero_quantity_lines(self) -> None:
        order = make_order(
            lines=[
                SelectedLine("standard", "Standard", Decimal("150.00"), 0),
                SelectedLine("vip", "VIP", Decimal("300.00"), 1),
            ]
        )
        assert [line.tier_id for line in order.lines] == ["vip"]
        assert order.total_tickets == 1

    def test_all_zero_raises(self) -> None:
        with pytest.raises(EmptyCartError):
            make_order(lines=[SelectedLine("standard", "Standard", Decimal("150.00"), 0)])

    def test_event_id_matches_snapshot(self) -> None:
        order = make_order()
        assert order.event_id == order.event.id == "EVT-1"

    def test_total_tickets(self) -> None:
        assert make_order().total_tickets == 3

    def test_find_line(self) -> None:
        order = make_order()
        assert order.find_line("vip").quantity == 1
        assert order.find_line("balcony") is None

    def test_guest(self) -> None:
        assert make_order(user_id="guest").is_guest
        assert not make_order(user_id="user-1").is_guest


class TestOrderStatus:
    def test_pending_to_completed(self) -> None:
        order = make_order(completed=False)
        order.mark_completed()
        assert order.status == OrderStatus.COMPLETED

    def test_pending_to_failed(self) -> None:
        order = make_order(completed=False)
        order.mark_failed()
        assert order.status == OrderStatus.FAILED

    def test_completed_is_terminal(self) -> None:
        order = make_order()
        with pytest.raises(InvalidStatusTransitionError):
            order.mark_failed()
        with pytest.raises(InvalidStatusTransitionError):
            order.mark_completed()
        assert order.status == OrderStatus.COMPLETED

    def test_failed_is_terminal(self) -> None:
        order = make_order(completed=False)
        order.mark_failed()
        with pytest.raises(InvalidStatusTransitionError):
            order.mark_completed()


class TestDeliveryStatusInitial:
    def test_both(self) -> None:
        status = DeliveryStatus.initial(DeliveryMethod.BOTH)
        assert status.email == EmailDeliveryStatus.PENDING
        assert status.download == DownloadStatus.AVAILABLE

    def test_email_only(self) -> None:
        status = DeliveryStatus.initial(DeliveryMethod.EMAIL)
        assert status.email == EmailDeliveryStatus.PENDING
        assert status.download is None

    def test_download_only(self) -> None:
        status = DeliveryStatus.initial(DeliveryMethod.DOWNLOAD)
        assert status.email is None
        assert status.download == DownloadStatus.AVAILABLE


class TestValidateBilling:
    def test_valid(self) -> None:
        assert validate_billing(make_billing()) == {}

    def test_missing_fields(self) -> None:
        problems = validate_billing(make_billing(name=" ", email="", phone=""))
        assert set(problems) == {"name", "email", "phone"}

    def test_bad_email(self) -> None:
        problems = validate_billing(make_billing(email="thandi@example"))
        assert problems == {"email": "Please enter a valid email address"}

    def test_bad_phone(self) -> None:
        problems = validate_billing(make_billing(phone="call me"))
        assert problems == {"phone": "Please enter a valid phone number"}

    def test_phone_too_long(self) -> None:
        problems = validate_billing(make_billing(phone="0123456789012345"))
        assert "phone" in problems

    def test_phone_with_punctuation(self) -> None:
        assert validate_billing(make_billing(phone="(021) 555-0101")) == {}


class TestIdempotencyClaim:
    def test_same_request_ignores_reference(self) -> None:
        a = IdempotencyClaim(reference="ORD-1-aaaaaaaa", event_id="EVT-1", amount="315.00")
        b = IdempotencyClaim(reference="ORD-2-bbbbbbbb", event_id="EVT-1", amount="315.00")
        assert a.same_request(b)

    def test_different_amount(self) -> None:
        a = IdempotencyClaim(reference="r", event_id="EVT-1", amount="315.00")
        b = IdempotencyClaim(reference="r", event_id="EVT-1", amount="210.00")
        assert not a.same_request(b)
