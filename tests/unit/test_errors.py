"""Tests for tk_common.errors and the response envelope."""

from decimal import Decimal

import pytest

from src.tk_common.errors import (
    AmountMismatchError,
    AppError,
    BillingValidationError,
    DuplicateCheckoutError,
    EmailDeliveryError,
    EmptyCartError,
    EventNotFoundError,
    InternalError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    TicketRenderError,
)
from src.tk_common.response import error_response, success_response


class TestAppError:
    def test_base_defaults(self) -> None:
        err = AppError(9999, "boom")
        assert err.code == 9999
        assert err.message == "boom"
        assert err.http_status == 500
        assert err.kind == "INTERNAL_ERROR"
        assert str(err) == "boom"

    @pytest.mark.parametrize(
        "err, code, status, kind",
        [
            (EventNotFoundError("EVT-1"), 1001, 404, "EVENT_NOT_FOUND"),
            (EmptyCartError(), 1002, 422, "EMPTY_CART"),
            (BillingValidationError({"email": "bad"}), 2001, 422, "VALIDATION_ERROR"),
            (AmountMismatchError(Decimal("210"), Decimal("200")), 2002, 409, "AMOUNT_MISMATCH"),
            (DuplicateCheckoutError("k-1"), 2003, 409, "DUPLICATE_CHECKOUT"),
            (OrderNotFoundError("ORD-1-x"), 3001, 404, "ORDER_NOT_FOUND"),
            (
                InvalidStatusTransitionError("ORD-1-x", "completed", "failed"),
                3002,
                409,
                "INVALID_STATUS_TRANSITION",
            ),
            (TicketRenderError("ORD-1-x", "no tickets"), 4001, 502, "DELIVERY_ERROR"),
            (EmailDeliveryError("ORD-1-x", "timeout"), 4002, 502, "DELIVERY_ERROR"),
            (InternalError(), 9002, 500, "INTERNAL_ERROR"),
        ],
    )
    def test_catalogue(self, err: AppError, code: int, status: int, kind: str) -> None:
        assert isinstance(err, AppError)
        assert (err.code, err.http_status, err.kind) == (code, status, kind)

    def test_billing_error_keeps_fields(self) -> None:
        err = BillingValidationError({"phone": "Phone number is required", "email": "bad"})
        assert err.fields == {"phone": "Phone number is required", "email": "bad"}
        assert "email: bad" in err.message
        assert err.message.index("email") < err.message.index("phone")

    def test_amount_mismatch_message(self) -> None:
        err = AmountMismatchError(Decimal("210.00"), Decimal("200.00"))
        assert "210.00" in err.message
        assert "200.00" in err.message


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"reference": "ORD-1-abcdefgh"})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"reference": "ORD-1-abcdefgh"}
        assert resp.request_id.startswith("req_")

    def test_error(self) -> None:
        resp = error_response(1001, "Event not found: EVT-9")
        assert resp.code == 1001
        assert resp.data is None
