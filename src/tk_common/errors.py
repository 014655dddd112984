"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Catalog/Cart
  2xxx: Checkout
  3xxx: Order
  4xxx: Ticket/Delivery
  9xxx: System

`kind` names the checkout taxonomy entry and is what CheckoutResult.error
carries back to the caller.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        kind: str = "INTERNAL_ERROR",
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.kind = kind
        super().__init__(message)


# --- 1xxx: Catalog/Cart ---

class EventNotFoundError(AppError):
    def __init__(self, event_id: str) -> None:
        super().__init__(1001, f"Event not found: {event_id}", 404, "EVENT_NOT_FOUND")


class EmptyCartError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "No tickets selected", 422, "EMPTY_CART")


# --- 2xxx: Checkout ---

class BillingValidationError(AppError):
    def __init__(self, fields: dict[str, str]) -> None:
        self.fields = fields
        detail = "; ".join(f"{k}: {v}" for k, v in sorted(fields.items()))
        super().__init__(2001, f"Invalid billing details: {detail}", 422, "VALIDATION_ERROR")


class AmountMismatchError(AppError):
    def __init__(self, expected: object, received: object) -> None:
        super().__init__(
            2002,
            f"Amount mismatch: expected {expected}, received {received}",
            409,
            "AMOUNT_MISMATCH",
        )


class DuplicateCheckoutError(AppError):
    def __init__(self, idempotency_key: str) -> None:
        super().__init__(
            2003,
            f"Idempotency key already used for a different checkout: {idempotency_key}",
            409,
            "DUPLICATE_CHECKOUT",
        )


# --- 3xxx: Order ---

class OrderNotFoundError(AppError):
    def __init__(self, reference: str) -> None:
        super().__init__(3001, f"Order not found: {reference}", 404, "ORDER_NOT_FOUND")


class InvalidStatusTransitionError(AppError):
    def __init__(self, reference: str, current: str, target: str) -> None:
        super().__init__(
            3002,
            f"Order {reference} cannot move from {current} to {target}",
            409,
            "INVALID_STATUS_TRANSITION",
        )


# --- 4xxx: Ticket/Delivery ---

class TicketRenderError(AppError):
    def __init__(self, reference: str, detail: str) -> None:
        super().__init__(
            4001, f"Failed to generate tickets for {reference}: {detail}", 502, "DELIVERY_ERROR"
        )


class EmailDeliveryError(AppError):
    def __init__(self, reference: str, detail: str) -> None:
        super().__init__(
            4002, f"Failed to email tickets for {reference}: {detail}", 502, "DELIVERY_ERROR"
        )


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500, "INTERNAL_ERROR")
