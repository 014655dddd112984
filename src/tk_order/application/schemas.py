# src/tk_order/application/schemas.py
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from src.tk_common.enums import DeliveryMethod, OrderStatus, PaymentMethod
from src.tk_common.errors import AppError
from src.tk_order.domain.models import Order


class CheckoutLine(BaseModel):
    tier_id: str
    name: str
    unit_price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=0)


class BillingDetailsIn(BaseModel):
    """Shape only; content rules are checked by the payment processor."""

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None


class CheckoutRequest(BaseModel):
    amount: Decimal
    currency: str = "ZAR"
    payment_method: PaymentMethod
    event_id: str
    event_title: str
    lines: list[CheckoutLine]
    billing_details: BillingDetailsIn
    user_id: str = "guest"
    delivery_method: DeliveryMethod = DeliveryMethod.BOTH
    idempotency_key: str | None = None

    @field_validator("idempotency_key")
    @classmethod
    def no_whitespace(cls, v: str | None) -> str | None:
        if v is not None and (not v or v != v.strip() or " " in v):
            raise ValueError("idempotency_key must not contain whitespace")
        return v


class CheckoutResult(BaseModel):
    success: bool
    reference: str | None = None
    error: str | None = None
    message: str | None = None
    error_code: int | None = Field(default=None, exclude=True)
    http_status: int = Field(default=201, exclude=True)

    @classmethod
    def ok(cls, reference: str) -> "CheckoutResult":
        return cls(success=True, reference=reference)

    @classmethod
    def failed(cls, exc: AppError) -> "CheckoutResult":
        return cls(
            success=False,
            error=exc.kind,
            message=exc.message,
            error_code=exc.code,
            http_status=exc.http_status,
        )


class OrderLineResponse(BaseModel):
    tier_id: str
    name: str
    unit_price: Decimal
    quantity: int


class EventSummary(BaseModel):
    id: str
    title: str
    date: datetime | None
    time: str | None
    location: str
    image_url: str | None


class DeliveryStatusResponse(BaseModel):
    email: str | None
    download: str | None


class OrderDetails(BaseModel):
    reference: str
    event_id: str
    event: EventSummary
    user_id: str
    lines: list[OrderLineResponse]
    total_tickets: int
    subtotal: Decimal
    service_fee: Decimal
    total: Decimal
    currency: str
    payment_method: PaymentMethod
    payment_date: datetime
    billing_name: str
    billing_email: str
    status: OrderStatus
    delivery_method: DeliveryMethod
    delivery_status: DeliveryStatusResponse

    @classmethod
    def from_domain(cls, order: Order) -> "OrderDetails":
        return cls(
            reference=order.reference,
            event_id=order.event_id,
            event=EventSummary(
                id=order.event.id,
                title=order.event.title,
                date=order.event.date,
                time=order.event.time,
                location=order.event.location,
                image_url=order.event.image_url,
            ),
            user_id=order.user_id,
            lines=[
                OrderLineResponse(
                    tier_id=line.tier_id,
                    name=line.name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                )
                for line in order.lines
            ],
            total_tickets=order.total_tickets,
            subtotal=order.subtotal,
            service_fee=order.service_fee,
            total=order.total,
            currency=order.currency,
            payment_method=order.payment_method,
            payment_date=order.payment_date,
            billing_name=order.billing.name,
            billing_email=order.billing.email,
            status=order.status,
            delivery_method=order.delivery_method,
            delivery_status=DeliveryStatusResponse(
                email=order.delivery_status.email.value if order.delivery_status.email else None,
                download=(
                    order.delivery_status.download.value
                    if order.delivery_status.download
                    else None
                ),
            ),
        )


class EmailTicketsResponse(BaseModel):
    success: bool
    error: str | None = None
    message: str | None = None
