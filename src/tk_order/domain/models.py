"""Order domain model: pure dataclasses, no Redis dependency."""
import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from src.tk_cart.domain.pricing import SERVICE_FEE_RATE, SelectedLine, compute_totals
from src.tk_catalog.domain.models import Event
from src.tk_common.enums import (
    DeliveryMethod,
    DownloadStatus,
    EmailDeliveryStatus,
    OrderStatus,
    PaymentMethod,
)
from src.tk_common.errors import EmptyCartError, InvalidStatusTransitionError

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")
_PHONE_RE = re.compile(r"^[0-9+\s()-]{7,15}$")

# Allowed status moves; anything else is rejected.
_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.COMPLETED, OrderStatus.FAILED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.FAILED: frozenset(),
}


@dataclass(frozen=True)
class BillingDetails:
    name: str
    email: str
    phone: str
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None


def validate_billing(billing: BillingDetails) -> dict[str, str]:
    """Return field -> problem for every invalid billing field (empty when valid)."""
    errors: dict[str, str] = {}
    if not billing.name.strip():
        errors["name"] = "Name is required"
    if not billing.email.strip():
        errors["email"] = "Email is required"
    elif not _EMAIL_RE.match(billing.email):
        errors["email"] = "Please enter a valid email address"
    if not billing.phone.strip():
        errors["phone"] = "Phone number is required"
    elif not _PHONE_RE.match(billing.phone):
        errors["phone"] = "Please enter a valid phone number"
    return errors


@dataclass(frozen=True)
class EventSnapshot:
    """Event fields denormalized onto the order for display and tickets."""

    id: str
    title: str
    date: datetime | None
    time: str | None
    location: str
    image_url: str | None = None
    organizer: str | None = None

    @classmethod
    def from_event(cls, event: Event) -> "EventSnapshot":
        return cls(
            id=event.id,
            title=event.title,
            date=event.date,
            time=event.time,
            location=event.location,
            image_url=event.image_url,
            organizer=event.organizer,
        )


@dataclass
class DeliveryStatus:
    email: EmailDeliveryStatus | None = None
    download: DownloadStatus | None = None

    @classmethod
    def initial(cls, method: DeliveryMethod) -> "DeliveryStatus":
        return cls(
            email=EmailDeliveryStatus.PENDING if method.includes_email else None,
            download=DownloadStatus.AVAILABLE if method.includes_download else None,
        )


@dataclass
class Order:
    reference: str
    event_id: str
    event: EventSnapshot
    user_id: str
    lines: list[SelectedLine]
    subtotal: Decimal
    service_fee_rate: Decimal
    service_fee: Decimal
    total: Decimal
    currency: str
    payment_method: PaymentMethod
    payment_date: datetime
    billing: BillingDetails
    status: OrderStatus = OrderStatus.PENDING
    delivery_method: DeliveryMethod = DeliveryMethod.BOTH
    delivery_status: DeliveryStatus = field(default_factory=DeliveryStatus)

    @classmethod
    def create(
        cls,
        reference: str,
        event: EventSnapshot,
        user_id: str,
        lines: list[SelectedLine],
        currency: str,
        payment_method: PaymentMethod,
        payment_date: datetime,
        billing: BillingDetails,
        delivery_method: DeliveryMethod,
        fee_rate: Decimal = SERVICE_FEE_RATE,
    ) -> "Order":
        """Build a pending order; totals are always derived from `lines`."""
        purchased = [line for line in lines if line.quantity > 0]
        if not purchased:
            raise EmptyCartError()
        totals = compute_totals(purchased, fee_rate)
        return cls(
            reference=reference,
            event_id=event.id,
            event=event,
            user_id=user_id,
            lines=purchased,
            subtotal=totals.subtotal,
            service_fee_rate=fee_rate,
            service_fee=totals.service_fee,
            total=totals.total,
            currency=currency,
            payment_method=payment_method,
            payment_date=payment_date,
            billing=billing,
            status=OrderStatus.PENDING,
            delivery_method=delivery_method,
            delivery_status=DeliveryStatus.initial(delivery_method),
        )

    @property
    def total_tickets(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_guest(self) -> bool:
        return self.user_id == "guest"

    def find_line(self, tier_id: str) -> SelectedLine | None:
        return next((line for line in self.lines if line.tier_id == tier_id), None)

    def mark_completed(self) -> None:
        self._transition(OrderStatus.COMPLETED)

    def mark_failed(self) -> None:
        self._transition(OrderStatus.FAILED)

    def _transition(self, target: OrderStatus) -> None:
        if target not in _TRANSITIONS[self.status]:
            raise InvalidStatusTransitionError(self.reference, self.status.value, target.value)
        self.status = target


@dataclass(frozen=True)
class IdempotencyClaim:
    """What a checkout idempotency key is bound to."""

    reference: str
    event_id: str
    amount: str

    def same_request(self, other: "IdempotencyClaim") -> bool:
        return self.event_id == other.event_id and self.amount == other.amount
