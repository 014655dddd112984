# src/tk_order/application/payment.py
"""PaymentProcessor — checkout request in, completed order out.

Validation order: empty cart, billing details, amount against the
server-side total, event lookup. Settlement is simulated and always
succeeds once validation passes. After the order is saved, attendee count,
attendance, notification and email delivery are best-effort: their failures
are logged and never undo the purchase.

process() never raises; every failure comes back as a CheckoutResult.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.tk_cart.domain.pricing import SelectedLine, compute_totals
from src.tk_catalog.domain.models import Event
from src.tk_catalog.domain.repository import EventStoreProtocol
from src.tk_catalog.infrastructure.persistence import EventRepository
from src.tk_common.datetime_utils import utc_now
from src.tk_common.enums import AttendanceStatus, NotificationType
from src.tk_common.errors import (
    AmountMismatchError,
    AppError,
    BillingValidationError,
    DuplicateCheckoutError,
    EmptyCartError,
    EventNotFoundError,
    InternalError,
)
from src.tk_common.money import amounts_match, to_money
from src.tk_common.reference import generate_reference
from src.tk_delivery.application.dispatcher import DeliveryDispatcher
from src.tk_engagement.domain.models import NotificationDraft
from src.tk_engagement.domain.repository import (
    NotificationServiceProtocol,
    UserEventStoreProtocol,
)
from src.tk_engagement.infrastructure.persistence import (
    NotificationRepository,
    UserEventRepository,
)
from src.tk_order.application.schemas import CheckoutRequest, CheckoutResult
from src.tk_order.domain.models import (
    BillingDetails,
    EventSnapshot,
    IdempotencyClaim,
    Order,
    validate_billing,
)
from src.tk_order.domain.repository import OrderStoreProtocol

logger = logging.getLogger("tk.checkout")


class PaymentProcessor:
    def __init__(
        self,
        store: OrderStoreProtocol,
        events: EventStoreProtocol | None = None,
        user_events: UserEventStoreProtocol | None = None,
        notifications: NotificationServiceProtocol | None = None,
        dispatcher: DeliveryDispatcher | None = None,
        reference_factory: Callable[[], str] = generate_reference,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._events: EventStoreProtocol = events or EventRepository()
        self._user_events: UserEventStoreProtocol = user_events or UserEventRepository()
        self._notifications: NotificationServiceProtocol = (
            notifications or NotificationRepository()
        )
        self._dispatcher = dispatcher or DeliveryDispatcher(store)
        self._next_reference = reference_factory
        self._clock = clock

    async def process(self, req: CheckoutRequest, db: AsyncSession) -> CheckoutResult:
        try:
            reference = await self._checkout(req, db)
        except AppError as exc:
            logger.info(
                "checkout rejected event=%s user=%s kind=%s: %s",
                req.event_id,
                req.user_id,
                exc.kind,
                exc.message,
            )
            return CheckoutResult.failed(exc)
        except Exception:  # noqa: BLE001
            logger.exception("checkout crashed event=%s user=%s", req.event_id, req.user_id)
            return CheckoutResult.failed(InternalError("Payment processing failed"))
        return CheckoutResult.ok(reference)

    async def _checkout(self, req: CheckoutRequest, db: AsyncSession) -> str:
        lines = [
            SelectedLine(
                tier_id=line.tier_id,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
            )
            for line in req.lines
            if line.quantity > 0
        ]
        if not lines:
            raise EmptyCartError()

        billing = BillingDetails(**req.billing_details.model_dump())
        problems = validate_billing(billing)
        if problems:
            raise BillingValidationError(problems)

        totals = compute_totals(lines, settings.SERVICE_FEE_RATE)
        if not amounts_match(totals.total, req.amount, settings.AMOUNT_TOLERANCE):
            raise AmountMismatchError(totals.total, req.amount)

        event = await self._events.get_by_id(db, req.event_id)
        if event is None:
            raise EventNotFoundError(req.event_id)

        reference = self._next_reference()
        if req.idempotency_key:
            claim = IdempotencyClaim(
                reference=reference, event_id=event.id, amount=str(to_money(req.amount))
            )
            existing = await self._store.claim_idempotency_key(
                req.user_id, req.idempotency_key, claim
            )
            if existing is not None:
                if not existing.same_request(claim):
                    raise DuplicateCheckoutError(req.idempotency_key)
                logger.info(
                    "checkout replay key=%s ref=%s", req.idempotency_key, existing.reference
                )
                return existing.reference

        order = Order.create(
            reference=reference,
            event=EventSnapshot.from_event(event),
            user_id=req.user_id,
            lines=lines,
            currency=req.currency,
            payment_method=req.payment_method,
            payment_date=self._clock(),
            billing=billing,
            delivery_method=req.delivery_method,
            fee_rate=settings.SERVICE_FEE_RATE,
        )
        self._settle(order)

        try:
            await self._store.save(order)
        except BaseException:
            # Any failure here, cancellation included, leaves no claim behind.
            if req.idempotency_key:
                await self._store.release_idempotency_key(req.user_id, req.idempotency_key)
            raise
        logger.info(
            "order completed ref=%s event=%s tickets=%d total=%s",
            reference,
            event.id,
            order.total_tickets,
            order.total,
        )

        await self._apply_side_effects(order, event, db)
        if order.delivery_method.includes_email:
            result = await self._dispatcher.send_email(order)
            if not result.success:
                logger.warning("checkout email not delivered ref=%s: %s", reference, result.message)
        return reference

    def _settle(self, order: Order) -> None:
        # Simulated gateway: validated checkouts always settle.
        order.mark_completed()

    async def _apply_side_effects(self, order: Order, event: Event, db: AsyncSession) -> None:
        await self._best_effort(
            "attendee count",
            order.reference,
            db,
            lambda: self._events.increment_attendees(db, event.id, order.total_tickets),
        )
        if order.is_guest:
            return
        await self._best_effort(
            "attendance",
            order.reference,
            db,
            lambda: self._user_events.set_attendance(
                db, order.user_id, event.id, AttendanceStatus.ATTENDING
            ),
        )
        await self._best_effort(
            "notification",
            order.reference,
            db,
            lambda: self._notifications.create(
                db,
                NotificationDraft(
                    user_id=order.user_id,
                    title="Ticket Purchase Confirmed",
                    message=(
                        f"Your tickets for {event.title} have been confirmed. "
                        f"Reference: {order.reference}"
                    ),
                    type=NotificationType.EVENT,
                    event_id=event.id,
                    action_url=f"/user/confirmation?reference={order.reference}",
                ),
            ),
        )

    async def _best_effort(
        self,
        label: str,
        reference: str,
        db: AsyncSession,
        action: Callable[[], Awaitable[None]],
    ) -> None:
        try:
            await asyncio.wait_for(action(), timeout=settings.SIDE_EFFECT_TIMEOUT_SECONDS)
            await db.commit()
        except Exception as exc:  # noqa: BLE001
            logger.warning("%s update failed ref=%s: %r", label, reference, exc)
            try:
                await db.rollback()
            except Exception:  # noqa: BLE001
                logger.warning("rollback after %s failure failed ref=%s", label, reference)
