# src/tk_order/infrastructure/persistence.py
"""RedisOrderStore — orders as JSON documents in Redis.

Key layout:
  order:<reference>                 JSON document (overwritten on every save)
  user_orders:<user_id>             sorted set of references, score = payment epoch ms
  checkout_key:<user_id>:<key>      idempotency claim, expires after IDEMPOTENCY_TTL_SECONDS

Saves run as one MULTI/EXEC pipeline, so a failed save leaves no partial order.
Concurrent saves of the same reference are last-writer-wins.
"""
import json
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import settings
from src.tk_cart.domain.pricing import SelectedLine
from src.tk_common.datetime_utils import to_epoch_ms
from src.tk_common.enums import (
    DeliveryMethod,
    DownloadStatus,
    EmailDeliveryStatus,
    OrderStatus,
    PaymentMethod,
)
from src.tk_common.errors import InternalError
from src.tk_common.redis_client import get_redis
from src.tk_order.domain.models import (
    BillingDetails,
    DeliveryStatus,
    EventSnapshot,
    IdempotencyClaim,
    Order,
)

logger = logging.getLogger("tk.order_store")


def _order_key(reference: str) -> str:
    return f"order:{reference}"


def _user_index_key(user_id: str) -> str:
    return f"user_orders:{user_id}"


def _idempotency_key(user_id: str, key: str) -> str:
    return f"checkout_key:{user_id}:{key}"


# ---------------------------------------------------------------------------
# Document mappers
# ---------------------------------------------------------------------------


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def order_to_document(order: Order) -> dict[str, Any]:
    """Convert an Order to a JSON-safe dict (Decimals as strings)."""
    return {
        "reference": order.reference,
        "event_id": order.event_id,
        "event": {
            "id": order.event.id,
            "title": order.event.title,
            "date": _iso(order.event.date),
            "time": order.event.time,
            "location": order.event.location,
            "image_url": order.event.image_url,
            "organizer": order.event.organizer,
        },
        "user_id": order.user_id,
        "lines": [
            {
                "tier_id": line.tier_id,
                "name": line.name,
                "unit_price": str(line.unit_price),
                "quantity": line.quantity,
            }
            for line in order.lines
        ],
        "subtotal": str(order.subtotal),
        "service_fee_rate": str(order.service_fee_rate),
        "service_fee": str(order.service_fee),
        "total": str(order.total),
        "currency": order.currency,
        "payment_method": order.payment_method.value,
        "payment_date": order.payment_date.isoformat(),
        "billing": {
            "name": order.billing.name,
            "email": order.billing.email,
            "phone": order.billing.phone,
            "address": order.billing.address,
            "city": order.billing.city,
            "postal_code": order.billing.postal_code,
        },
        "status": order.status.value,
        "delivery_method": order.delivery_method.value,
        "delivery_status": {
            "email": order.delivery_status.email.value if order.delivery_status.email else None,
            "download": (
                order.delivery_status.download.value if order.delivery_status.download else None
            ),
        },
    }


def document_to_order(doc: dict[str, Any]) -> Order:
    """Convert a stored document back to an Order domain object."""
    event = doc["event"]
    delivery = doc.get("delivery_status") or {}
    return Order(
        reference=doc["reference"],
        event_id=doc["event_id"],
        event=EventSnapshot(
            id=event["id"],
            title=event["title"],
            date=_parse_dt(event.get("date")),
            time=event.get("time"),
            location=event["location"],
            image_url=event.get("image_url"),
            organizer=event.get("organizer"),
        ),
        user_id=doc["user_id"],
        lines=[
            SelectedLine(
                tier_id=line["tier_id"],
                name=line["name"],
                unit_price=Decimal(line["unit_price"]),
                quantity=line["quantity"],
            )
            for line in doc["lines"]
        ],
        subtotal=Decimal(doc["subtotal"]),
        service_fee_rate=Decimal(doc["service_fee_rate"]),
        service_fee=Decimal(doc["service_fee"]),
        total=Decimal(doc["total"]),
        currency=doc["currency"],
        payment_method=PaymentMethod(doc["payment_method"]),
        payment_date=datetime.fromisoformat(doc["payment_date"]),
        billing=BillingDetails(**doc["billing"]),
        status=OrderStatus(doc["status"]),
        delivery_method=DeliveryMethod(doc["delivery_method"]),
        delivery_status=DeliveryStatus(
            email=EmailDeliveryStatus(delivery["email"]) if delivery.get("email") else None,
            download=DownloadStatus(delivery["download"]) if delivery.get("download") else None,
        ),
    )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class RedisOrderStore:
    """Concrete implementation of OrderStoreProtocol on redis.asyncio."""

    def __init__(self, client: aioredis.Redis | None = None) -> None:
        self._client = client

    async def _redis(self) -> aioredis.Redis:
        if self._client is None:
            self._client = await get_redis()
        return self._client

    async def save(self, order: Order) -> None:
        client = await self._redis()
        payload = json.dumps(order_to_document(order))
        pipe = client.pipeline(transaction=True)
        pipe.set(_order_key(order.reference), payload)
        pipe.zadd(
            _user_index_key(order.user_id),
            {order.reference: to_epoch_ms(order.payment_date)},
        )
        try:
            await pipe.execute()
        except RedisError as exc:
            logger.error("order save failed ref=%s: %s", order.reference, exc)
            raise InternalError("Order store unavailable") from exc

    async def get(self, reference: str) -> Order | None:
        client = await self._redis()
        try:
            raw = await client.get(_order_key(reference))
        except RedisError as exc:
            logger.error("order read failed ref=%s: %s", reference, exc)
            raise InternalError("Order store unavailable") from exc
        return document_to_order(json.loads(raw)) if raw else None

    async def list_by_user(self, user_id: str) -> list[Order]:
        client = await self._redis()
        try:
            references = await client.zrevrange(_user_index_key(user_id), 0, -1)
            if not references:
                return []
            raws = await client.mget([_order_key(ref) for ref in references])
        except RedisError as exc:
            logger.error("order list failed user=%s: %s", user_id, exc)
            raise InternalError("Order store unavailable") from exc
        orders = [document_to_order(json.loads(raw)) for raw in raws if raw]
        # Index score ties (same millisecond) fall back to the stored payment date.
        return sorted(orders, key=lambda o: o.payment_date, reverse=True)

    async def claim_idempotency_key(
        self, user_id: str, key: str, claim: IdempotencyClaim
    ) -> IdempotencyClaim | None:
        """Bind key to claim. Returns the existing claim if the key was already taken."""
        client = await self._redis()
        redis_key = _idempotency_key(user_id, key)
        payload = json.dumps(
            {"reference": claim.reference, "event_id": claim.event_id, "amount": claim.amount}
        )
        try:
            acquired = await client.set(
                redis_key, payload, nx=True, ex=settings.IDEMPOTENCY_TTL_SECONDS
            )
            if acquired:
                return None
            raw = await client.get(redis_key)
        except RedisError as exc:
            logger.error("idempotency claim failed key=%s: %s", redis_key, exc)
            raise InternalError("Order store unavailable") from exc
        if raw is None:
            # Expired between SET NX and GET; the caller proceeds as a fresh checkout.
            return None
        return IdempotencyClaim(**json.loads(raw))

    async def release_idempotency_key(self, user_id: str, key: str) -> None:
        client = await self._redis()
        try:
            await client.delete(_idempotency_key(user_id, key))
        except RedisError as exc:
            logger.warning("idempotency release failed user=%s key=%s: %s", user_id, key, exc)
