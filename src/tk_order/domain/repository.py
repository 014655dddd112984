# src/tk_order/domain/repository.py
"""OrderStore Protocol — interface contract for the order persistence layer."""
from typing import Protocol

from src.tk_order.domain.models import IdempotencyClaim, Order


class OrderStoreProtocol(Protocol):
    async def save(self, order: Order) -> None: ...

    async def get(self, reference: str) -> Order | None: ...

    async def list_by_user(self, user_id: str) -> list[Order]: ...

    async def claim_idempotency_key(
        self, user_id: str, key: str, claim: IdempotencyClaim
    ) -> IdempotencyClaim | None: ...

    async def release_idempotency_key(self, user_id: str, key: str) -> None: ...
