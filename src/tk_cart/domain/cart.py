"""CartBuilder: a buyer's selected quantities per tier.

Quantities are clamped into [0, min(available, max_per_order)] on every
mutation. Unknown tier IDs are ignored so a stale UI cannot break the cart.
"""

from dataclasses import replace
from decimal import Decimal

from src.tk_cart.domain.pricing import (
    SERVICE_FEE_RATE,
    SelectedLine,
    Totals,
    compute_totals,
)
from src.tk_catalog.domain.models import TicketTier
from src.tk_common.errors import EmptyCartError


class CartBuilder:
    def __init__(
        self, tiers: list[TicketTier], fee_rate: Decimal = SERVICE_FEE_RATE
    ) -> None:
        self._tiers = {tier.id: tier for tier in tiers}
        self._fee_rate = fee_rate
        self._lines = [
            SelectedLine(tier_id=t.id, name=t.name, unit_price=t.unit_price, quantity=0)
            for t in tiers
        ]

    @property
    def lines(self) -> list[SelectedLine]:
        return list(self._lines)

    def set_quantity(self, tier_id: str, delta: int) -> list[SelectedLine]:
        tier = self._tiers.get(tier_id)
        if tier is None:
            return self.lines
        self._lines = [
            replace(line, quantity=_clamp(line.quantity + delta, tier.purchase_limit))
            if line.tier_id == tier_id
            else line
            for line in self._lines
        ]
        return self.lines

    def get_totals(self, lines: list[SelectedLine] | None = None) -> Totals:
        return compute_totals(self._lines if lines is None else lines, self._fee_rate)

    def checkout_lines(self) -> list[SelectedLine]:
        """Lines with a positive quantity; raises EmptyCartError when there are none."""
        selected = [line for line in self._lines if line.quantity > 0]
        if not selected:
            raise EmptyCartError()
        return selected


def _clamp(quantity: int, limit: int) -> int:
    return max(0, min(quantity, limit))
