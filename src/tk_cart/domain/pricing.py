"""Cart lines and pricing totals: pure functions, no I/O."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from src.tk_common.money import calculate_service_fee, to_money

SERVICE_FEE_RATE = Decimal("0.05")


@dataclass(frozen=True)
class SelectedLine:
    tier_id: str
    name: str
    unit_price: Decimal
    quantity: int = 0

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError("quantity cannot be negative")

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    service_fee: Decimal
    total: Decimal


def compute_totals(
    lines: Iterable[SelectedLine], fee_rate: Decimal = SERVICE_FEE_RATE
) -> Totals:
    """subtotal = Σ price × qty; fee = round(subtotal × rate, 2); total = subtotal + fee."""
    subtotal = to_money(sum((line.line_total for line in lines), Decimal(0)))
    service_fee = calculate_service_fee(subtotal, fee_rate)
    return Totals(subtotal=subtotal, service_fee=service_fee, total=subtotal + service_fee)


def total_quantity(lines: Iterable[SelectedLine]) -> int:
    return sum(line.quantity for line in lines)
