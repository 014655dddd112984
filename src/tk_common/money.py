"""Decimal money utilities for rand-denominated ticket prices.

All prices, fees and totals are Decimal with two places. No float.
"""

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def to_money(value: Decimal | int | str) -> Decimal:
    """Quantize a value to two decimal places (half-up)."""
    return Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


def calculate_service_fee(subtotal: Decimal, fee_rate: Decimal) -> Decimal:
    """Service fee rounded half-up to the cent: round(subtotal * rate, 2)."""
    if subtotal == 0 or fee_rate == 0:
        return to_money(0)
    return to_money(subtotal * fee_rate)


def money_display(amount: Decimal, symbol: str = "R") -> str:
    """Format for display: Decimal('1500') -> 'R 1,500.00'."""
    amount = to_money(amount)
    if amount < 0:
        return f"-{symbol} {-amount:,.2f}"
    return f"{symbol} {amount:,.2f}"


def amounts_match(expected: Decimal, received: Decimal, tolerance: Decimal) -> bool:
    """True when |expected - received| <= tolerance."""
    return abs(Decimal(expected) - Decimal(received)) <= tolerance
