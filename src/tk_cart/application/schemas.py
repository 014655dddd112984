"""Pydantic schemas for the cart quote API."""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.tk_cart.domain.pricing import SelectedLine, Totals, total_quantity


class QuantityAdjustment(BaseModel):
    tier_id: str
    delta: int


class QuoteRequest(BaseModel):
    event_id: str
    adjustments: list[QuantityAdjustment] = Field(default_factory=list)


class QuoteLine(BaseModel):
    tier_id: str
    name: str
    unit_price: Decimal
    quantity: int

    @classmethod
    def from_domain(cls, line: SelectedLine) -> "QuoteLine":
        return cls(
            tier_id=line.tier_id,
            name=line.name,
            unit_price=line.unit_price,
            quantity=line.quantity,
        )


class QuoteResponse(BaseModel):
    event_id: str
    currency: str
    lines: list[QuoteLine]
    total_tickets: int
    subtotal: Decimal
    service_fee: Decimal
    total: Decimal

    @classmethod
    def build(
        cls, event_id: str, currency: str, lines: list[SelectedLine], totals: Totals
    ) -> "QuoteResponse":
        return cls(
            event_id=event_id,
            currency=currency,
            lines=[QuoteLine.from_domain(line) for line in lines],
            total_tickets=total_quantity(lines),
            subtotal=totals.subtotal,
            service_fee=totals.service_fee,
            total=totals.total,
        )
