"""Pydantic schemas for ticket validation."""

from pydantic import BaseModel


class TicketDetails(BaseModel):
    event_id: str
    event_title: str
    ticket_type: str
    seat_index: int
    order_reference: str


class TicketValidationResponse(BaseModel):
    valid: bool
    message: str
    ticket_details: TicketDetails | None = None
