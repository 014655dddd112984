"""tk_ticket REST API: validate a scanned ticket."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.tk_common.response import ApiResponse, success_response
from src.tk_ticket.application.validation import TicketValidationService

router = APIRouter(prefix="/tickets", tags=["tickets"])


def get_validation_service() -> TicketValidationService:
    return TicketValidationService()


@router.get("/{ticket_id}/validation")
async def validate_ticket(
    ticket_id: str,
    service: Annotated[TicketValidationService, Depends(get_validation_service)],
    request: Request,
) -> ApiResponse:
    data = await service.validate(ticket_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
