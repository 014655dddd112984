"""tk_catalog REST API: ticket tiers of an event."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tk_catalog.application.service import CatalogApplicationService
from src.tk_common.database import get_db_session
from src.tk_common.response import ApiResponse, success_response

router = APIRouter(prefix="/events", tags=["catalog"])


def get_catalog_service() -> CatalogApplicationService:
    return CatalogApplicationService()


@router.get("/{event_id}/tickets")
async def get_ticket_catalog(
    event_id: str,
    service: Annotated[CatalogApplicationService, Depends(get_catalog_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await service.get_ticket_catalog(db, event_id)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
