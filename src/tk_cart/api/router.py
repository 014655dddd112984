"""tk_cart REST API: price a ticket selection before checkout."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tk_cart.application.schemas import QuoteRequest
from src.tk_cart.application.service import CartApplicationService
from src.tk_common.database import get_db_session
from src.tk_common.response import ApiResponse, success_response

router = APIRouter(prefix="/cart", tags=["cart"])


def get_cart_service() -> CartApplicationService:
    return CartApplicationService()


@router.post("/quote")
async def quote(
    body: QuoteRequest,
    service: Annotated[CartApplicationService, Depends(get_cart_service)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await service.quote(db, body)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
