# src/tk_order/api/router.py
"""Checkout and order REST API.

Checkout failures are typed results, not exceptions: the body carries
{success: false, error: <kind>} inside the error envelope. Order lookups
raise AppError and go through the app-wide handler.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.tk_common.database import get_db_session
from src.tk_common.response import ApiResponse, error_response, success_response
from src.tk_order.application.payment import PaymentProcessor
from src.tk_order.application.schemas import CheckoutRequest
from src.tk_order.application.service import OrderApplicationService
from src.tk_order.domain.repository import OrderStoreProtocol
from src.tk_order.infrastructure.persistence import RedisOrderStore

router = APIRouter(tags=["orders"])


def get_order_store() -> OrderStoreProtocol:
    return RedisOrderStore()


def get_payment_processor(
    store: Annotated[OrderStoreProtocol, Depends(get_order_store)],
) -> PaymentProcessor:
    return PaymentProcessor(store=store)


def get_order_service(
    store: Annotated[OrderStoreProtocol, Depends(get_order_store)],
) -> OrderApplicationService:
    return OrderApplicationService(store=store)


def _request_id(request: Request, resp: ApiResponse) -> str:
    return getattr(request.state, "request_id", resp.request_id)


@router.post("/checkout", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
async def checkout(
    body: CheckoutRequest,
    processor: Annotated[PaymentProcessor, Depends(get_payment_processor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse | JSONResponse:
    result = await processor.process(body, db)
    if result.success:
        resp = success_response(result.model_dump())
        resp.request_id = _request_id(request, resp)
        return resp
    err = error_response(result.error_code or 9002, result.message or "", result.model_dump())
    err.request_id = _request_id(request, err)
    return JSONResponse(status_code=result.http_status, content=err.model_dump())


@router.get("/orders")
async def list_orders(
    service: Annotated[OrderApplicationService, Depends(get_order_service)],
    request: Request,
    user_id: str = Query(..., description="Owner of the orders"),
) -> ApiResponse:
    data = await service.list_orders(user_id)
    resp = success_response([o.model_dump(mode="json") for o in data])
    resp.request_id = _request_id(request, resp)
    return resp


@router.get("/orders/{reference}")
async def get_order(
    reference: str,
    service: Annotated[OrderApplicationService, Depends(get_order_service)],
    request: Request,
) -> ApiResponse:
    data = await service.get_order(reference)
    resp = success_response(data.model_dump(mode="json"))
    resp.request_id = _request_id(request, resp)
    return resp


@router.post("/orders/{reference}/tickets/download")
async def download_tickets(
    reference: str,
    service: Annotated[OrderApplicationService, Depends(get_order_service)],
) -> Response:
    document = await service.download_tickets(reference)
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


@router.post("/orders/{reference}/tickets/email")
async def email_tickets(
    reference: str,
    service: Annotated[OrderApplicationService, Depends(get_order_service)],
    request: Request,
) -> ApiResponse:
    data = await service.email_tickets(reference)
    resp = success_response(data.model_dump())
    resp.request_id = _request_id(request, resp)
    return resp
