"""Response envelope shared by every JSON endpoint.

    {
        "code": 0,              // 0 on success, otherwise the AppError code
        "message": "success",
        "data": { ... },        // checkout failures keep their CheckoutResult here
        "timestamp": "...",
        "request_id": "req_..."
    }
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field

from src.tk_common.datetime_utils import utc_now


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    request_id: str = Field(default_factory=_new_request_id)


def success_response(data: Any = None) -> ApiResponse:
    return ApiResponse(data=data)


def error_response(code: int, message: str, data: Any = None) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=data)
