# app/api/responses.py
from typing import Any, Optional
from fastapi.responses import JSONResponse
from app.schemas.base_schema import ApiResponse


def ok(data: Any, count: Optional[int] = None) -> ApiResponse:
    """Wrap a successful response in the standard ApiResponse envelope."""
    return ApiResponse(success=True, data=data, count=count)


def fail(status_code: int, error: str, headers: Optional[dict] = None) -> JSONResponse:
    """Build an error response with the ``{success: false, error}`` envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(success=False, error=error).model_dump(exclude_none=True),
        headers=headers,
    )
