"""API response envelope helpers and exception handlers.

Every response body is one of two envelopes:
- Success: { "data": ... }
- Error: { "error": { "code": "E_...", "message": "...", "request_id": "..." } }

request_id is filled from the logging context when the request-id
middleware is installed, so clients can quote it when reporting problems.

Handlers registered by create_app():
- ApiError -> its own status and code
- RequestValidationError -> 400 E_INVALID_REQUEST
- Starlette HTTPException (unknown route, wrong method) -> mapped code
- DocumentStoreError -> 500 E_STORAGE_ERROR
- anything else -> 500 E_INTERNAL
"""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docspace.errors import ApiError, ApiErrorCode
from docspace.logging import get_logger, get_request_id
from docspace.store.client import DocumentStoreError

logger = get_logger(__name__)

HTTP_STATUS_TO_CODE: dict[int, ApiErrorCode] = {
    400: ApiErrorCode.E_INVALID_REQUEST,
    404: ApiErrorCode.E_NOT_FOUND,
    405: ApiErrorCode.E_INVALID_REQUEST,
    422: ApiErrorCode.E_INVALID_REQUEST,
}


def success_response(data: Any) -> dict[str, Any]:
    """Wrap ``data`` in the success envelope."""
    return {"data": data}


def error_response(
    code: ApiErrorCode, message: str, request_id: str | None = None
) -> dict[str, Any]:
    """Create an error response envelope.

    Args:
        code: The error code enum value.
        message: Human-readable error message.
        request_id: Request ID for correlation (taken from the logging
            context when None; omitted when there is none).

    Returns:
        Dict with "error" key containing code, message, and request_id.
    """
    if request_id is None:
        request_id = get_request_id()

    error = {"code": code.value, "message": message}
    if request_id:
        error["request_id"] = request_id

    return {"error": error}


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.code, exc.message),
    )


async def http_exception_handler(request: Request, exc: Any) -> JSONResponse:
    """Render framework-level HTTP errors (unknown routes, bad methods) as envelopes."""
    code = HTTP_STATUS_TO_CODE.get(exc.status_code, ApiErrorCode.E_INTERNAL)
    message = str(exc.detail) if exc.detail else "An error occurred"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(code, message),
    )


async def document_store_error_handler(
    request: Request, exc: DocumentStoreError
) -> JSONResponse:
    """Report unreadable or unwritable storage as 500 E_STORAGE_ERROR.

    The file path and OS error stay in the server log.
    """
    logger.error("document_store_error", error=exc.message)

    return JSONResponse(
        status_code=500,
        content=error_response(ApiErrorCode.E_STORAGE_ERROR, "Document store unavailable"),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report schema violations as 400 E_INVALID_REQUEST, naming the first bad field."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location}: {first.get('msg', 'invalid')}"

    return JSONResponse(
        status_code=400,
        content=error_response(ApiErrorCode.E_INVALID_REQUEST, message),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions and return 500 with E_INTERNAL.

    Logs the exception server-side but never leaks details to client.
    """
    logger.exception("unhandled_exception", error_type=type(exc).__name__)

    return JSONResponse(
        status_code=500,
        content=error_response(ApiErrorCode.E_INTERNAL, "Internal server error"),
    )
