"""Request correlation and access logging.

Every request is tagged with an ID before any other middleware runs:
the caller's X-Request-ID when it is acceptable, otherwise a new UUID4.
The ID is
- stored on request.state.request_id
- bound into the logging context (with path and method)
- echoed back in the X-Request-ID response header
- quoted in error envelopes

Acceptable caller IDs are at most 128 bytes of letters, digits, ".", "-"
and "_". UUIDs are lower-cased so one request has one spelling in the logs.
"""

import re
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from docspace.logging import clear_request_context, get_logger, set_request_context

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_BYTES = 128

REQUEST_ID_CHARS_RE = re.compile(r"[A-Za-z0-9._-]+")
UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)

logger = get_logger(__name__)


def is_valid_uuid(value: str) -> bool:
    return UUID_RE.fullmatch(value) is not None


def is_valid_request_id(value: str) -> bool:
    """Whether a caller-supplied ID may be reused as-is."""
    if len(value.encode("utf-8")) > MAX_REQUEST_ID_BYTES:
        return False
    return REQUEST_ID_CHARS_RE.fullmatch(value) is not None


def normalize_request_id(value: str) -> str:
    """Lower-case UUIDs; keep any other valid ID as-is."""
    return value.lower() if is_valid_uuid(value) else value


def resolve_request_id(incoming: str | None) -> str:
    """Choose the ID for a request from its (possibly missing) header value."""
    if incoming and is_valid_request_id(incoming):
        return normalize_request_id(incoming)
    return str(uuid.uuid4())


def _elapsed_ms(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 2)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag requests with an ID and emit one ``request_completed`` entry each.

    Args:
        app: The ASGI application.
        log_requests: Whether to write the access log entry.
    """

    def __init__(self, app, log_requests: bool = True):
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.monotonic()
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        request.state.request_id = request_id
        set_request_context(request_id, path=request.url.path, method=request.method)

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id

            if self.log_requests:
                logger.info(
                    "request_completed",
                    status_code=response.status_code,
                    duration_ms=_elapsed_ms(started),
                )
            return response

        except Exception:
            # The app's unhandled-exception handler renders the 500
            logger.exception("request_failed", duration_ms=_elapsed_ms(started))
            raise

        finally:
            clear_request_context()
