"""Reject unparseable JSON bodies with the API's own error envelope.

FastAPI would otherwise report a body that is not JSON as a validation
error about the body field. Clients get a clearer 400 E_INVALID_REQUEST
"Malformed JSON body" instead. Bodies that parse are passed through
untouched for normal validation.
"""

import json

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint

from docspace.errors import ApiErrorCode
from docspace.responses import error_response

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _declares_json(request: Request) -> bool:
    return "application/json" in request.headers.get("content-type", "")


async def reject_malformed_json(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """HTTP middleware function; register with ``app.middleware("http")``."""
    if request.method in BODY_METHODS and _declares_json(request):
        body = await request.body()
        if body:
            try:
                json.loads(body)
            except ValueError:
                # Also covers bodies that are not valid UTF-8
                return JSONResponse(
                    status_code=400,
                    content=error_response(ApiErrorCode.E_INVALID_REQUEST, "Malformed JSON body"),
                )
    return await call_next(request)
