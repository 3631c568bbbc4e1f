"""Middleware for the docspace API."""

from docspace.middleware.json_body import reject_malformed_json
from docspace.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware

__all__ = ["RequestIDMiddleware", "REQUEST_ID_HEADER", "reject_malformed_json"]
