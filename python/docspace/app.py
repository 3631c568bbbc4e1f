"""Application factory for the docspace API.

create_app() wires together:
- settings (injected, or read from the environment)
- the document store (injected, or a JSON file at DOCSPACE_DATA_PATH),
  kept on app.state.store and shared by every request
- error handlers that turn every failure into an error envelope
- the malformed-JSON guard, CORS, and the routers

Starlette runs middleware in reverse registration order. The request-id
middleware therefore goes on last, via add_request_id_middleware(), so it
wraps CORS preflights and error responses too.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from docspace import __version__
from docspace.api.routes import create_api_router
from docspace.config import Settings, get_settings
from docspace.errors import ApiError
from docspace.logging import configure_logging, get_logger
from docspace.middleware.json_body import reject_malformed_json
from docspace.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from docspace.responses import (
    api_error_handler,
    document_store_error_handler,
    http_exception_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from docspace.store.client import DocumentStoreBase, DocumentStoreError, get_document_store

logger = get_logger(__name__)


def create_app(
    store: DocumentStoreBase | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        store: Document store to serve from. Tests pass an in-memory store;
            by default a JsonFileDocumentStore at settings.data_path.
        settings: Settings to use instead of get_settings().

    Returns:
        The app, without request-id middleware (see add_request_id_middleware).
    """
    settings = settings or get_settings()
    configure_logging(json_format=settings.log_json, level=settings.log_level)

    app = FastAPI(
        title="docspace API",
        description="Spaces, articles, version history and search over a JSON document",
        version=__version__,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else get_document_store(settings.data_path)

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DocumentStoreError, document_store_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.middleware("http")(reject_malformed_json)
    app.include_router(create_api_router(prefix=settings.api_prefix))

    origins = settings.cors_origin_list
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=[REQUEST_ID_HEADER],
        )

    logger.info(
        "app_created",
        env=settings.docspace_env.value,
        store=type(app.state.store).__name__,
        api_prefix=settings.api_prefix or "/",
    )
    return app


def add_request_id_middleware(app: FastAPI, log_requests: bool = True) -> None:
    """Install RequestIDMiddleware as the outermost middleware.

    Call after create_app() has added everything else.
    """
    app.add_middleware(RequestIDMiddleware, log_requests=log_requests)
