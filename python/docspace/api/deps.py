"""FastAPI dependencies for route handlers."""

from fastapi import Request

from docspace.config import Settings
from docspace.store.client import DocumentStoreBase

__all__ = ["get_app_settings", "get_store"]


def get_store(request: Request) -> DocumentStoreBase:
    """Get the shared document store from app state.

    The store is created (or injected) once in create_app().

    Args:
        request: The incoming request (provides access to app.state)

    Returns:
        The application's DocumentStoreBase.
    """
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Get the settings the app was created with."""
    return request.app.state.settings
