"""Route registration.

The prefix comes from settings, so the router is built per app by
create_api_router() rather than at import time.
"""

from fastapi import APIRouter

from docspace.api.routes.articles import router as articles_router
from docspace.api.routes.health import router as health_router
from docspace.api.routes.spaces import router as spaces_router


def create_api_router(prefix: str = "") -> APIRouter:
    """Create and configure the API router.

    Args:
        prefix: Path prefix for the space and article routes (e.g. "/api").
            The health check is always served at /health.

    Returns:
        Configured APIRouter with all routes registered.
    """
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(spaces_router, prefix=prefix, tags=["spaces"])
    api_router.include_router(articles_router, prefix=prefix, tags=["articles"])
    return api_router


__all__ = ["create_api_router"]
