"""Article, version and search routes.

Routes are transport-only:
- Validate the request body and query parameters
- Call service functions
- Return success_response(...) or raise ApiError

IMPORTANT: Static routes (/articles/search, /articles/search-all) must be
registered BEFORE the dynamic /articles/{slug} route so the slug parameter
does not capture them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from docspace.api.deps import get_app_settings, get_store
from docspace.config import Settings
from docspace.errors import (
    ApiErrorCode,
    ArticleNotFoundError,
    InvalidRequestError,
    SpaceNotFoundError,
    VersionNotFoundError,
)
from docspace.responses import success_response
from docspace.schemas.article import (
    ArticleSummaryOut,
    CreateArticleRequest,
    RestoreVersionRequest,
    UpdateArticleRequest,
)
from docspace.services import articles as articles_service
from docspace.services import search as search_service
from docspace.services import spaces as spaces_service
from docspace.services import versions as versions_service
from docspace.store.client import DocumentStoreBase
from docspace.store.models import Article

router = APIRouter()


def _get_article_or_404(store: DocumentStoreBase, slug: str) -> Article:
    article = articles_service.get_article(store, slug)
    if article is None:
        raise ArticleNotFoundError()
    return article


def _clamp_page(settings: Settings, limit: int | None, offset: int) -> tuple[int, int]:
    """Clamp limit to [0, SEARCH_MAX_LIMIT] and offset to >= 0."""
    if limit is None:
        limit = settings.search_default_limit
    return min(max(limit, 0), settings.search_max_limit), max(offset, 0)


# =============================================================================
# Static routes (MUST be before /articles/{slug})
# =============================================================================


@router.get("/articles")
def list_articles(store: Annotated[DocumentStoreBase, Depends(get_store)]) -> dict:
    """List all articles, most recently updated first. Bodies are omitted."""
    result = articles_service.list_articles(store)
    return success_response(
        [ArticleSummaryOut.model_validate(a, from_attributes=True).to_json() for a in result]
    )


@router.post("/articles", status_code=201)
def create_article(
    body: CreateArticleRequest,
    store: Annotated[DocumentStoreBase, Depends(get_store)],
) -> dict:
    """Create an article and its first version.

    The slug is derived from the title; -1, -2, ... is appended on collision.
    Slugs are unique across all spaces.
    """
    if not body.title.strip():
        raise InvalidRequestError(ApiErrorCode.E_TITLE_INVALID, "Title must not be blank")

    if body.space_id is not None and spaces_service.get_space_by_id(store, body.space_id) is None:
        raise SpaceNotFoundError()

    result = articles_service.create_article(
        store,
        title=body.title,
        body_markdown=body.body_markdown,
        parent_slug=body.parent_slug,
        space_id=body.space_id,
    )
    return success_response(result.to_json())


@router.get("/articles/search")
def search_articles(
    store: Annotated[DocumentStoreBase, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    q: str = Query(default="", description="Search query string"),
    space: str | None = Query(default=None, description="Space slug to search within"),
    limit: int | None = Query(default=None, description="Page size (clamped to 0..max)"),
    offset: int = Query(default=0, description="Results to skip (clamped to >= 0)"),
) -> dict:
    """Search article titles and bodies.

    An unknown ``space`` slug is ignored and the search runs across all spaces.
    Blank queries return no results.
    """
    limit, offset = _clamp_page(settings, limit, offset)

    space_id = None
    if space:
        scope = spaces_service.get_space(store, space)
        if scope is not None:
            space_id = scope.id

    result = search_service.search_articles(
        store, q, space_id=space_id, limit=limit, offset=offset
    )
    return success_response(
        {
            "q": q,
            "total": result.total,
            "limit": limit,
            "offset": offset,
            "results": [r.to_json() for r in result.results],
        }
    )


@router.get("/articles/search-all")
def search_all(
    store: Annotated[DocumentStoreBase, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    q: str = Query(default="", description="Search query string"),
    limit: int | None = Query(default=None, description="Page size (clamped to 0..max)"),
    offset: int = Query(default=0, description="Results to skip (clamped to >= 0)"),
) -> dict:
    """Search space names and articles together. Spaces are listed first."""
    limit, offset = _clamp_page(settings, limit, offset)

    result = search_service.search_all(store, q, limit=limit, offset=offset)
    return success_response(
        {
            "q": q,
            "total": result.total,
            "limit": limit,
            "offset": offset,
            "results": [r.to_json() for r in result.results],
        }
    )


# =============================================================================
# Dynamic routes
# =============================================================================


@router.get("/articles/{slug}")
def get_article(slug: str, store: Annotated[DocumentStoreBase, Depends(get_store)]) -> dict:
    """Get a full article, body included."""
    return success_response(_get_article_or_404(store, slug).to_json())


@router.put("/articles/{slug}")
def update_article(
    slug: str,
    body: UpdateArticleRequest,
    store: Annotated[DocumentStoreBase, Depends(get_store)],
) -> dict:
    """Update an article and record a new version. Omitted fields are unchanged."""
    if body.title is not None and not body.title.strip():
        raise InvalidRequestError(ApiErrorCode.E_TITLE_INVALID, "Title must not be blank")

    result = articles_service.update_article(store, slug, body)
    if result is None:
        raise ArticleNotFoundError()
    return success_response(result.to_json())


@router.delete("/articles/{slug}")
def delete_article(slug: str, store: Annotated[DocumentStoreBase, Depends(get_store)]) -> dict:
    """Delete an article."""
    if not articles_service.delete_article(store, slug):
        raise ArticleNotFoundError()
    return success_response({"success": True})


# ---- Versions ----


@router.get("/articles/{slug}/versions")
def list_versions(slug: str, store: Annotated[DocumentStoreBase, Depends(get_store)]) -> dict:
    """List an article's versions, newest first."""
    article = _get_article_or_404(store, slug)
    result = versions_service.get_versions(store, article.id)
    return success_response([v.to_json() for v in result])


@router.get("/articles/{slug}/versions/{version}")
def get_version(
    slug: str,
    version: int,
    store: Annotated[DocumentStoreBase, Depends(get_store)],
) -> dict:
    """Get one version of an article by version number."""
    article = _get_article_or_404(store, slug)
    result = versions_service.get_version(store, article.id, version)
    if result is None:
        raise VersionNotFoundError()
    return success_response(result.to_json())


@router.post("/articles/{slug}/restore")
def restore_version(
    slug: str,
    body: RestoreVersionRequest,
    store: Annotated[DocumentStoreBase, Depends(get_store)],
) -> dict:
    """Restore an earlier version's content as a new version.

    ``versionId`` is the version row id, which must belong to this article.
    """
    _get_article_or_404(store, slug)

    result = versions_service.restore_version(store, slug, body.version_id)
    if result is None:
        raise VersionNotFoundError()
    return success_response(result.to_json())
