"""Space routes.

Routes are transport-only:
- Validate the request body
- Call service functions
- Return success_response(...) or raise ApiError

Services report missing rows as None/False; routes turn that into 404s.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from docspace.api.deps import get_store
from docspace.errors import ApiErrorCode, InvalidRequestError, SpaceNotFoundError
from docspace.responses import success_response
from docspace.schemas.article import ArticleSummaryOut
from docspace.schemas.space import CreateSpaceRequest, UpdateSpaceRequest
from docspace.services import articles as articles_service
from docspace.services import spaces as spaces_service
from docspace.store.client import DocumentStoreBase
from docspace.store.models import DEFAULT_SPACE_SLUG

router = APIRouter()


@router.get("/spaces")
def list_spaces(store: Annotated[DocumentStoreBase, Depends(get_store)]) -> dict:
    """List all spaces ordered by name (case-insensitive)."""
    result = spaces_service.list_spaces(store)
    return success_response([space.to_json() for space in result])


@router.post("/spaces", status_code=201)
def create_space(
    body: CreateSpaceRequest,
    store: Annotated[DocumentStoreBase, Depends(get_store)],
) -> dict:
    """Create a space.

    The slug is derived from the name; -1, -2, ... is appended on collision.
    """
    name = body.name.strip()
    if not name:
        raise InvalidRequestError(ApiErrorCode.E_NAME_INVALID, "Name must not be blank")

    result = spaces_service.create_space(store, name=name)
    return success_response(result.to_json())


@router.get("/spaces/{slug}")
def get_space(slug: str, store: Annotated[DocumentStoreBase, Depends(get_store)]) -> dict:
    """Get a single space by slug."""
    result = spaces_service.get_space(store, slug)
    if result is None:
        raise SpaceNotFoundError()
    return success_response(result.to_json())


@router.put("/spaces/{slug}")
def update_space(
    slug: str,
    body: UpdateSpaceRequest,
    store: Annotated[DocumentStoreBase, Depends(get_store)],
) -> dict:
    """Rename a space and/or set its home page. Omitted fields are unchanged.

    The name is stored with surrounding whitespace removed.
    """
    if body.name is not None:
        name = body.name.strip()
        if not name:
            raise InvalidRequestError(ApiErrorCode.E_NAME_INVALID, "Name must not be blank")
        body = body.model_copy(update={"name": name})

    result = spaces_service.update_space(store, slug, body)
    if result is None:
        raise SpaceNotFoundError()
    return success_response(result.to_json())


@router.delete("/spaces/{slug}")
def delete_space(slug: str, store: Annotated[DocumentStoreBase, Depends(get_store)]) -> dict:
    """Delete a space with all of its articles and their versions.

    The default space can never be deleted.
    """
    if slug == DEFAULT_SPACE_SLUG:
        raise InvalidRequestError(
            ApiErrorCode.E_DEFAULT_SPACE_FORBIDDEN, "Cannot delete default space"
        )

    if not spaces_service.delete_space(store, slug):
        raise SpaceNotFoundError()
    return success_response({"success": True})


@router.get("/spaces/{slug}/articles")
def list_space_articles(
    slug: str, store: Annotated[DocumentStoreBase, Depends(get_store)]
) -> dict:
    """List a space's articles, most recently updated first. Bodies are omitted."""
    space = spaces_service.get_space(store, slug)
    if space is None:
        raise SpaceNotFoundError()

    result = articles_service.list_articles(store, space.id)
    return success_response(
        [ArticleSummaryOut.model_validate(a, from_attributes=True).to_json() for a in result]
    )
