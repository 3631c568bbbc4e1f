"""Space service layer.

Spaces group articles. Every function takes the document store and performs
at most one load/mutate/save cycle, and saves nothing when the target is
missing. Absence is reported by returning None (or False for delete);
translating that into HTTP errors is the caller's job.

Deleting a space deletes its articles and their versions. Content is never
moved into another space.
"""

from docspace.logging import get_logger
from docspace.schemas.space import UpdateSpaceRequest
from docspace.services.slugs import unique_slug
from docspace.store.client import DocumentStoreBase, Rollback
from docspace.store.models import Document, Space, next_id, utc_now_iso

logger = get_logger(__name__)

SLUG_FALLBACK = "space"


def find_space(document: Document, slug: str) -> Space | None:
    """Return the space with this slug from an already loaded document."""
    return next((s for s in document.spaces if s.slug == slug), None)


def list_spaces(store: DocumentStoreBase) -> list[Space]:
    """Return all spaces ordered by name, case-insensitively."""
    document = store.load()
    return sorted(document.spaces, key=lambda s: s.name.casefold())


def get_space(store: DocumentStoreBase, slug: str) -> Space | None:
    """Return the space with exactly this slug, or None."""
    return find_space(store.load(), slug)


def get_space_by_id(store: DocumentStoreBase, space_id: int) -> Space | None:
    """Return the space with this id, or None."""
    document = store.load()
    return next((s for s in document.spaces if s.id == space_id), None)


def create_space(store: DocumentStoreBase, *, name: str, slug: str | None = None) -> Space:
    """Create a space.

    Args:
        store: Document store.
        name: Display name.
        slug: Explicit slug. When None, one is derived from ``name`` against
            the slugs in the same transaction, with -1, -2, ... on collision.

    Returns:
        The created space with a fresh id and no home page.
    """
    with store.transaction() as document:
        if slug is None:
            taken = {s.slug for s in document.spaces}
            slug = unique_slug(name, taken.__contains__, SLUG_FALLBACK)

        space = Space(
            id=next_id(document.spaces),
            slug=slug,
            name=name,
            home_page_slug=None,
            created_at=utc_now_iso(),
        )
        document.spaces.append(space)

    logger.info("space_created", space_id=space.id, slug=slug)
    return space


def update_space(store: DocumentStoreBase, slug: str, patch: UpdateSpaceRequest) -> Space | None:
    """Apply the fields present in ``patch`` to a space.

    Returns:
        The updated space, or None if no space has this slug.
    """
    space = None
    with store.transaction() as document:
        space = find_space(document, slug)
        if space is None:
            raise Rollback

        if "name" in patch.model_fields_set:
            space.name = patch.name
        if "home_page_slug" in patch.model_fields_set:
            space.home_page_slug = patch.home_page_slug

    if space is None:
        return None

    logger.info("space_updated", space_id=space.id, fields=sorted(patch.model_fields_set))
    return space


def delete_space(store: DocumentStoreBase, slug: str) -> bool:
    """Delete a space together with its articles and their versions.

    Does not protect the default space; callers must refuse that slug.

    Returns:
        True if a space was removed, False if no space has this slug.
    """
    space = None
    with store.transaction() as document:
        space = find_space(document, slug)
        if space is None:
            raise Rollback

        document.spaces = [s for s in document.spaces if s.id != space.id]

        deleted_article_ids = {a.id for a in document.articles if a.space_id == space.id}
        document.articles = [a for a in document.articles if a.space_id != space.id]

        versions_before = len(document.article_versions)
        document.article_versions = [
            v for v in document.article_versions if v.article_id not in deleted_article_ids
        ]
        deleted_versions = versions_before - len(document.article_versions)

    if space is None:
        return False

    logger.info(
        "space_deleted",
        space_id=space.id,
        slug=slug,
        deleted_articles=len(deleted_article_ids),
        deleted_versions=deleted_versions,
    )
    return True
