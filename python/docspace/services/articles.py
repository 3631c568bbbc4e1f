"""Article service layer.

Articles are markdown pages owned by a space. Every content mutation keeps
the version lineage in step:
- create writes the article and its version 1 in one transaction
- update bumps current_version and appends a snapshot of the new content

Absence is reported by returning None (or False for delete), and a
mutation whose target is missing leaves the store untouched.
"""

from docspace.logging import get_logger
from docspace.schemas.article import UpdateArticleRequest
from docspace.services.slugs import unique_slug
from docspace.store.client import DocumentStoreBase, Rollback
from docspace.store.models import Article, ArticleVersion, Document, next_id, utc_now_iso

logger = get_logger(__name__)

SLUG_FALLBACK = "article"


def find_article(document: Document, slug: str) -> Article | None:
    """Return the article with this slug from an already loaded document."""
    return next((a for a in document.articles if a.slug == slug), None)


def append_version(
    document: Document,
    article: Article,
    *,
    created_at: str,
    restored_from: int | None = None,
) -> ArticleVersion:
    """Snapshot the article's current title/body as version ``current_version``."""
    version = ArticleVersion(
        id=next_id(document.article_versions),
        article_id=article.id,
        version=article.current_version,
        title=article.title,
        body_markdown=article.body_markdown,
        created_at=created_at,
        restored_from=restored_from,
    )
    document.article_versions.append(version)
    return version


def next_article_id(document: Document) -> int:
    """Next article id, never reusing an id still referenced by a version row.

    Deleting an article keeps its versions, so a plain max(article ids) + 1
    could hand a new article the history of a deleted one.
    """
    used = [a.id for a in document.articles] + [v.article_id for v in document.article_versions]
    return max(used, default=0) + 1


def get_article(store: DocumentStoreBase, slug: str) -> Article | None:
    """Return the article with exactly this slug, or None."""
    return find_article(store.load(), slug)


def create_article(
    store: DocumentStoreBase,
    *,
    title: str,
    slug: str | None = None,
    body_markdown: str | None = None,
    parent_slug: str | None = None,
    space_id: int | None = None,
    created_at: str | None = None,
    updated_at: str | None = None,
) -> Article:
    """Create an article and its initial version.

    Args:
        store: Document store.
        title: Article title.
        slug: Explicit slug. When None, one is derived from ``title`` against
            every article slug in the same transaction, with -1, -2, ... on
            collision. Slugs are unique across all spaces.
        body_markdown: Markdown body (empty when None).
        parent_slug: Slug of the parent article. Not validated.
        space_id: Owning space; the first space when None.
        created_at: Creation timestamp (now when None).
        updated_at: Last-update timestamp (created_at when None).

    Returns:
        The created article with current_version 1.
    """
    created_at = created_at or utc_now_iso()

    with store.transaction() as document:
        if slug is None:
            taken = {a.slug for a in document.articles}
            slug = unique_slug(title, taken.__contains__, SLUG_FALLBACK)

        article = Article(
            id=next_article_id(document),
            slug=slug,
            title=title,
            body_markdown=body_markdown or "",
            parent_slug=parent_slug,
            space_id=space_id if space_id is not None else document.spaces[0].id,
            created_at=created_at,
            updated_at=updated_at or created_at,
            current_version=1,
        )
        document.articles.append(article)
        append_version(document, article, created_at=created_at)

    logger.info("article_created", article_id=article.id, slug=slug, space_id=article.space_id)
    return article


def update_article(
    store: DocumentStoreBase, slug: str, patch: UpdateArticleRequest
) -> Article | None:
    """Apply the fields present in ``patch`` and record a new version.

    A new version is appended even when the patch is empty.

    Returns:
        The updated article, or None if no article has this slug.
    """
    now = utc_now_iso()
    fields = patch.model_fields_set

    article = None
    with store.transaction() as document:
        article = find_article(document, slug)
        if article is None:
            raise Rollback

        if "title" in fields:
            article.title = patch.title
        if "body_markdown" in fields:
            article.body_markdown = patch.body_markdown
        if "parent_slug" in fields:
            article.parent_slug = patch.parent_slug

        article.updated_at = now
        article.current_version += 1
        append_version(document, article, created_at=now)

    if article is None:
        return None

    logger.info(
        "article_updated",
        article_id=article.id,
        version=article.current_version,
        fields=sorted(fields),
    )
    return article


def delete_article(store: DocumentStoreBase, slug: str) -> bool:
    """Delete an article row. Its versions are left in place.

    Returns:
        True if an article was removed.
    """
    article = None
    with store.transaction() as document:
        article = find_article(document, slug)
        if article is None:
            raise Rollback

        document.articles = [a for a in document.articles if a.id != article.id]

    if article is None:
        return False

    logger.info("article_deleted", article_id=article.id, slug=slug)
    return True


def list_articles(store: DocumentStoreBase, space_id: int | None = None) -> list[Article]:
    """Return articles, most recently updated first.

    Args:
        store: Document store.
        space_id: Only articles of this space when given.
    """
    document = store.load()
    articles = document.articles
    if space_id is not None:
        articles = [a for a in articles if a.space_id == space_id]
    return sorted(articles, key=lambda a: a.updated_at, reverse=True)
