"""Article version history and restore.

History is linear and append-only. Restoring never rewrites or removes a
version: restoring v2 of an article at v5 produces v6 with v2's content and
restored_from=2.
"""

from docspace.logging import get_logger
from docspace.services.articles import append_version, find_article
from docspace.store.client import DocumentStoreBase, Rollback
from docspace.store.models import Article, ArticleVersion, utc_now_iso

logger = get_logger(__name__)


def get_versions(store: DocumentStoreBase, article_id: int) -> list[ArticleVersion]:
    """Return every version of an article, newest version number first."""
    document = store.load()
    versions = [v for v in document.article_versions if v.article_id == article_id]
    return sorted(versions, key=lambda v: v.version, reverse=True)


def get_version(store: DocumentStoreBase, article_id: int, version: int) -> ArticleVersion | None:
    """Return one version of an article by version number, or None."""
    document = store.load()
    return next(
        (
            v
            for v in document.article_versions
            if v.article_id == article_id and v.version == version
        ),
        None,
    )


def restore_version(store: DocumentStoreBase, slug: str, version_id: int) -> Article | None:
    """Make an earlier version's content current, as a new version.

    Args:
        store: Document store.
        slug: Slug of the article to restore.
        version_id: Row id of the version to restore. Must belong to the
            same article.

    Returns:
        The restored article, or None if the article or a matching version
        row does not exist.
    """
    now = utc_now_iso()

    article = source = None
    with store.transaction() as document:
        article = find_article(document, slug)
        if article is None:
            raise Rollback

        source = next(
            (
                v
                for v in document.article_versions
                if v.id == version_id and v.article_id == article.id
            ),
            None,
        )
        if source is None:
            raise Rollback

        article.title = source.title
        article.body_markdown = source.body_markdown
        article.updated_at = now
        article.current_version += 1
        append_version(document, article, created_at=now, restored_from=source.version)

    if source is None:
        return None

    logger.info(
        "article_restored",
        article_id=article.id,
        restored_from=source.version,
        version=article.current_version,
    )
    return article
