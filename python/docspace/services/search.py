"""Search service layer.

Linear-scan keyword search over the loaded document. No index is kept.

Article scoring (additive, higher is better):
- title contains the query: 200 - position of the first title match
- body contains the query: 100 - (position of the first body match // 10)
- query occurs as a whole word in "title body": +10

Matching is case-insensitive substring matching of the raw query; the
query is only trimmed to decide whether it is blank. Ties on score are
broken by updated_at, newest first.

Unified search also matches space names (300 - position) and always lists
every matching space before any matching article.

Key design decisions:
- total counts every match, not just the returned page
- No raw queries logged (only hash for debugging)
"""

import hashlib
import re
import time

from docspace.logging import get_logger
from docspace.schemas.search import (
    ArticleHit,
    ScoredArticle,
    SearchResults,
    SpaceHit,
    UnifiedSearchResults,
)
from docspace.store.client import DocumentStoreBase
from docspace.store.models import Article, Document

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_LIMIT = 20

TITLE_MATCH_BASE = 200
BODY_MATCH_BASE = 100
BODY_POSITION_DIVISOR = 10
WHOLE_WORD_BONUS = 10
SPACE_MATCH_BASE = 300

EXCERPT_FALLBACK_LENGTH = 140
EXCERPT_CONTEXT = 60
ELLIPSIS = "…"

WHITESPACE_RE = re.compile(r"\s+")


# =============================================================================
# Helpers
# =============================================================================


def hash_query(q: str) -> str:
    """Hash a normalized query for logging (privacy-safe).

    Never log raw queries - only the hash for debugging.
    """
    q_normalized = q.strip().lower()
    return hashlib.sha256(q_normalized.encode("utf-8")).hexdigest()[:16]


def is_blank_query(q: str | None) -> bool:
    return not q or not q.strip()


def build_excerpt(text: str, needle: str) -> str:
    """Cut a short excerpt of ``text`` around the first match of ``needle``.

    Args:
        text: Excerpt source.
        needle: Lower-cased query.

    Returns:
        Up to 60 characters either side of the match with whitespace runs
        collapsed, with an ellipsis on each side that was cut. Without a
        match, the first 140 characters (ellipsis if cut).
    """
    idx = text.lower().find(needle)
    if idx == -1:
        if len(text) > EXCERPT_FALLBACK_LENGTH:
            return text[:EXCERPT_FALLBACK_LENGTH] + ELLIPSIS
        return text

    start = max(0, idx - EXCERPT_CONTEXT)
    end = min(len(text), idx + len(needle) + EXCERPT_CONTEXT)
    window = WHITESPACE_RE.sub(" ", text[start:end])
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text) else ""
    return prefix + window + suffix


def score_article(article: Article, needle: str) -> int:
    """Relevance of an article for a lower-cased query (see module docstring)."""
    title = article.title or ""
    body = article.body_markdown or ""
    title_idx = title.lower().find(needle)
    body_idx = body.lower().find(needle)

    score = 0
    if title_idx != -1:
        score += TITLE_MATCH_BASE - title_idx
    if body_idx != -1:
        score += BODY_MATCH_BASE - body_idx // BODY_POSITION_DIVISOR

    word_re = re.compile(r"\b" + re.escape(needle) + r"\b", re.IGNORECASE)
    if word_re.search(f"{title} {body}"):
        score += WHOLE_WORD_BONUS

    return score


def _is_candidate(article: Article, needle: str) -> bool:
    title = (article.title or "").lower()
    body = (article.body_markdown or "").lower()
    return needle in title or needle in body


def rank_articles(
    document: Document, needle: str, space_id: int | None = None
) -> list[ScoredArticle]:
    """Score every matching article and order them best first.

    Args:
        document: Loaded document.
        needle: Lower-cased, non-blank query.
        space_id: Only consider articles of this space when given.

    Returns:
        All matches ordered by score, then updated_at, both descending.
    """
    scored = []
    for article in document.articles:
        if space_id is not None and article.space_id != space_id:
            continue
        if not _is_candidate(article, needle):
            continue

        scored.append(
            ScoredArticle(
                id=article.id,
                slug=article.slug,
                title=article.title,
                parent_slug=article.parent_slug,
                space_id=article.space_id,
                excerpt=build_excerpt(article.body_markdown or article.title, needle),
                score=score_article(article, needle),
                updated_at=article.updated_at,
            )
        )

    return sorted(scored, key=lambda r: (r.score, r.updated_at), reverse=True)


def _page(items: list, limit: int, offset: int) -> list:
    offset = max(offset, 0)
    limit = max(limit, 0)
    return items[offset : offset + limit]


# =============================================================================
# Main Search Functions
# =============================================================================


def search_articles(
    store: DocumentStoreBase,
    q: str | None,
    *,
    space_id: int | None = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
) -> SearchResults:
    """Search article titles and bodies.

    Args:
        store: Document store.
        q: Free-text query. Blank queries match nothing.
        space_id: Restrict to one space when given.
        limit: Page size.
        offset: Number of ranked results to skip.

    Returns:
        The requested page and the total number of matches.
    """
    if is_blank_query(q):
        return SearchResults(total=0, results=[])

    start_time = time.monotonic()
    ranked = rank_articles(store.load(), q.lower(), space_id=space_id)

    logger.info(
        "search_completed",
        query_hash=hash_query(q),
        space_id=space_id,
        total=len(ranked),
        duration_ms=round((time.monotonic() - start_time) * 1000, 2),
    )
    return SearchResults(total=len(ranked), results=_page(ranked, limit, offset))


def search_all(
    store: DocumentStoreBase,
    q: str | None,
    *,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
) -> UnifiedSearchResults:
    """Search space names and articles together.

    Spaces come first (ordered by score), then articles in their article
    search order. Pagination applies to the combined list.
    """
    if is_blank_query(q):
        return UnifiedSearchResults(total=0, results=[])

    start_time = time.monotonic()
    needle = q.lower()
    document = store.load()

    space_hits = []
    for space in document.spaces:
        name_idx = (space.name or "").lower().find(needle)
        if name_idx == -1:
            continue
        space_hits.append(
            SpaceHit(
                id=space.id,
                slug=space.slug,
                name=space.name,
                score=SPACE_MATCH_BASE - name_idx,
            )
        )
    space_hits.sort(key=lambda h: h.score, reverse=True)

    article_hits = [
        ArticleHit(**hit.model_dump()) for hit in rank_articles(document, needle)
    ]

    combined = [*space_hits, *article_hits]

    logger.info(
        "search_all_completed",
        query_hash=hash_query(q),
        spaces=len(space_hits),
        articles=len(article_hits),
        duration_ms=round((time.monotonic() - start_time) * 1000, 2),
    )
    return UnifiedSearchResults(total=len(combined), results=_page(combined, limit, offset))
