"""Search Pydantic schemas.

Article search returns ScoredArticle rows. Unified search mixes two typed
result kinds, told apart by ``type``:
- space (name matches)
- article (title/body matches)
"""

from typing import Annotated, Literal

from pydantic import Field

from docspace.schemas.base import CamelModel


class ScoredArticle(CamelModel):
    """A matching article with its relevance score and excerpt."""

    id: int
    slug: str
    title: str
    parent_slug: str | None = None
    space_id: int | None = None
    excerpt: str
    score: int
    updated_at: str


class ArticleHit(ScoredArticle):
    """Article result in unified search."""

    type: Literal["article"] = "article"


class SpaceHit(CamelModel):
    """Space result in unified search."""

    type: Literal["space"] = "space"
    id: int
    slug: str
    name: str
    score: int


UnifiedHit = Annotated[SpaceHit | ArticleHit, Field(discriminator="type")]


class SearchResults(CamelModel):
    """One page of article results plus the count of every match."""

    total: int = 0
    results: list[ScoredArticle] = Field(default_factory=list)


class UnifiedSearchResults(CamelModel):
    """One page of space and article results plus the count of every match."""

    total: int = 0
    results: list[UnifiedHit] = Field(default_factory=list)
