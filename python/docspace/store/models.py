"""Entities persisted in the JSON document.

The document holds three collections:
- spaces: top-level containers; a default space always exists
- articles: markdown pages, each owned by one space
- articleVersions: append-only snapshots of article content

Normalization of older documents happens during validation, so every
Document instance already satisfies the invariants below:
- at least one space exists
- a null or non-list collection is treated as empty
- every space has a home_page_slug, None when unset or empty
- every article has a space_id (defaults to the first space)
- every article has a current_version (defaults to 1)
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import Field, model_validator

from docspace.schemas.base import CamelModel

DEFAULT_SPACE_ID = 1
DEFAULT_SPACE_SLUG = "default"
DEFAULT_SPACE_NAME = "Default Space"

# Collection keys as they may appear in raw input, by alias or field name
COLLECTION_KEYS = ("articles", "spaces", "articleVersions", "article_versions")


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix.

    Fixed width, so lexical comparison of two values matches chronological order.
    """
    now = datetime.now(UTC)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class Space(CamelModel):
    id: int
    slug: str
    name: str
    home_page_slug: str | None = None
    created_at: str


class Article(CamelModel):
    id: int
    slug: str
    title: str
    body_markdown: str = ""
    parent_slug: str | None = None
    space_id: int | None = None
    created_at: str
    updated_at: str
    current_version: int = Field(default=1, ge=1)


class ArticleVersion(CamelModel):
    id: int
    article_id: int
    version: int = Field(ge=1)
    title: str
    body_markdown: str = ""
    created_at: str
    restored_from: int | None = None


class Document(CamelModel):
    """The whole persisted database."""

    articles: list[Article] = Field(default_factory=list)
    spaces: list[Space] = Field(default_factory=list)
    article_versions: list[ArticleVersion] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def reset_malformed_collections(cls, data: Any) -> Any:
        """Replace a null or non-list collection with an empty one.

        Only the malformed collection is reset; the rest of the document is kept.
        """
        if not isinstance(data, dict):
            return data

        data = dict(data)
        for key in COLLECTION_KEYS:
            if key in data and not isinstance(data[key], list):
                data[key] = []
        return data

    @model_validator(mode="after")
    def normalize(self) -> "Document":
        """Bring older documents up to the current shape."""
        if not self.spaces:
            self.spaces = [default_space()]

        for space in self.spaces:
            if not space.home_page_slug:
                space.home_page_slug = None

        fallback_space_id = self.spaces[0].id
        for article in self.articles:
            # 0 is never a valid id
            if not article.space_id:
                article.space_id = fallback_space_id

        return self


def default_space() -> Space:
    """Build the undeletable default space."""
    return Space(
        id=DEFAULT_SPACE_ID,
        slug=DEFAULT_SPACE_SLUG,
        name=DEFAULT_SPACE_NAME,
        home_page_slug=None,
        created_at=utc_now_iso(),
    )


def new_document() -> Document:
    """Build the document used for a fresh or unreadable store."""
    return Document(articles=[], spaces=[default_space()], article_versions=[])


def next_id(rows: list) -> int:
    """Return max(existing id) + 1, or 1 for an empty collection."""
    return max((row.id for row in rows), default=0) + 1
