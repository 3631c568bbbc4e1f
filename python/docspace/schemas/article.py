"""Article-related Pydantic schemas.

Contains request and response models for article and version endpoints.
"""

from pydantic import Field, model_validator

from docspace.schemas.base import CamelModel

__all__ = [
    "CreateArticleRequest",
    "UpdateArticleRequest",
    "RestoreVersionRequest",
    "ArticleSummaryOut",
]

# =============================================================================
# Request Schemas
# =============================================================================


class CreateArticleRequest(CamelModel):
    """Request body for creating an article. The slug is derived from the title."""

    title: str = Field(..., min_length=1)
    body_markdown: str | None = None
    parent_slug: str | None = None
    space_id: int | None = Field(default=None, description="Owning space (first space if omitted)")


class UpdateArticleRequest(CamelModel):
    """Partial update of an article.

    Only fields present in the body are applied (see ``model_fields_set``).
    ``parentSlug`` may be sent as null to detach the article from its parent;
    ``title`` and ``bodyMarkdown`` may be omitted but not null.
    """

    title: str | None = Field(default=None, min_length=1)
    body_markdown: str | None = None
    parent_slug: str | None = None

    @model_validator(mode="after")
    def reject_null_content(self) -> "UpdateArticleRequest":
        for field in ("title", "body_markdown"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} may not be null")
        return self


class RestoreVersionRequest(CamelModel):
    """Request body for restoring an article to an earlier version."""

    version_id: int = Field(..., description="Row id of the version to restore")


# =============================================================================
# Response Schemas
# =============================================================================


class ArticleSummaryOut(CamelModel):
    """Article listing row. Excludes the body so listings stay small."""

    id: int
    slug: str
    title: str
    created_at: str
    updated_at: str
    parent_slug: str | None = None
