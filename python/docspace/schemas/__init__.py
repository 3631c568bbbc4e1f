"""Pydantic schemas for request/response models.

All schemas are re-exported here for convenient imports.
"""

from docspace.schemas.article import (
    ArticleSummaryOut,
    CreateArticleRequest,
    RestoreVersionRequest,
    UpdateArticleRequest,
)
from docspace.schemas.base import CamelModel
from docspace.schemas.search import (
    ArticleHit,
    ScoredArticle,
    SearchResults,
    SpaceHit,
    UnifiedSearchResults,
)
from docspace.schemas.space import CreateSpaceRequest, UpdateSpaceRequest

__all__ = [
    "CamelModel",
    "ArticleSummaryOut",
    "CreateArticleRequest",
    "RestoreVersionRequest",
    "UpdateArticleRequest",
    "ArticleHit",
    "ScoredArticle",
    "SearchResults",
    "SpaceHit",
    "UnifiedSearchResults",
    "CreateSpaceRequest",
    "UpdateSpaceRequest",
]
