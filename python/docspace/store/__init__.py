"""Persistence for the docspace document.

Provides:
- The persisted entities (Space, Article, ArticleVersion, Document)
- DocumentStoreBase and its JSON-file and in-memory implementations
"""

from docspace.store.client import (
    DocumentStoreBase,
    DocumentStoreError,
    InMemoryDocumentStore,
    JsonFileDocumentStore,
    Rollback,
    get_document_store,
)
from docspace.store.models import (
    DEFAULT_SPACE_SLUG,
    Article,
    ArticleVersion,
    Document,
    Space,
    new_document,
    utc_now_iso,
)

__all__ = [
    "DocumentStoreBase",
    "DocumentStoreError",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "Rollback",
    "get_document_store",
    "DEFAULT_SPACE_SLUG",
    "Article",
    "ArticleVersion",
    "Document",
    "Space",
    "new_document",
    "utc_now_iso",
]
