"""Document store abstraction.

The whole database is one Document. Every mutation is a single
load -> mutate -> save cycle through ``transaction()``:

    with store.transaction() as document:
        document.spaces.append(space)
    # Saved if no exception escaped the block

    with store.transaction() as document:
        space = find_space(document, slug)
        if space is None:
            raise Rollback  # Leaves the block; nothing is saved
        space.name = name

Implementations:
- JsonFileDocumentStore: the document lives in one JSON file on disk
- InMemoryDocumentStore: no file, for tests and throwaway instances

Mutations inside one process are serialized by a per-store lock.
Reads (plain ``load()``) do not take the lock. Separate processes sharing
one file are not coordinated.

I/O failures surface as DocumentStoreError; the API maps them to 500
E_STORAGE_ERROR.
"""

import json
import os
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from docspace.logging import get_logger
from docspace.store.models import Document, new_document

logger = get_logger(__name__)


class DocumentStoreError(Exception):
    """The backing storage could not be read or written."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Rollback(Exception):
    """Raised inside a transaction block to leave without saving."""


class DocumentStoreBase(ABC):
    """Abstract base class for document store implementations."""

    def __init__(self) -> None:
        self._write_lock = threading.Lock()

    @abstractmethod
    def load(self) -> Document:
        """Load and normalize the whole document.

        Returns:
            A Document the caller may mutate freely. Changes are not
            persisted until passed to save().

        Raises:
            DocumentStoreError: If the backing storage cannot be read.
        """
        ...

    @abstractmethod
    def save(self, document: Document) -> None:
        """Replace the persisted document with ``document``.

        Raises:
            DocumentStoreError: If the backing storage cannot be written.
        """
        ...

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """Load the document, yield it for mutation, then save it.

        The document is saved only when the block exits normally. Raising
        Rollback ends the block quietly without saving; any other exception
        propagates and nothing is saved either.
        Transactions must not be nested.
        """
        with self._write_lock:
            document = self.load()
            try:
                yield document
            except Rollback:
                return
            self.save(document)


def _dump(document: Document) -> dict[str, Any]:
    return document.model_dump(mode="json", by_alias=True)


class JsonFileDocumentStore(DocumentStoreBase):
    """Store backed by a single JSON file.

    A missing file is created with the default document. A file that is not
    valid JSON, or does not validate as a Document, is logged and replaced by
    the default document; its previous content is lost.
    """

    def __init__(self, path: Path | str):
        super().__init__()
        self.path = Path(path)

    def load(self) -> Document:
        if not self.path.exists():
            document = new_document()
            self.save(document)
            logger.info("document_store_initialized", path=str(self.path))
            return document

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return Document.model_validate(raw)
        except OSError as e:
            raise DocumentStoreError(f"Failed to read {self.path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            logger.error(
                "document_store_corrupt",
                path=str(self.path),
                error_type=type(e).__name__,
                error=str(e),
            )
            document = new_document()
            self.save(document)
            return document

    def save(self, document: Document) -> None:
        payload = json.dumps(_dump(document), indent=2, ensure_ascii=False)

        # Write beside the target and swap it in, so readers never see a partial file.
        # The first load of a missing file saves outside the lock, so the temp name
        # is per thread.
        tmp_path = self.path.with_name(f"{self.path.name}.{threading.get_ident()}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise DocumentStoreError(f"Failed to write {self.path}: {e}") from e


class InMemoryDocumentStore(DocumentStoreBase):
    """Store that keeps the serialized document in memory.

    Each load() returns an independent copy, so unsaved mutations never leak
    into later loads, matching the file-backed store.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        super().__init__()
        self._data: dict[str, Any] | None = initial

    def load(self) -> Document:
        if self._data is None:
            document = new_document()
            self.save(document)
            return document
        return Document.model_validate(self._data)

    def save(self, document: Document) -> None:
        self._data = _dump(document)

    # Test helper methods

    def raw(self) -> dict[str, Any] | None:
        """Return the serialized document as last saved (test helper)."""
        return self._data

    def clear(self) -> None:
        """Forget the stored document (test helper)."""
        self._data = None


def get_document_store(data_path: Path | str) -> DocumentStoreBase:
    """Build the store used by the running application.

    Args:
        data_path: Location of the JSON document.

    Returns:
        A JsonFileDocumentStore for ``data_path``.
    """
    return JsonFileDocumentStore(data_path)
