"""Pytest configuration and fixtures for docspace tests.

Test isolation strategy:
- Every test gets a fresh InMemoryDocumentStore (``store``)
- Tests that exercise the file format use ``json_store`` under tmp_path
- ``client`` is a TestClient for an app wired to ``store``, so tests can
  arrange data through services and assert through HTTP (or vice versa)
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docspace.app import create_app
from docspace.config import Settings, clear_settings_cache
from docspace.logging import configure_logging
from docspace.store.client import InMemoryDocumentStore, JsonFileDocumentStore
from tests.fixtures import seeded_store  # noqa: F401


@pytest.fixture(scope="session", autouse=True)
def configure_test_logging() -> None:
    """Route structlog through stdlib logging before any logger is first used."""
    configure_logging(json_format=False)


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Keep cached settings from leaking between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    """Location of a not-yet-existing JSON document."""
    return tmp_path / "data" / "db.json"


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Provide an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def json_store(data_path: Path) -> JsonFileDocumentStore:
    """Provide a file-backed document store in a temporary directory."""
    return JsonFileDocumentStore(data_path)


@pytest.fixture
def test_settings(data_path: Path) -> Settings:
    """Settings for the test environment."""
    return Settings(
        DOCSPACE_ENV="test",
        DOCSPACE_DATA_PATH=str(data_path),
        LOG_JSON=False,
    )


@pytest.fixture
def app(store: InMemoryDocumentStore, test_settings: Settings) -> FastAPI:
    """Provide an app using the in-memory store."""
    return create_app(store=store, settings=test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Provide a FastAPI test client for ``app``."""
    with TestClient(app) as client:
        yield client
