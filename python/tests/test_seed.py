"""Tests for the fixture wiki used by scripts/seed_dev.py."""

from docspace.services import articles as articles_service
from docspace.store.client import InMemoryDocumentStore
from tests.fixtures import FIXTURE_ARTICLES, FIXTURE_SPACES, seed_store


class TestSeedStore:
    def test_seed_creates_fixture_content(self, store: InMemoryDocumentStore):
        created = seed_store(store)

        assert created == {"spaces": len(FIXTURE_SPACES), "articles": len(FIXTURE_ARTICLES)}

    def test_seed_is_idempotent(self, seeded_store: InMemoryDocumentStore):
        assert seed_store(seeded_store) == {"spaces": 0, "articles": 0}
        assert len(seeded_store.load().articles) == len(FIXTURE_ARTICLES)

    def test_parent_links_use_slugs(self, seeded_store: InMemoryDocumentStore):
        checklist = articles_service.get_article(seeded_store, "deploy-checklist")

        assert checklist.parent_slug == "deploy-guide"
