"""Fixture content for seeded spaces and articles.

Single source of truth for the sample data used by scripts/seed_dev.py and
by tests that want a realistic small wiki.

Note:
- Titles are unique, so derived slugs are stable
- Parent links refer to fixture articles by title
"""

import pytest

from docspace.services import articles as articles_service
from docspace.services import spaces as spaces_service
from docspace.store.client import DocumentStoreBase, InMemoryDocumentStore
from docspace.store.models import DEFAULT_SPACE_SLUG

# =============================================================================
# Fixture Content
# =============================================================================

FIXTURE_SPACES = ["Engineering", "Handbook"]

# (space name or None for the default space, title, body, parent title)
FIXTURE_ARTICLES: list[tuple[str | None, str, str, str | None]] = [
    (
        None,
        "Welcome",
        "# Welcome\n\nThis wiki holds team notes. Start with the handbook.",
        None,
    ),
    (
        "Engineering",
        "Deploy Guide",
        "Deployments run from the main branch.\n\nRoll back by redeploying the previous tag.",
        None,
    ),
    (
        "Engineering",
        "Deploy Checklist",
        "- Run the tests\n- Tag the release\n- Watch the error dashboard",
        "Deploy Guide",
    ),
    (
        "Handbook",
        "Onboarding",
        "New hires read the handbook during their first week.",
        None,
    ),
]


def seed_store(store: DocumentStoreBase) -> dict[str, int]:
    """Create the fixture spaces and articles that do not exist yet.

    Idempotent: spaces are matched by name and articles by title.

    Returns:
        Counts of created spaces and articles.
    """
    created = {"spaces": 0, "articles": 0}

    existing_spaces = {s.name: s for s in spaces_service.list_spaces(store)}
    default = spaces_service.get_space(store, DEFAULT_SPACE_SLUG)
    space_ids: dict[str | None, int] = {None: default.id if default else store.load().spaces[0].id}

    for name in FIXTURE_SPACES:
        space = existing_spaces.get(name)
        if space is None:
            space = spaces_service.create_space(store, name=name)
            created["spaces"] += 1
        space_ids[name] = space.id

    slugs_by_title = {a.title: a.slug for a in articles_service.list_articles(store)}
    for space_name, title, body, parent_title in FIXTURE_ARTICLES:
        if title in slugs_by_title:
            continue
        article = articles_service.create_article(
            store,
            title=title,
            body_markdown=body,
            parent_slug=slugs_by_title.get(parent_title) if parent_title else None,
            space_id=space_ids[space_name],
        )
        slugs_by_title[title] = article.slug
        created["articles"] += 1

    return created


@pytest.fixture
def seeded_store() -> InMemoryDocumentStore:
    """In-memory store pre-populated with the fixture wiki."""
    store = InMemoryDocumentStore()
    seed_store(store)
    return store
