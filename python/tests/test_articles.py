"""Tests for articles.

Tests cover:
- Creation writes the article and its version 1 together
- Slugs are derived from titles and unique across spaces
- Articles default to the first space
- Updates apply present fields only and always add a version
- Deleting an article keeps its versions and never frees its id
- Listings are ordered by updatedAt, newest first
- Concurrent creates with the same title get distinct slugs
- Missing targets leave the store unsaved
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from fastapi.testclient import TestClient

from docspace.app import create_app
from docspace.config import Settings
from docspace.services import articles as articles_service
from docspace.store.client import InMemoryDocumentStore, JsonFileDocumentStore
from docspace.store.models import DEFAULT_SPACE_ID
from tests.factories import create_test_article, create_test_space, edit_test_article

# =============================================================================
# Service Layer
# =============================================================================


class TestArticleService:
    """Tests for the article service functions."""

    def test_create_writes_first_version(self, store: InMemoryDocumentStore):
        article = create_test_article(store, "Intro", "Hello world")

        document = store.load()
        assert article.current_version == 1
        assert article.space_id == DEFAULT_SPACE_ID
        assert article.created_at == article.updated_at
        assert len(document.article_versions) == 1
        version = document.article_versions[0]
        assert (version.article_id, version.version) == (article.id, 1)
        assert version.title == "Intro"
        assert version.body_markdown == "Hello world"
        assert version.restored_from is None

    def test_missing_body_stored_as_empty(self, store: InMemoryDocumentStore):
        article = articles_service.create_article(store, title="Blank", slug="blank")

        assert article.body_markdown == ""

    def test_slugs_unique_across_spaces(self, store: InMemoryDocumentStore):
        other = create_test_space(store, "Other")
        first = create_test_article(store, "Setup")
        second = create_test_article(store, "Setup", space_id=other.id)

        assert first.slug == "setup"
        assert second.slug == "setup-1"

    def test_defaults_to_first_space(self, store: InMemoryDocumentStore):
        with store.transaction() as document:
            document.spaces[0].id = 9

        assert create_test_article(store, "Orphan").space_id == 9

    def test_update_applies_present_fields(self, store: InMemoryDocumentStore):
        create_test_article(store, "Intro", "old body", parent_slug="home")

        updated = edit_test_article(store, "intro", body_markdown="new body")

        assert updated.title == "Intro"
        assert updated.body_markdown == "new body"
        assert updated.parent_slug == "home"
        assert updated.current_version == 2

    def test_update_can_clear_parent(self, store: InMemoryDocumentStore):
        create_test_article(store, "Intro", parent_slug="home")

        assert edit_test_article(store, "intro", parent_slug=None).parent_slug is None

    def test_empty_update_still_adds_version(self, store: InMemoryDocumentStore):
        create_test_article(store, "Intro", "body", updated_at="2024-01-01T00:00:00.000Z")

        updated = edit_test_article(store, "intro")

        assert updated.current_version == 2
        assert updated.updated_at > "2024-01-01T00:00:00.000Z"
        assert len(store.load().article_versions) == 2

    def test_update_keeps_slug_when_title_changes(self, store: InMemoryDocumentStore):
        create_test_article(store, "Intro")

        updated = edit_test_article(store, "intro", title="Introduction")

        assert updated.slug == "intro"
        assert updated.title == "Introduction"

    def test_update_missing_article_returns_none(self, store: InMemoryDocumentStore):
        store.load()
        saved = store.raw()

        assert edit_test_article(store, "nope", title="X") is None
        assert store.raw() is saved

    def test_delete_keeps_versions(self, store: InMemoryDocumentStore):
        article = create_test_article(store, "Intro")

        assert articles_service.delete_article(store, "intro") is True

        document = store.load()
        assert document.articles == []
        assert [v.article_id for v in document.article_versions] == [article.id]

    def test_deleted_article_id_not_reused(self, store: InMemoryDocumentStore):
        first = create_test_article(store, "First")
        articles_service.delete_article(store, "first")

        second = create_test_article(store, "Second")

        assert second.id == first.id + 1

    def test_delete_missing_article_returns_false(self, store: InMemoryDocumentStore):
        store.load()
        saved = store.raw()

        assert articles_service.delete_article(store, "nope") is False
        assert store.raw() is saved

    def test_list_newest_first_and_filtered(self, store: InMemoryDocumentStore):
        other = create_test_space(store, "Other")
        create_test_article(store, "Old", updated_at="2024-01-01T00:00:00.000Z")
        create_test_article(store, "New", updated_at="2024-03-01T00:00:00.000Z")
        create_test_article(store, "Mid", space_id=other.id, updated_at="2024-02-01T00:00:00.000Z")

        assert [a.slug for a in articles_service.list_articles(store)] == ["new", "mid", "old"]
        assert [a.slug for a in articles_service.list_articles(store, other.id)] == ["mid"]


# =============================================================================
# HTTP Routes
# =============================================================================


class TestCreateArticleRoute:
    """Tests for POST /articles"""

    def test_create_returns_201_with_article(self, client: TestClient):
        response = client.post(
            "/articles",
            json={"title": "Deploy Guide", "bodyMarkdown": "# Deploy", "parentSlug": "home"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "deploy-guide"
        assert data["bodyMarkdown"] == "# Deploy"
        assert data["parentSlug"] == "home"
        assert data["spaceId"] == DEFAULT_SPACE_ID
        assert data["currentVersion"] == 1

    def test_create_in_space(self, client: TestClient):
        space_id = client.post("/spaces", json={"name": "Eng"}).json()["data"]["id"]

        response = client.post("/articles", json={"title": "Runbook", "spaceId": space_id})

        assert response.json()["data"]["spaceId"] == space_id

    def test_unknown_space_returns_404(self, client: TestClient):
        response = client.post("/articles", json={"title": "Runbook", "spaceId": 999})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "E_SPACE_NOT_FOUND"

    def test_blank_title_rejected(self, client: TestClient):
        response = client.post("/articles", json={"title": "  "})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "E_TITLE_INVALID"

    def test_missing_title_rejected(self, client: TestClient):
        response = client.post("/articles", json={"bodyMarkdown": "text"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "E_INVALID_REQUEST"


class TestReadArticleRoutes:
    """Tests for GET /articles and GET /articles/{slug}"""

    def test_list_omits_body(self, client: TestClient):
        client.post("/articles", json={"title": "Intro", "bodyMarkdown": "text"})

        rows = client.get("/articles").json()["data"]

        assert [r["slug"] for r in rows] == ["intro"]
        assert "bodyMarkdown" not in rows[0]

    def test_get_article_includes_body(self, client: TestClient):
        client.post("/articles", json={"title": "Intro", "bodyMarkdown": "text"})

        response = client.get("/articles/intro")

        assert response.status_code == 200
        assert response.json()["data"]["bodyMarkdown"] == "text"

    def test_get_missing_article_returns_404(self, client: TestClient):
        response = client.get("/articles/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "E_ARTICLE_NOT_FOUND"


class TestUpdateArticleRoute:
    """Tests for PUT /articles/{slug}"""

    def test_update_bumps_version(self, client: TestClient):
        client.post("/articles", json={"title": "Intro", "bodyMarkdown": "v1"})

        response = client.put("/articles/intro", json={"bodyMarkdown": "v2"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["bodyMarkdown"] == "v2"
        assert data["currentVersion"] == 2

    def test_blank_title_rejected(self, client: TestClient):
        client.post("/articles", json={"title": "Intro"})

        response = client.put("/articles/intro", json={"title": " "})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "E_TITLE_INVALID"

    def test_null_body_rejected(self, client: TestClient):
        client.post("/articles", json={"title": "Intro"})

        response = client.put("/articles/intro", json={"bodyMarkdown": None})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "E_INVALID_REQUEST"

    def test_update_missing_article_returns_404(self, client: TestClient):
        response = client.put("/articles/missing", json={"title": "X"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "E_ARTICLE_NOT_FOUND"


class TestDeleteArticleRoute:
    """Tests for DELETE /articles/{slug}"""

    def test_delete_article(self, client: TestClient):
        client.post("/articles", json={"title": "Intro"})

        response = client.delete("/articles/intro")

        assert response.json() == {"data": {"success": True}}
        assert client.get("/articles/intro").status_code == 404

    def test_delete_missing_article_returns_404(self, client: TestClient):
        response = client.delete("/articles/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "E_ARTICLE_NOT_FOUND"


class TestApiPrefix:
    """Routes move under API_PREFIX while /health stays at the root."""

    def test_prefixed_routes(self, store, data_path):
        settings = Settings(
            DOCSPACE_ENV="test",
            DOCSPACE_DATA_PATH=str(data_path),
            LOG_JSON=False,
            API_PREFIX="/api",
        )
        client = TestClient(create_app(store=store, settings=settings))

        assert client.get("/api/spaces").status_code == 200
        assert client.get("/spaces").status_code == 404
        assert client.get("/health").status_code == 200


class TestConcurrentCreates:
    """Slugs are derived under the store lock, so parallel POSTs never collide."""

    WORKERS = 8

    def _post_all(self, client: TestClient, path: str, body: dict) -> list[dict]:
        barrier = threading.Barrier(self.WORKERS)

        def post(_):
            barrier.wait()
            return client.post(path, json=body)

        with ThreadPoolExecutor(max_workers=self.WORKERS) as pool:
            responses = list(pool.map(post, range(self.WORKERS)))

        assert [r.status_code for r in responses] == [201] * self.WORKERS
        return [r.json()["data"] for r in responses]

    def test_same_title_gets_distinct_slugs(
        self, json_store: JsonFileDocumentStore, test_settings: Settings
    ):
        with TestClient(create_app(store=json_store, settings=test_settings)) as client:
            created = self._post_all(client, "/articles", {"title": "Same Title"})

        slugs = {a["slug"] for a in created}
        assert len(slugs) == self.WORKERS
        assert "same-title" in slugs

        stored = JsonFileDocumentStore(json_store.path).load()
        assert sorted(a.slug for a in stored.articles) == sorted(slugs)
        assert len({a.id for a in stored.articles}) == self.WORKERS

    def test_same_space_name_gets_distinct_slugs(
        self, json_store: JsonFileDocumentStore, test_settings: Settings
    ):
        with TestClient(create_app(store=json_store, settings=test_settings)) as client:
            created = self._post_all(client, "/spaces", {"name": "Team"})

        assert len({s["slug"] for s in created}) == self.WORKERS
        stored = JsonFileDocumentStore(json_store.path).load()
        assert len({s.slug for s in stored.spaces}) == self.WORKERS + 1
