"""Tests for the health endpoint.

The health endpoint is a liveness check that:
- Does not touch the document store
- Always returns 200 if the process is running
"""

from fastapi.testclient import TestClient


class TestHealthEndpoint:
    """Tests for GET /health"""

    def test_health_returns_200(self, client: TestClient):
        """Health endpoint returns 200 OK."""
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_returns_correct_envelope(self, client: TestClient):
        """Health endpoint returns proper success envelope."""
        response = client.get("/health")
        assert response.json() == {"data": {"status": "ok"}}

    def test_health_does_not_load_store(self, client: TestClient, store):
        """Health check leaves an untouched store untouched."""
        client.get("/health")
        assert store.raw() is None
