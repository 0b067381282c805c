"""
Tests for health check endpoints.

The TestClient runs the application lifespan, so migrations are applied to
the per-test data directory before any request.
"""

import pytest
from fastapi.testclient import TestClient

from purchasing.api.main import app


@pytest.fixture
def client():
    """Create sync test client."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


class TestHealthEndpoints:
    def test_root_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"

    def test_api_health_has_uptime(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["uptime_seconds"] >= 0

    def test_db_health_after_migrations(self, client):
        response = client.get("/api/health/db")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"]["name"] == "sqlite"
        assert data["database"]["available"] is True

    def test_unknown_route_uses_error_format(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"
