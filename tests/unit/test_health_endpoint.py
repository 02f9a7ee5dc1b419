"""Tests for the health endpoint."""

import pytest


@pytest.mark.unit
class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health_ok_without_auth(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_cors_allows_frontend_origin(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
