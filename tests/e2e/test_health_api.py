"""End-to-end tests for the health and comment endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from persona.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with an in-memory test container."""
    return TestClient(create_app(build_test_container()))


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health(self, client):
        """The service should report healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCommentEndpoints:
    """Tests for the comment endpoints."""

    def test_create_comment_out_of_range_profile(self, client):
        """Profile IDs outside 1..99999 should be a 400."""
        response = client.post(
            "/profiles/0/comments", json={"author": "Ada", "content": "Hi"}
        )

        assert response.status_code == 400

    def test_get_unknown_comment(self, client):
        """Unknown comments should be a 404."""
        response = client.get(f"/comments/{uuid4()}")

        assert response.status_code == 404
