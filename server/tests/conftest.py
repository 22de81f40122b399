"""
Test configuration and fixtures for Promptkeeper tests

This module provides:
- Import of all fixtures from fixtures/ (database, auth, entities)
- Import of all factories from factories/ (folders, prompts)
- FastAPI test client

Usage:
    def test_api_endpoint(test_client, override_auth_dependencies):
        response = test_client.get("/api/folders")
        assert response.status_code == 200

    # Create custom test data
    def test_with_two_folders(db_engine):
        from tests.factories import create_test_folder
        with get_connection(db_engine) as conn:
            create_test_folder(conn, name="Work")
            create_test_folder(conn, name="Work")
"""

import pytest

# Import all fixtures and factories for test usage
from tests.fixtures import *  # noqa: F401, F403
from tests.factories import *  # noqa: F401, F403

from promptkeeper_server.config import settings


@pytest.fixture
def test_client():
    """Create a FastAPI test client.

    Use with override_auth_dependencies to test authenticated endpoints.
    """
    from fastapi.testclient import TestClient
    from promptkeeper_server.main import app

    client = TestClient(app)
    try:
        yield client
    finally:
        client.close()
        app.dependency_overrides.clear()


@pytest.fixture
def unverified_tokens(monkeypatch: pytest.MonkeyPatch):
    """Decode session tokens without JWKS verification, as in local development."""
    monkeypatch.setattr(settings, "clerk_jwt_issuer", None)
    monkeypatch.setattr(settings, "clerk_jwks_url", None)
