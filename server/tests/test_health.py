"""Tests for the health endpoint"""

from unittest.mock import Mock

from promptkeeper_server.core.database import get_engine
from promptkeeper_server.main import app


def test_health_check(test_client, override_db_engine, db_engine):
    response = test_client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == db_engine.dialect.name
    assert data["db_latency_ms"] >= 0


def test_health_check_database_down(test_client):
    broken = Mock()
    broken.connect.side_effect = RuntimeError("connection refused")
    app.dependency_overrides[get_engine] = lambda: broken

    response = test_client.get("/api/health")

    assert response.status_code == 503
    assert "connection refused" in response.json()["detail"]
