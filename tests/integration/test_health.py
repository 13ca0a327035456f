"""Integration tests: health endpoints and request id header."""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from userapi.db import Database
from userapi.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health_ok(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_health_live(client: TestClient):
    r = client.get("/health/live")
    assert r.status_code == 200
    data = r.json()
    assert data.get("status") == "ok" and data.get("check") == "live"


def test_health_ready_without_database_is_degraded(client: TestClient):
    r = client.get("/health/ready")
    assert r.status_code == 200
    data = r.json()
    assert data["check"] == "ready"
    assert data["database"] == "down"
    assert data["status"] == "degraded"


def test_health_ready_with_database_up(client: TestClient):
    db = MagicMock(spec=Database)
    db.ping.return_value = True
    app.state.database = db
    try:
        r = client.get("/health/ready")
    finally:
        del app.state.database
    assert r.json() == {"status": "ok", "check": "ready", "database": "up"}


def test_request_id_generated(client: TestClient):
    r = client.get("/health")
    assert r.headers.get("x-request-id")


def test_request_id_echoed(client: TestClient):
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


def test_error_response_carries_request_id(client: TestClient):
    r = client.get("/no-such-route", headers={"X-Request-ID": "req-9"})
    assert r.status_code == 404
    assert r.json()["request_id"] == "req-9"
