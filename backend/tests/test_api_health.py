# File: backend/tests/test_api_health.py
# Version: v0.2.0
"""
Smoke tests for health endpoints.
"""


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_health_db(client):
    r = client.get("/api/health/db")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "sqlite"}
