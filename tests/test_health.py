"""Health endpoint tests."""

from campustour.core.config import settings


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "app": settings.app_name}


def test_cors_allows_only_configured_client_origin(client):
    allowed = client.get("/health", headers={"Origin": settings.client_origin})
    assert allowed.headers["access-control-allow-origin"] == settings.client_origin

    other = client.get("/health", headers={"Origin": "https://evil.example.com"})
    assert "access-control-allow-origin" not in other.headers
