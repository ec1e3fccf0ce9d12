"""Tests for CORS configuration based on environment."""

from fastapi.testclient import TestClient

from backend.main import create_app


def _preflight(client: TestClient, origin: str):
    return client.options(
        "/auth/login",
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": "POST",
        },
    )


def test_allowed_origin_dev(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "dev")
    client = TestClient(create_app(create_tables=False))

    response = _preflight(client, "http://localhost:3000")

    assert response.headers.get("access-control-allow-origin") == "http://localhost:3000"
    assert response.headers.get("access-control-allow-credentials") == "true"


def test_disallowed_origin(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "dev")
    client = TestClient(create_app(create_tables=False))

    response = _preflight(client, "http://malicious.com")

    assert "access-control-allow-origin" not in response.headers


def test_allowed_origin_prod(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "prod")
    client = TestClient(create_app(create_tables=False))

    response = _preflight(client, "https://wardrobe.example.com")

    assert (
        response.headers.get("access-control-allow-origin")
        == "https://wardrobe.example.com"
    )


def test_dev_origin_rejected_in_prod(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "prod")
    client = TestClient(create_app(create_tables=False))

    response = _preflight(client, "http://localhost:3000")

    assert "access-control-allow-origin" not in response.headers
