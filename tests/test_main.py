"""Tests for the FastAPI application wiring."""

import asyncio
import logging
import time

import httpx
from fastapi.testclient import TestClient

from songly.main import app


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_not_found_envelope(client):
    response = client.get("/no-such-path")
    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Not Found", "status": 404}}


def test_method_not_allowed_envelope(client):
    response = client.put("/playlists/c1", json={})
    assert response.status_code == 405
    assert response.json()["error"]["status"] == 405


def test_invalid_json_body(client, admin_token, auth_header):
    response = client.post(
        "/playlists",
        content=b"{not json",
        headers={**auth_header(admin_token), "content-type": "application/json"},
    )
    assert response.status_code == 400


def test_unhandled_error_envelope(client, monkeypatch):
    from songly.services.playlist_service import playlist_service

    def explode(db, filters=None):
        raise RuntimeError("database went away")

    monkeypatch.setattr(playlist_service, "find_all", explode)
    unsafe_client = TestClient(app, raise_server_exceptions=False)
    response = unsafe_client.get("/playlists")
    assert response.status_code == 500
    assert response.json() == {"error": {"message": "database went away", "status": 500}}


def test_unhandled_error_is_access_logged(client, monkeypatch, caplog):
    from songly.services.playlist_service import playlist_service

    def explode(db, filters=None):
        raise RuntimeError("database went away")

    monkeypatch.setattr(playlist_service, "find_all", explode)
    unsafe_client = TestClient(app, raise_server_exceptions=False)
    with caplog.at_level(logging.INFO, logger="songly.main"):
        unsafe_client.get("/playlists")
    assert any("GET /playlists 500" in record.getMessage() for record in caplog.records)


def test_unauthorized_sends_bearer_challenge(client):
    response = client.post("/playlists", json={"handle": "x", "name": "X", "description": "d"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_other_errors_have_no_challenge(client):
    response = client.get("/playlists/nope")
    assert response.status_code == 404
    assert "www-authenticate" not in response.headers


def test_slow_handler_does_not_block_other_requests(client, monkeypatch):
    from songly.services.playlist_service import playlist_service

    def slow_find_all(db, filters=None):
        time.sleep(0.5)
        return []

    monkeypatch.setattr(playlist_service, "find_all", slow_find_all)

    async def fetch_all():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as async_client:
            return await asyncio.gather(*(async_client.get("/playlists") for _ in range(4)))

    start = time.perf_counter()
    responses = asyncio.run(fetch_all())
    elapsed = time.perf_counter() - start

    assert [r.status_code for r in responses] == [200] * 4
    # Serialized on the event loop this would take at least 2 seconds
    assert elapsed < 1.5


def test_cors_headers(client):
    response = client.options(
        "/health",
        headers={
            "Origin": "http://localhost:4200",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:4200"
