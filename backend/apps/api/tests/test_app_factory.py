"""Tests for FastAPI app factory behavior."""

import pytest
from httpx import ASGITransport, AsyncClient

from marquee_api.config import settings
from marquee_api.main import create_app
from marquee_database.session import get_session


async def _no_session():
    yield None


def _client_for(app) -> AsyncClient:
    # Malformed ids are rejected before the session is used
    app.dependency_overrides[get_session] = _no_session
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture(autouse=True)
def _no_rate_limit(monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", False)


def test_create_app_builds_independent_apps() -> None:
    """Factory should return a fresh application each call."""
    app_one = create_app()
    app_two = create_app()

    assert app_one is not app_two
    assert app_one.router is not app_two.router


@pytest.mark.asyncio
async def test_routes_mounted_under_api_prefix() -> None:
    """Entry and health routes live under the configured prefix."""
    async with _client_for(create_app()) as client:
        health = await client.get("/api/health")
        entry = await client.get("/api/entries/bad$id")

    assert health.status_code == 200
    assert health.json()["data"]["version"] == settings.version
    assert entry.status_code == 400
    assert entry.json()["error"]["code"] == "INVALID_ENTRY_ID"


@pytest.mark.asyncio
async def test_custom_api_prefix(monkeypatch) -> None:
    """A trailing slash on the prefix is ignored."""
    monkeypatch.setattr(settings, "api_prefix", "/v2/")

    async with _client_for(create_app()) as client:
        health = await client.get("/v2/health")
        entry = await client.get("/v2/entries/bad$id")
        old = await client.get("/api/entries/bad$id")

    assert health.status_code == 200
    assert entry.json()["error"]["code"] == "INVALID_ENTRY_ID"
    assert old.status_code == 404
    assert old.json()["error"]["code"] == "NOT_FOUND"


def test_docs_hidden_outside_debug(monkeypatch) -> None:
    monkeypatch.setattr(settings, "debug", False)

    app = create_app()

    assert app.docs_url is None
    assert app.redoc_url is None
