"""Fixtures for client tests."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest


def make_entry(n: int) -> dict[str, Any]:
    return {
        "id": f"entry-{n:03d}",
        "title": f"Entry {n:03d}",
        "type": "MOVIE",
        "director": "Director",
        "budget": "$1M",
        "location": "Los Angeles",
        "duration": "120 min",
        "year": "2020",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-01T00:00:00Z",
    }


def envelope(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def error_envelope(message: str, code: str, details: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"message": message, "code": code}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}


class PagedCatalog:
    """
    Request handler serving a fixed list of entries through the cursor protocol.

    ``fail_next`` holds exceptions or responses returned before normal service resumes.
    """

    def __init__(self, total: int):
        self.entries = [make_entry(n) for n in reversed(range(total))]
        self.requests: list[httpx.Request] = []
        self.fail_next: list[Exception | httpx.Response] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_next:
            failure = self.fail_next.pop(0)
            if isinstance(failure, Exception):
                raise failure
            return failure

        limit = int(request.url.params.get("limit", "20"))
        cursor = request.url.params.get("cursor")
        start = 0
        if cursor is not None:
            start = [entry["id"] for entry in self.entries].index(cursor) + 1
        chunk = self.entries[start : start + limit]
        has_more = start + limit < len(self.entries)
        page: dict[str, Any] = {"data": chunk, "hasMore": has_more}
        if has_more:
            page["nextCursor"] = chunk[-1]["id"]
        return httpx.Response(200, json=envelope(page))

    @property
    def page_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/api/entries"]


@pytest.fixture
def paged_catalog() -> Callable[[int], PagedCatalog]:
    return PagedCatalog


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps: list[float]):
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)

    return _sleep
