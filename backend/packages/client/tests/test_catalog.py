"""Tests for EntryCatalog mutations and notifications."""

import httpx
import pytest

from marquee_client import (
    ApiError,
    EntriesClient,
    EntryCatalog,
    InfiniteEntries,
    Level,
    NotificationBus,
)
from marquee_core.schemas import EntryUpdate

CREATED = {
    "id": "new-entry",
    "title": "New",
    "type": "TV_SHOW",
    "director": "Someone",
    "budget": "$5M",
    "location": "Berlin",
    "duration": "45 min/ep",
    "year": "2021",
    "createdAt": "2024-06-01T00:00:00Z",
    "updatedAt": "2024-06-01T00:00:00Z",
}


def _error(status: int, message: str, code: str) -> httpx.Response:
    return httpx.Response(
        status, json={"success": False, "error": {"message": message, "code": code}}
    )


@pytest.fixture
def setup(paged_catalog):
    catalog = paged_catalog(3)
    mutation_responses: list[httpx.Response | Exception] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return catalog(request)
        outcome = mutation_responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client = EntriesClient("http://test", transport=httpx.MockTransport(handler))
    entries = InfiniteEntries(client)
    bus = NotificationBus()
    received = []
    bus.subscribe(received.append)
    return EntryCatalog(client, entries, bus), catalog, mutation_responses, received


class TestMutations:
    """Test successful mutations invalidate and notify."""

    @pytest.mark.asyncio
    async def test_update_invalidates_list(self, setup):
        entry_catalog, catalog, responses, received = setup
        await entry_catalog.entries.load_first()
        generation = entry_catalog.entries.generation
        responses.append(httpx.Response(200, json={"success": True, "data": CREATED}))

        entry = await entry_catalog.update("new-entry", EntryUpdate(title="New"))

        assert entry.id == "new-entry"
        assert entry_catalog.entries.generation == generation + 1
        assert len(catalog.page_requests) == 2
        assert [(n.level, n.message) for n in received] == [
            (Level.SUCCESS, "Entry updated successfully!")
        ]

    @pytest.mark.asyncio
    async def test_delete_invalidates_list(self, setup):
        entry_catalog, catalog, responses, received = setup
        responses.append(
            httpx.Response(
                200, json={"success": True, "data": {"message": "Entry deleted successfully"}}
            )
        )

        await entry_catalog.delete("entry-001")

        assert len(catalog.page_requests) == 1
        assert received[0].message == "Entry deleted successfully!"


class TestFailures:
    """Test failure notifications follow the recovery class."""

    @pytest.mark.asyncio
    async def test_update_not_found_offers_refresh(self, setup):
        entry_catalog, catalog, responses, received = setup
        responses.append(_error(404, "Entry not found", "ENTRY_NOT_FOUND"))

        with pytest.raises(ApiError):
            await entry_catalog.update("gone", EntryUpdate(title="X"))

        notification = received[0]
        assert notification.level is Level.WARNING
        assert notification.title == "Entry Not Found"
        assert notification.action.label == "Refresh"
        assert catalog.page_requests == []

        await notification.action.callback()
        assert len(catalog.page_requests) == 1

    @pytest.mark.asyncio
    async def test_delete_not_found_reloads_immediately(self, setup):
        entry_catalog, catalog, responses, received = setup
        await entry_catalog.entries.load_first()
        responses.append(_error(404, "Entry not found", "ENTRY_NOT_FOUND"))

        with pytest.raises(ApiError):
            await entry_catalog.delete("gone")

        assert [(n.level, n.message) for n in received] == [
            (Level.WARNING, "Entry was already deleted or not found.")
        ]
        assert received[0].action.label == "Refresh"
        assert len(catalog.page_requests) == 2
        assert entry_catalog.entries.generation == 2

    @pytest.mark.asyncio
    async def test_network_failure_offers_retry(self, setup):
        entry_catalog, _, responses, received = setup
        responses.append(httpx.ConnectError("refused"))

        with pytest.raises(ApiError) as exc_info:
            await entry_catalog.update("entry-001", EntryUpdate(title="X"))

        assert exc_info.value.code == "NETWORK_ERROR"
        assert received[0].title == "Connection Error"
        assert received[0].action.label == "Retry"

    @pytest.mark.asyncio
    async def test_duplicate_is_reported_as_input_problem(self, setup):
        entry_catalog, _, responses, received = setup
        responses.append(_error(409, "Entry with this title already exists", "DUPLICATE_ENTRY"))

        with pytest.raises(ApiError):
            await entry_catalog.update("entry-001", EntryUpdate(title="Entry 000"))

        assert received[0].level is Level.ERROR
        assert received[0].title == "Validation Error"
        assert received[0].message == "Entry with this title already exists"

    @pytest.mark.asyncio
    async def test_server_error_message_is_generic(self, setup):
        entry_catalog, _, responses, received = setup
        responses.append(_error(500, "Failed to delete entry", "DELETE_ENTRY_ERROR"))

        with pytest.raises(ApiError):
            await entry_catalog.delete("entry-001")

        assert received[0].title == "Server Error"
        assert received[0].message == (
            "Server error occurred while deleting entry. Please try again."
        )
