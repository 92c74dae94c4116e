"""
HTTP client for the entries API.

Wraps httpx.AsyncClient, unwraps the response envelope and turns every
failure into an ApiError.
"""

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError

from marquee_core import get_logger
from marquee_core.schemas import EntryCreate, EntryPage, EntryResponse, EntryType, EntryUpdate

from .errors import NETWORK_ERROR, TIMEOUT_ERROR, UNKNOWN_ERROR, ApiError, http_error_message

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_PAGE_SIZE = 20


class EntriesClient:
    """Async client for the entries API."""

    def __init__(
        self,
        base_url: str,
        *,
        api_prefix: str = "/api",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            base_url: Server origin, e.g. ``http://localhost:8000``.
            api_prefix: Base path the API is mounted under.
            timeout: Upper bound in seconds for one request, including the body read.
            transport: Optional httpx transport (used by tests).
        """
        self.timeout = timeout
        self._prefix = api_prefix.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )

    async def __aenter__(self) -> "EntriesClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Send a request and return the envelope's ``data``.

        Args:
            method: HTTP method.
            endpoint: Path below the API prefix, e.g. ``/entries``.
            params: Query parameters; None values are dropped.
            json: JSON body.

        Returns:
            The ``data`` member of a success envelope.

        Raises:
            ApiError: On timeout, transport failure or any non-2xx response.
        """
        url = f"{self._prefix}{endpoint}"
        query = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            response = await asyncio.wait_for(
                self._client.request(method, url, params=query or None, json=json),
                timeout=self.timeout,
            )
        except (httpx.TimeoutException, TimeoutError):
            logger.warning("Request timed out", extra={"method": method, "url": url})
            raise ApiError("Request timed out. Please try again.", TIMEOUT_ERROR, 0) from None
        except httpx.TransportError as e:
            logger.warning(
                "Request failed", extra={"method": method, "url": url, "error": str(e)}
            )
            raise ApiError(
                "Network connection failed. Please check your internet connection.",
                NETWORK_ERROR,
                0,
            ) from e

        if not response.is_success:
            raise self._error_from(response)

        try:
            body = response.json()
        except ValueError:
            raise ApiError(
                "Server returned an unreadable response.", UNKNOWN_ERROR, response.status_code
            ) from None
        if not isinstance(body, dict) or body.get("success") is not True:
            raise ApiError(
                "Server returned an unexpected response.", UNKNOWN_ERROR, response.status_code
            )
        return body.get("data")

    @staticmethod
    def _error_from(response: httpx.Response) -> ApiError:
        status = response.status_code
        error: dict[str, Any] = {}
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            error = body["error"]
        return ApiError(
            error.get("message") or http_error_message(status),
            error.get("code") or f"HTTP_{status}",
            status,
            error.get("details"),
        )

    async def get_entries(
        self,
        cursor: str | None = None,
        limit: int = DEFAULT_PAGE_SIZE,
        *,
        search: str | None = None,
        entry_type: EntryType | None = None,
    ) -> EntryPage:
        """Fetch one page of entries after ``cursor``."""
        data = await self.request(
            "GET",
            "/entries",
            params={
                "cursor": cursor,
                "limit": limit,
                "search": search,
                "type": entry_type.value if entry_type else None,
            },
        )
        return self._parse(EntryPage, data)

    async def get_entry(self, entry_id: str) -> EntryResponse:
        data = await self.request("GET", f"/entries/{entry_id}")
        return self._parse(EntryResponse, data)

    async def count_entries(self) -> int:
        data = await self.request("GET", "/entries/count")
        return int(data["count"])

    async def create_entry(self, entry: EntryCreate) -> EntryResponse:
        data = await self.request(
            "POST", "/entries", json=entry.model_dump(mode="json", by_alias=True)
        )
        return self._parse(EntryResponse, data)

    async def update_entry(self, entry_id: str, changes: EntryUpdate) -> EntryResponse:
        data = await self.request(
            "PUT",
            f"/entries/{entry_id}",
            json=changes.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )
        return self._parse(EntryResponse, data)

    async def delete_entry(self, entry_id: str) -> None:
        await self.request("DELETE", f"/entries/{entry_id}")

    async def health(self) -> dict[str, Any]:
        return await self.request("GET", "/health")

    @staticmethod
    def _parse(model: Any, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiError("Server returned an unexpected response.", UNKNOWN_ERROR, 200) from e
