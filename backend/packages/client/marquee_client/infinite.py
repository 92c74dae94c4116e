"""
Infinite consumption of the entries list.

InfiniteEntries holds the pages fetched so far and advances through the
cursor chain one page at a time. The status moves

    IDLE -> LOADING -> READY <-> FETCHING_NEXT
               \\-> ERROR

A failed next-page fetch returns to READY with ``next_page_error`` set and
keeps the pages already loaded, except when the cursor itself no longer
resolves: then the list reloads from the newest entry. Every load bumps a
generation counter; responses and retries for an older generation are
dropped.
"""

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum

from marquee_core import get_logger
from marquee_core.schemas import EntryPage, EntryResponse, EntryType

from .errors import ApiError, ClientErrorKind
from .http import DEFAULT_PAGE_SIZE, EntriesClient
from .retry import RetryPolicy

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[object]]


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FETCHING_NEXT = "fetching_next"
    ERROR = "error"


class InfiniteEntries:
    """Cursor-driven page buffer for the entries list."""

    def __init__(
        self,
        client: EntriesClient,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        search: str | None = None,
        entry_type: EntryType | None = None,
        retry: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the buffer in IDLE state. Nothing is fetched until load_first().

        Args:
            client: Entries API client.
            page_size: Entries requested per page.
            search: Optional title filter.
            entry_type: Optional type filter.
            retry: Backoff policy for page fetches.
            sleep: Awaitable used to wait between retries.
        """
        self._client = client
        self.page_size = page_size
        self.search = search
        self.entry_type = entry_type
        self.retry = retry or RetryPolicy()
        self._sleep = sleep

        self.status = Status.IDLE
        self.pages: list[EntryPage] = []
        self.error: ApiError | None = None
        self.next_page_error: ApiError | None = None
        self._generation = 0
        self._entries: list[EntryResponse] | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def entries(self) -> list[EntryResponse]:
        """All loaded entries in traversal order."""
        if self._entries is None:
            self._entries = [entry for page in self.pages for entry in page.data]
        return self._entries

    @property
    def has_next_page(self) -> bool:
        return bool(self.pages) and self.pages[-1].has_more and bool(self.pages[-1].next_cursor)

    @property
    def is_fetching_next_page(self) -> bool:
        return self.status is Status.FETCHING_NEXT

    def _set_pages(self, pages: list[EntryPage]) -> None:
        self.pages = pages
        self._entries = None

    async def load_first(self) -> None:
        """Discard loaded pages and fetch the first page again."""
        self._generation += 1
        generation = self._generation
        self._set_pages([])
        self.status = Status.LOADING
        self.error = None
        self.next_page_error = None

        try:
            page = await self._fetch(None, generation)
        except ApiError as e:
            if generation != self._generation:
                return
            logger.warning("First page failed", extra={"code": e.code, "status": e.status})
            self.status = Status.ERROR
            self.error = e
            return

        if generation != self._generation:
            logger.debug("Dropping stale first page", extra={"generation": generation})
            return
        self._set_pages([page])
        self.status = Status.READY

    async def fetch_next_page(self) -> bool:
        """
        Append the next page if one exists and no fetch is in flight.

        Returns:
            True when a page was appended.
        """
        if self.status is not Status.READY or not self.has_next_page:
            return False

        # Claimed before the first await so concurrent callers back off
        self.status = Status.FETCHING_NEXT
        self.next_page_error = None
        generation = self._generation
        cursor = self.pages[-1].next_cursor

        try:
            page = await self._fetch(cursor, generation)
        except ApiError as e:
            if generation != self._generation:
                return False
            if e.kind is ClientErrorKind.STALE_CURSOR:
                # The position is gone; resending it would fail forever
                logger.info("Cursor no longer resolves, reloading", extra={"cursor": cursor})
                await self.load_first()
                return False
            logger.warning(
                "Next page failed", extra={"cursor": cursor, "code": e.code, "status": e.status}
            )
            self.next_page_error = e
            self.status = Status.READY
            return False

        if generation != self._generation:
            logger.debug("Dropping stale page", extra={"cursor": cursor})
            return False
        self._set_pages([*self.pages, page])
        self.status = Status.READY
        return True

    async def on_proximity(self, visible: bool) -> bool:
        """Handle the end-of-list sentinel becoming (in)visible."""
        if not visible:
            return False
        return await self.fetch_next_page()

    async def invalidate(self) -> None:
        """Drop all buffered pages and reload from the start."""
        logger.debug("Invalidating entries", extra={"generation": self._generation})
        await self.load_first()

    async def set_filters(
        self, *, search: str | None = None, entry_type: EntryType | None = None
    ) -> None:
        self.search = search
        self.entry_type = entry_type
        await self.load_first()

    async def _fetch(self, cursor: str | None, generation: int) -> EntryPage:
        attempt = 0
        while True:
            try:
                return await self._client.get_entries(
                    cursor, self.page_size, search=self.search, entry_type=self.entry_type
                )
            except ApiError as e:
                if not self.retry.should_retry(e, attempt):
                    raise
                delay = self.retry.delay(attempt)
                logger.info(
                    "Retrying page fetch",
                    extra={"attempt": attempt + 1, "delay": delay, "code": e.code},
                )
                await self._sleep(delay)
                if generation != self._generation:
                    raise
                attempt += 1
