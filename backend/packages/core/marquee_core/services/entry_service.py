"""
Entry service.

Wraps the page builder and the entry store with input clamping, existence
checks and error classification. Store failures are logged with their cause
and re-raised as CatalogError with an operation-specific code, so callers
never see storage engine text.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marquee_core import get_logger
from marquee_core.errors import CatalogError, ErrorCode, ErrorKind, is_unique_violation
from marquee_core.schemas import EntryCreate, EntryPage, EntryResponse, EntryType, EntryUpdate
from marquee_database.models import Entry
from marquee_database.store import EntryStore

from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageQueryBuilder

logger = get_logger(__name__)


class EntryService:
    """Catalog entry management service."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        """
        Initialize entry service.

        Args:
            session: Database session.
            default_page_size: Page size when the caller gives none.
            max_page_size: Upper bound on page size.
        """
        self.session = session
        self.store = EntryStore(session)
        self.pages = PageQueryBuilder(
            self.store, default_limit=default_page_size, max_limit=max_page_size
        )

    @asynccontextmanager
    async def _classify(self, operation: str, code: str) -> AsyncIterator[None]:
        """Reclassify unexpected store failures for one operation."""
        try:
            yield
        except CatalogError:
            raise
        except SQLAlchemyError as e:
            if is_unique_violation(e):
                logger.info("Unique constraint violated", extra={"operation": operation})
                raise CatalogError(
                    ErrorKind.DUPLICATE, "Entry with this title already exists"
                ) from e
            logger.exception("Entry store failure", extra={"operation": operation})
            raise CatalogError(
                ErrorKind.INTERNAL, f"Failed to {operation.replace('_', ' ')}", code=code
            ) from e

    async def list_entries(
        self,
        cursor: str | None = None,
        limit: Any = None,
        *,
        search: str | None = None,
        entry_type: EntryType | None = None,
    ) -> EntryPage:
        """
        Get one page of entries, newest first.

        Args:
            cursor: Id of the last entry from the previous page.
            limit: Requested page size; absent or invalid falls back to the default.
            search: Optional case-insensitive title filter.
            entry_type: Optional type filter.

        Returns:
            Entry page.

        Raises:
            CatalogError: INVALID_CURSOR or FETCH_ENTRIES_ERROR.
        """
        async with self._classify("fetch_entries", ErrorCode.FETCH_ENTRIES_ERROR):
            return await self.pages.build_page(
                cursor, limit, search=search, entry_type=entry_type
            )

    async def get_entry_by_id(self, entry_id: str) -> EntryResponse:
        """
        Get a single entry.

        Raises:
            CatalogError: ENTRY_NOT_FOUND or FETCH_ENTRY_ERROR.
        """
        async with self._classify("fetch_entry", ErrorCode.FETCH_ENTRY_ERROR):
            entry = await self._require(entry_id)
            return EntryResponse.model_validate(entry)

    async def create_entry(self, data: EntryCreate) -> EntryResponse:
        """
        Create a new entry.

        Args:
            data: Validated entry fields.

        Returns:
            Created entry with id and timestamps assigned.

        Raises:
            CatalogError: DUPLICATE_ENTRY or CREATE_ENTRY_ERROR.
        """
        async with self._classify("create_entry", ErrorCode.CREATE_ENTRY_ERROR):
            entry = await self.store.insert(data.model_dump(mode="json"))
            logger.info("Entry created", extra={"entry_id": entry.id})
            return EntryResponse.model_validate(entry)

    async def update_entry(self, entry_id: str, data: EntryUpdate) -> EntryResponse:
        """
        Update an existing entry.

        Existence is resolved first so that a missing entry surfaces as
        ENTRY_NOT_FOUND instead of a silent no-op.

        Raises:
            CatalogError: ENTRY_NOT_FOUND, DUPLICATE_ENTRY or UPDATE_ENTRY_ERROR.
        """
        async with self._classify("update_entry", ErrorCode.UPDATE_ENTRY_ERROR):
            entry = await self._require(entry_id)
            changes = data.changes()
            if changes:
                entry = await self.store.update(entry, changes)
                logger.info(
                    "Entry updated", extra={"entry_id": entry_id, "fields": sorted(changes)}
                )
            return EntryResponse.model_validate(entry)

    async def delete_entry(self, entry_id: str) -> None:
        """
        Delete an entry.

        Raises:
            CatalogError: ENTRY_NOT_FOUND or DELETE_ENTRY_ERROR.
        """
        async with self._classify("delete_entry", ErrorCode.DELETE_ENTRY_ERROR):
            entry = await self._require(entry_id)
            await self.store.delete(entry)
            logger.info("Entry deleted", extra={"entry_id": entry_id})

    async def count_entries(self) -> int:
        """Total number of entries."""
        async with self._classify("count_entries", ErrorCode.COUNT_ENTRIES_ERROR):
            return await self.store.count()

    async def _require(self, entry_id: str) -> Entry:
        entry = await self.store.get(entry_id)
        if entry is None:
            raise CatalogError(ErrorKind.NOT_FOUND, "Entry not found", details={"id": entry_id})
        return entry
