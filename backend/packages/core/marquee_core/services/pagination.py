"""
Cursor pagination query builder.

Translates a (cursor, limit) request into a bounded range scan over the
entry store and derives the continuation metadata.

A cursor is the id of the last entry of the previous page. It is an
exclusive lower bound in (created_at desc, id desc) order, so a traversal
never re-scans rows it has already passed: entries inserted after the
first page was read sort before the cursor and are not revisited.
"""

from typing import Any

from marquee_core import get_logger
from marquee_core.errors import CatalogError, ErrorKind
from marquee_core.schemas import EntryPage, EntryResponse, EntryType
from marquee_database.store import EntryStore

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def clamp_limit(
    limit: Any,
    *,
    default: int = DEFAULT_PAGE_SIZE,
    maximum: int = MAX_PAGE_SIZE,
) -> int:
    """
    Resolve a requested page size to an effective one.

    Absent, non-numeric, zero or negative values fall back to the default;
    values above the maximum are capped.

    Args:
        limit: Requested page size as received.
        default: Page size used when the request is absent or invalid.
        maximum: Upper bound.

    Returns:
        Effective page size in [1, maximum].
    """
    if limit is None or isinstance(limit, bool):
        return default
    try:
        value = int(limit)
    except (TypeError, ValueError):
        return default
    if value < 1:
        return default
    return min(value, maximum)


class PageQueryBuilder:
    """Builds entry pages from the store using limit+1 look-ahead."""

    def __init__(
        self,
        store: EntryStore,
        *,
        default_limit: int = DEFAULT_PAGE_SIZE,
        max_limit: int = MAX_PAGE_SIZE,
    ):
        self.store = store
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def build_page(
        self,
        cursor: str | None = None,
        limit: Any = None,
        *,
        search: str | None = None,
        entry_type: EntryType | None = None,
    ) -> EntryPage:
        """
        Build one page of entries.

        Args:
            cursor: Id of the last entry already delivered, or None for the first page.
            limit: Requested page size; clamped to [1, max_limit].
            search: Optional case-insensitive title filter.
            entry_type: Optional type filter.

        Returns:
            Page with data, has_more and next_cursor.

        Raises:
            CatalogError: INVALID_CURSOR if the cursor does not resolve to a position.
        """
        effective_limit = clamp_limit(limit, default=self.default_limit, maximum=self.max_limit)

        position = None
        if cursor:
            position = await self.store.position_of(cursor)
            if position is None:
                # Restarting from the top would silently duplicate or skip rows
                logger.info("Unresolvable pagination cursor", extra={"cursor": cursor})
                raise CatalogError(
                    ErrorKind.INVALID_CURSOR,
                    "Pagination cursor does not refer to an existing entry",
                    details={"cursor": cursor},
                )

        rows = await self.store.range_after(
            position, effective_limit + 1, search=search, entry_type=entry_type
        )

        has_more = len(rows) > effective_limit
        if has_more:
            rows = rows[:effective_limit]

        next_cursor = rows[-1].id if has_more and rows else None

        return EntryPage(
            data=[EntryResponse.model_validate(row) for row in rows],
            has_more=has_more,
            next_cursor=next_cursor,
        )
