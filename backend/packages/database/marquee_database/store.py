"""
Entry store adapter.

Thin contract over the relational store: point lookups by id and ordered
range scans over the (created_at desc, id desc) traversal order.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Entry, EntryType

# A position in traversal order: (created_at, id) of an existing row
Position = tuple[datetime, str]


class EntryStore:
    """Ordered access to the entries table."""

    def __init__(self, session: AsyncSession):
        """
        Initialize entry store.

        Args:
            session: Database session.
        """
        self.session = session

    async def get(self, entry_id: str) -> Entry | None:
        """Fetch a single entry by id, or None."""
        stmt = select(Entry).where(Entry.id == entry_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def position_of(self, entry_id: str) -> Position | None:
        """
        Resolve the traversal position of an entry.

        Args:
            entry_id: Entry identifier used as cursor.

        Returns:
            (created_at, id) pair, or None when no such row exists.
        """
        stmt = select(Entry.created_at, Entry.id).where(Entry.id == entry_id)
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return row.created_at, row.id

    async def range_after(
        self,
        after: Position | None,
        limit: int,
        *,
        search: str | None = None,
        entry_type: EntryType | None = None,
    ) -> list[Entry]:
        """
        Scan entries in traversal order strictly after a position.

        Args:
            after: Exclusive lower bound, or None to start from the newest entry.
            limit: Maximum number of rows to return.
            search: Optional case-insensitive title substring.
            entry_type: Optional type filter.

        Returns:
            Entries ordered by created_at desc, id desc.
        """
        stmt = select(Entry).order_by(Entry.created_at.desc(), Entry.id.desc()).limit(limit)

        if after is not None:
            created_at, entry_id = after
            stmt = stmt.where(
                or_(
                    Entry.created_at < created_at,
                    and_(Entry.created_at == created_at, Entry.id < entry_id),
                )
            )
        if search:
            stmt = stmt.where(Entry.title.icontains(search, autoescape=True))
        if entry_type is not None:
            stmt = stmt.where(Entry.type == entry_type)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        """Total number of entries."""
        result = await self.session.execute(select(func.count(Entry.id)))
        return result.scalar() or 0

    async def insert(self, values: Mapping[str, Any]) -> Entry:
        """
        Insert and commit a new entry.

        Raises:
            sqlalchemy.exc.IntegrityError: On unique constraint violation.
        """
        entry = Entry(**values)
        self.session.add(entry)
        await self._commit()
        await self.session.refresh(entry)
        return entry

    async def update(self, entry: Entry, values: Mapping[str, Any]) -> Entry:
        """Apply field changes to an entry and commit."""
        for field, value in values.items():
            setattr(entry, field, value)
        await self._commit()
        await self.session.refresh(entry)
        return entry

    async def delete(self, entry: Entry) -> None:
        """Delete an entry and commit."""
        await self.session.delete(entry)
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
