"""
Entry mutations.

EntryCatalog sends create/update/delete calls, reloads the list after each
successful change and reports the outcome on the notification bus. Failures
are re-raised after being reported so forms can show field errors.
"""

from marquee_core import get_logger
from marquee_core.schemas import EntryCreate, EntryResponse, EntryUpdate

from .errors import ApiError, Recovery, recovery_for
from .events import Action, NotificationBus
from .http import EntriesClient
from .infinite import InfiniteEntries

logger = get_logger(__name__)


class EntryCatalog:
    """Mutation coordinator for catalog entries."""

    def __init__(self, client: EntriesClient, entries: InfiniteEntries, bus: NotificationBus):
        self._client = client
        self.entries = entries
        self.bus = bus

    async def create(self, data: EntryCreate) -> EntryResponse:
        try:
            entry = await self._client.create_entry(data)
        except ApiError as e:
            self._report(e, "Create Entry", "creating")
            raise
        await self.entries.invalidate()
        self.bus.success("Entry created successfully!")
        return entry

    async def update(self, entry_id: str, changes: EntryUpdate) -> EntryResponse:
        try:
            entry = await self._client.update_entry(entry_id, changes)
        except ApiError as e:
            self._report(e, "Update Entry", "updating")
            raise
        await self.entries.invalidate()
        self.bus.success("Entry updated successfully!")
        return entry

    async def delete(self, entry_id: str) -> None:
        try:
            await self._client.delete_entry(entry_id)
        except ApiError as e:
            if recovery_for(e) is Recovery.REFRESH_LIST:
                # Already gone server-side; drop the stale row now
                logger.info("Delete target missing", extra={"entry_id": entry_id})
                self.bus.warning(
                    "Entry was already deleted or not found.",
                    title="Entry Not Found",
                    action=Action("Refresh", self.entries.invalidate),
                )
                await self.entries.invalidate()
            else:
                self._report(e, "Delete Entry", "deleting")
            raise
        await self.entries.invalidate()
        self.bus.success("Entry deleted successfully!")

    def _report(self, error: ApiError, context: str, verb: str) -> None:
        recovery = recovery_for(error)
        logger.warning(
            "%s failed", context, extra={"code": error.code, "recovery": recovery.value}
        )
        refresh = Action("Refresh", self.entries.invalidate)

        match recovery:
            case Recovery.RETRY:
                self.bus.error(
                    error.message,
                    title="Connection Error",
                    action=Action("Retry", self.entries.invalidate),
                )
            case Recovery.REFRESH_LIST:
                self.bus.warning(
                    "Entry not found. It may have been deleted by another user.",
                    title="Entry Not Found",
                    action=refresh,
                )
            case Recovery.FIX_INPUT:
                self.bus.error(error.message, title="Validation Error")
            case Recovery.WAIT:
                self.bus.warning(error.message, title="Slow Down")
            case Recovery.REPORT:
                if error.status >= 500:
                    self.bus.error(
                        f"Server error occurred while {verb} entry. Please try again.",
                        title="Server Error",
                    )
                else:
                    self.bus.error(error.message, title=f"{context} Failed")
