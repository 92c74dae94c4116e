"""
Entries router.

Provides endpoints for listing, reading and editing catalog entries.
Input is validated here, before the service is called, so malformed
requests never reach the store.
"""

import re
from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import BaseModel, ValidationError

from marquee_core.errors import CatalogError, ErrorCode, ErrorKind
from marquee_core.schemas import (
    ENTRY_ID_MAX_LENGTH,
    ENTRY_ID_PATTERN,
    EntryCountResponse,
    EntryCreate,
    EntryListQuery,
    EntryPage,
    EntryResponse,
    EntryUpdate,
    MessageResponse,
    SuccessResponse,
)
from marquee_core.services import EntryService

from ..dependencies import get_entry_service
from ..errors import catalog_validation_error
from ..rate_limit import api_rate_limit, write_rate_limit

router = APIRouter(dependencies=[Depends(api_rate_limit)])

ModelT = TypeVar("ModelT", bound=BaseModel)

_ENTRY_ID_RE = re.compile(ENTRY_ID_PATTERN)


def _parse(model: type[ModelT], payload: Any, message: str, code: str) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise catalog_validation_error(e, message, code) from None


def _validate_entry_id(entry_id: str) -> str:
    if len(entry_id) > ENTRY_ID_MAX_LENGTH or not _ENTRY_ID_RE.fullmatch(entry_id):
        raise CatalogError(
            ErrorKind.VALIDATION,
            "Invalid entry ID",
            code=ErrorCode.INVALID_ENTRY_ID,
            details=[{"field": "id", "message": "Invalid entry ID format"}],
        )
    return entry_id


@router.get("", response_model_exclude_none=True)
async def list_entries(
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
    cursor: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    entry_type: Annotated[str | None, Query(alias="type")] = None,
) -> SuccessResponse[EntryPage]:
    """
    Get entries with cursor-based pagination, newest first.

    Args:
        entry_service: Entry service.
        cursor: Id of the last entry from the previous page.
        limit: Page size (1-100, default 20; invalid values use the default).
        search: Optional case-insensitive title filter.
        entry_type: Optional MOVIE / TV_SHOW filter.

    Returns:
        Envelope with entries, hasMore and nextCursor.
    """
    query = _parse(
        EntryListQuery,
        {"cursor": cursor, "limit": limit, "search": search, "type": entry_type},
        "Invalid query parameters",
        ErrorCode.INVALID_QUERY_PARAMS,
    )
    page = await entry_service.list_entries(
        query.cursor, query.limit, search=query.search, entry_type=query.type
    )
    return SuccessResponse(data=page)


@router.get("/count")
async def count_entries(
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
) -> SuccessResponse[EntryCountResponse]:
    """Get the total number of entries."""
    count = await entry_service.count_entries()
    return SuccessResponse(data=EntryCountResponse(count=count))


@router.get("/{entry_id}")
async def get_entry(
    entry_id: str,
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
) -> SuccessResponse[EntryResponse]:
    """
    Get a specific entry.

    Raises:
        CatalogError: If the id is malformed or the entry does not exist.
    """
    entry = await entry_service.get_entry_by_id(_validate_entry_id(entry_id))
    return SuccessResponse(data=entry)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(write_rate_limit)],
)
async def create_entry(
    payload: Annotated[Any, Body()],
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
) -> SuccessResponse[EntryResponse]:
    """
    Create a new entry.

    Args:
        payload: Entry fields (title, type, director, budget, location, duration, year).
        entry_service: Entry service.

    Returns:
        Envelope with the created entry.
    """
    data = _parse(EntryCreate, payload, "Invalid entry data", ErrorCode.INVALID_ENTRY_DATA)
    entry = await entry_service.create_entry(data)
    return SuccessResponse(data=entry)


@router.put("/{entry_id}", dependencies=[Depends(write_rate_limit)])
async def update_entry(
    entry_id: str,
    payload: Annotated[Any, Body()],
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
) -> SuccessResponse[EntryResponse]:
    """
    Update an existing entry with a partial set of fields.

    Returns:
        Envelope with the updated entry.
    """
    entry_id = _validate_entry_id(entry_id)
    data = _parse(EntryUpdate, payload, "Invalid update data", ErrorCode.INVALID_UPDATE_DATA)
    entry = await entry_service.update_entry(entry_id, data)
    return SuccessResponse(data=entry)


@router.delete("/{entry_id}", dependencies=[Depends(write_rate_limit)])
async def delete_entry(
    entry_id: str,
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
) -> SuccessResponse[MessageResponse]:
    """Delete an entry."""
    await entry_service.delete_entry(_validate_entry_id(entry_id))
    return SuccessResponse(data=MessageResponse(message="Entry deleted successfully"))
