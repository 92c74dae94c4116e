"""
Pydantic schemas for API requests and responses.
"""

from .entry import (
    ENTRY_ID_MAX_LENGTH,
    ENTRY_ID_PATTERN,
    EntryCountResponse,
    EntryCreate,
    EntryListQuery,
    EntryPage,
    EntryResponse,
    EntryType,
    EntryUpdate,
)
from .envelope import ErrorBody, ErrorResponse, HealthResponse, MessageResponse, SuccessResponse

__all__ = [
    # Entry
    "ENTRY_ID_PATTERN",
    "ENTRY_ID_MAX_LENGTH",
    "EntryType",
    "EntryCreate",
    "EntryUpdate",
    "EntryResponse",
    "EntryPage",
    "EntryListQuery",
    "EntryCountResponse",
    # Envelope
    "SuccessResponse",
    "ErrorBody",
    "ErrorResponse",
    "MessageResponse",
    "HealthResponse",
]
