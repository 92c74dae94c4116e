"""
Catalog error taxonomy.

Every failure that crosses the service boundary is a CatalogError tagged
with an ErrorKind. The kind decides the HTTP status; the code is the stable
identifier clients match on.
"""

from enum import Enum
from typing import Any, assert_never

from sqlalchemy.exc import IntegrityError


class ErrorKind(str, Enum):
    """Classification of catalog failures."""

    VALIDATION = "validation"
    INVALID_CURSOR = "invalid_cursor"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


class ErrorCode:
    """Stable error codes carried in the response envelope."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_QUERY_PARAMS = "INVALID_QUERY_PARAMS"
    INVALID_ENTRY_DATA = "INVALID_ENTRY_DATA"
    INVALID_ENTRY_ID = "INVALID_ENTRY_ID"
    INVALID_UPDATE_DATA = "INVALID_UPDATE_DATA"
    INVALID_CURSOR = "INVALID_CURSOR"
    ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    WRITE_RATE_LIMIT_EXCEEDED = "WRITE_RATE_LIMIT_EXCEEDED"
    FETCH_ENTRIES_ERROR = "FETCH_ENTRIES_ERROR"
    FETCH_ENTRY_ERROR = "FETCH_ENTRY_ERROR"
    CREATE_ENTRY_ERROR = "CREATE_ENTRY_ERROR"
    UPDATE_ENTRY_ERROR = "UPDATE_ENTRY_ERROR"
    DELETE_ENTRY_ERROR = "DELETE_ENTRY_ERROR"
    COUNT_ENTRIES_ERROR = "COUNT_ENTRIES_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_DEFAULT_CODES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: ErrorCode.VALIDATION_ERROR,
    ErrorKind.INVALID_CURSOR: ErrorCode.INVALID_CURSOR,
    ErrorKind.NOT_FOUND: ErrorCode.ENTRY_NOT_FOUND,
    ErrorKind.DUPLICATE: ErrorCode.DUPLICATE_ENTRY,
    ErrorKind.RATE_LIMITED: ErrorCode.RATE_LIMIT_EXCEEDED,
    ErrorKind.INTERNAL: ErrorCode.INTERNAL_ERROR,
}


class CatalogError(Exception):
    """
    Typed catalog failure.

    Attributes:
        kind: Error classification.
        message: Human readable message safe to show to clients.
        code: Stable error code; defaults per kind.
        details: Optional structured details (e.g. field errors).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code or _DEFAULT_CODES[kind]
        self.details = details

    @property
    def status_code(self) -> int:
        """HTTP status derived from the error kind."""
        return http_status_for(self.kind)

    def __repr__(self) -> str:
        return f"CatalogError(kind={self.kind.value!r}, code={self.code!r}, message={self.message!r})"


def http_status_for(kind: ErrorKind) -> int:
    """
    Map an error kind to its HTTP status.

    Args:
        kind: Error classification.

    Returns:
        HTTP status code.
    """
    match kind:
        case ErrorKind.VALIDATION | ErrorKind.INVALID_CURSOR:
            return 400
        case ErrorKind.NOT_FOUND:
            return 404
        case ErrorKind.DUPLICATE:
            return 409
        case ErrorKind.RATE_LIMITED:
            return 429
        case ErrorKind.INTERNAL:
            return 500
        case _:
            assert_never(kind)


def is_unique_violation(exc: BaseException) -> bool:
    """
    Check whether a store exception is a uniqueness constraint violation.

    Matches the signatures of PostgreSQL ("duplicate key value violates
    unique constraint") and SQLite ("UNIQUE constraint failed").
    """
    if not isinstance(exc, IntegrityError):
        return False
    text = str(exc.orig if exc.orig is not None else exc).lower()
    return "unique" in text or "duplicate key" in text
