"""
Client-side error model.

Every failed call surfaces as an ApiError carrying the server's error code
(or a transport-level code) and the HTTP status, 0 when no response was
received. Callers classify errors with the predicates below instead of
catching exception subclasses.
"""

from enum import Enum
from typing import Any, assert_never

NETWORK_ERROR = "NETWORK_ERROR"
TIMEOUT_ERROR = "TIMEOUT_ERROR"
UNKNOWN_ERROR = "UNKNOWN_ERROR"
INVALID_CURSOR = "INVALID_CURSOR"

_HTTP_MESSAGES: dict[int, str] = {
    400: "Invalid request. Please check your input and try again.",
    401: "Authentication required. Please log in and try again.",
    403: "Access denied. You do not have permission to perform this action.",
    404: "The requested resource was not found.",
    409: "Conflict detected. The resource may have been modified by another user.",
    422: "Validation failed. Please check your input and try again.",
    429: "Too many requests. Please wait a moment and try again.",
    500: "Server error occurred. Please try again later.",
    502: "Service temporarily unavailable. Please try again later.",
    503: "Service maintenance in progress. Please try again later.",
}


def http_error_message(status: int) -> str:
    """Generic message for a status whose response body could not be parsed."""
    return _HTTP_MESSAGES.get(
        status, f"Server responded with status {status}. Please try again."
    )


class ClientErrorKind(str, Enum):
    """Coarse classification of a failed call."""

    NETWORK = "network"
    TIMEOUT = "timeout"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STALE_CURSOR = "stale_cursor"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"
    SERVER = "server"
    UNKNOWN = "unknown"


class Recovery(str, Enum):
    """What a user-facing surface should offer after a failure."""

    RETRY = "retry"
    REFRESH_LIST = "refresh_list"
    FIX_INPUT = "fix_input"
    WAIT = "wait"
    REPORT = "report"


class ApiError(Exception):
    """Failed API call."""

    def __init__(self, message: str, code: str, status: int, details: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.details = details

    def __repr__(self) -> str:
        return f"ApiError(code={self.code!r}, status={self.status}, message={self.message!r})"

    @property
    def kind(self) -> ClientErrorKind:
        if self.code == NETWORK_ERROR:
            return ClientErrorKind.NETWORK
        if self.code == TIMEOUT_ERROR:
            return ClientErrorKind.TIMEOUT
        if self.code == INVALID_CURSOR:
            return ClientErrorKind.STALE_CURSOR
        if self.status in (400, 422):
            return ClientErrorKind.VALIDATION
        if self.status == 404:
            return ClientErrorKind.NOT_FOUND
        if self.status == 409:
            return ClientErrorKind.CONFLICT
        if self.status == 429:
            return ClientErrorKind.RATE_LIMITED
        if self.status >= 500:
            return ClientErrorKind.SERVER
        return ClientErrorKind.UNKNOWN


def is_network_error(error: BaseException) -> bool:
    return isinstance(error, ApiError) and error.code == NETWORK_ERROR


def is_timeout_error(error: BaseException) -> bool:
    return isinstance(error, ApiError) and error.code == TIMEOUT_ERROR


def is_validation_error(error: BaseException) -> bool:
    return isinstance(error, ApiError) and error.status in (400, 422)


def is_server_error(error: BaseException) -> bool:
    return isinstance(error, ApiError) and error.status >= 500


def recovery_for(error: BaseException) -> Recovery:
    """
    Pick the recovery a caller should offer for a failure.

    Args:
        error: Exception raised by a client call.

    Returns:
        RETRY for transport failures, REFRESH_LIST when the target or the
        page position vanished, FIX_INPUT for rejected input, WAIT when rate
        limited, REPORT otherwise.
    """
    if not isinstance(error, ApiError):
        return Recovery.REPORT

    kind = error.kind
    match kind:
        case ClientErrorKind.NETWORK | ClientErrorKind.TIMEOUT:
            return Recovery.RETRY
        case ClientErrorKind.NOT_FOUND | ClientErrorKind.STALE_CURSOR:
            return Recovery.REFRESH_LIST
        case ClientErrorKind.VALIDATION | ClientErrorKind.CONFLICT:
            return Recovery.FIX_INPUT
        case ClientErrorKind.RATE_LIMITED:
            return Recovery.WAIT
        case ClientErrorKind.SERVER | ClientErrorKind.UNKNOWN:
            return Recovery.REPORT
        case _:
            assert_never(kind)
