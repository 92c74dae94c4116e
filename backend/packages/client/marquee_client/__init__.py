"""Marquee client package."""

from .catalog import EntryCatalog
from .errors import (
    ApiError,
    ClientErrorKind,
    Recovery,
    is_network_error,
    is_server_error,
    is_timeout_error,
    is_validation_error,
    recovery_for,
)
from .events import Action, Level, Notification, NotificationBus, Subscription
from .http import EntriesClient
from .infinite import InfiniteEntries, Status
from .retry import RetryPolicy

__all__ = [
    "Action",
    "ApiError",
    "ClientErrorKind",
    "EntriesClient",
    "EntryCatalog",
    "InfiniteEntries",
    "Level",
    "Notification",
    "NotificationBus",
    "Recovery",
    "RetryPolicy",
    "Status",
    "Subscription",
    "is_network_error",
    "is_server_error",
    "is_timeout_error",
    "is_validation_error",
    "recovery_for",
]
