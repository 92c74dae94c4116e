"""
Service layer.

Business logic services for the application.
"""

from .entry_service import EntryService
from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageQueryBuilder, clamp_limit

__all__ = [
    "EntryService",
    "PageQueryBuilder",
    "clamp_limit",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
