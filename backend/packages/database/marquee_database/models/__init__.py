"""
Database models package.

This module exports all SQLAlchemy models for the Marquee application.
"""

from .base import Base, TimestampMixin, generate_uuid, utc_now
from .entry import Entry, EntryType

__all__ = [
    "Base",
    "TimestampMixin",
    "generate_uuid",
    "utc_now",
    "Entry",
    "EntryType",
]
