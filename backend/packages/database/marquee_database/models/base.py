"""
Declarative base and shared column mixins.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_uuid() -> str:
    """Generate a new string UUID for primary keys."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current UTC time with microsecond precision."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all Marquee models."""


class TimestampMixin:
    """
    Adds created/updated timestamps.

    Timestamps are assigned in-process rather than by the database clock so
    that rows created within the same second still get distinct sort keys.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )
