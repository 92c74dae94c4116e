"""
Entry model definition.

This module defines the Entry model for storing movies and TV shows.
"""

from enum import Enum

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, generate_uuid


class EntryType(str, Enum):
    """Catalog entry type."""

    MOVIE = "MOVIE"
    TV_SHOW = "TV_SHOW"


class Entry(Base, TimestampMixin):
    """
    Catalog entry model.

    Attributes:
        id: Unique entry identifier (UUID), immutable once assigned.
        title: Entry title (unique).
        type: Movie or TV show.
        director: Director name.
        budget: Budget as free text (e.g. "$160M").
        location: Filming location.
        duration: Running time as free text (e.g. "148 min").
        year: Four-digit release year.
    """

    __tablename__ = "entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[EntryType] = mapped_column(String(16), nullable=False)
    director: Mapped[str] = mapped_column(String(255), nullable=False)
    budget: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    duration: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[str] = mapped_column(String(4), nullable=False)

    __table_args__ = (
        UniqueConstraint("title", name="uq_entries_title"),
        # Traversal order for cursor pagination is (created_at desc, id desc)
        Index("ix_entries_created_at_id", "created_at", "id"),
    )
