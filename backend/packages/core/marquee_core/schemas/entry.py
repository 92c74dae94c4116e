"""
Entry schemas.

Request and response models for entry-related operations. Wire names are
camelCase; Python attributes stay snake_case.
"""

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from marquee_database.models import EntryType

# Shape shared by entry ids and cursors
ENTRY_ID_PATTERN = r"^[A-Za-z0-9_-]+$"
ENTRY_ID_MAX_LENGTH = 64

MIN_YEAR = 1800
MAX_YEARS_AHEAD = 10

EntryId = Annotated[
    str, Field(min_length=1, max_length=ENTRY_ID_MAX_LENGTH, pattern=ENTRY_ID_PATTERN)
]
Title = Annotated[str, Field(min_length=1, max_length=255)]
Director = Annotated[str, Field(min_length=1, max_length=255)]
Budget = Annotated[str, Field(min_length=1, max_length=100)]
Location = Annotated[str, Field(min_length=1, max_length=255)]
Duration = Annotated[str, Field(min_length=1, max_length=50)]


def _check_year_range(year: str) -> str:
    latest = datetime.now(UTC).year + MAX_YEARS_AHEAD
    if not MIN_YEAR <= int(year) <= latest:
        raise ValueError(
            f"Year must be between {MIN_YEAR} and {MAX_YEARS_AHEAD} years in the future"
        )
    return year


Year = Annotated[
    str,
    Field(min_length=1, pattern=r"^[0-9]{4}$"),
    AfterValidator(_check_year_range),
]


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EntryCreate(CamelModel):
    """Create entry request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Title
    type: EntryType
    director: Director
    budget: Budget
    location: Location
    duration: Duration
    year: Year


class EntryUpdate(CamelModel):
    """Partial entry update request. Omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Title | None = None
    type: EntryType | None = None
    director: Director | None = None
    budget: Budget | None = None
    location: Location | None = None
    duration: Duration | None = None
    year: Year | None = None

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set by the caller, excluding explicit nulls."""
        return {
            key: value
            for key, value in self.model_dump(mode="json", exclude_unset=True).items()
            if value is not None
        }


class EntryResponse(CamelModel):
    """Entry response model."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    type: EntryType
    director: str
    budget: str
    location: str
    duration: str
    year: str
    created_at: datetime
    updated_at: datetime


class EntryPage(CamelModel):
    """One page of entries plus continuation metadata."""

    data: list[EntryResponse]
    has_more: bool
    next_cursor: str | None = None


class EntryListQuery(CamelModel):
    """Query parameters accepted by the entry list endpoint."""

    cursor: EntryId | None = None
    limit: int | None = None
    search: Annotated[str, Field(max_length=255)] | None = None
    type: EntryType | None = None

    @field_validator("limit", mode="before")
    @classmethod
    def _parse_limit(cls, value: Any) -> int | None:
        # Non-numeric limits fall back to the default page size
        if value is None or isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            return None

    @field_validator("cursor", "search", mode="before")
    @classmethod
    def _blank_as_absent(cls, value: Any) -> Any:
        # An empty cursor means "start from the newest entry"
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value


class EntryCountResponse(CamelModel):
    """Total entry count."""

    count: int
