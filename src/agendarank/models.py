"""Pydantic data models for agendarank.

Song and event records are frozen: once a row or a calendar block has been
parsed, nothing downstream edits it.
"""

from datetime import date, datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class SortKey(str, Enum):
    """Song metrics that can be selected as the ranking field."""

    POPULARITY = "popularity"
    DANCEABILITY = "danceability"
    ENERGY = "energy"

    @property
    def field_index(self) -> int:
        """Position of this metric in a song CSV row."""
        return _SORT_KEY_FIELDS[self]

    @classmethod
    def lookup(cls, name: str | None) -> "SortKey | None":
        """Return the key matching ``name`` exactly, or None when unrecognized."""
        for key in cls:
            if key.value == name:
                return key
        return None


_SORT_KEY_FIELDS = {
    SortKey.POPULARITY: 5,
    SortKey.DANCEABILITY: 6,
    SortKey.ENERGY: 7,
}


class SongRecord(BaseModel):
    """One song row reduced to the fields the ranked importer keeps.

    ``rank`` holds whichever metric was chosen as sort key; the other two
    metrics are dropped at import time.
    """

    model_config = ConfigDict(frozen=True)

    artist: str = Field(default="", description="Artist name as written in the CSV")
    title: str = Field(default="", description="Song title as written in the CSV")
    year: int = Field(default=0, description="Release year, 0 when missing or unparsable")
    rank: float = Field(default=0.0, description="Value of the selected sort key")


class EventRecord(BaseModel):
    """A calendar event extracted from one VEVENT block."""

    model_config = ConfigDict(frozen=True)

    start: datetime = Field(description="DTSTART value, seconds and zone dropped")
    end: datetime = Field(description="DTEND value, seconds and zone dropped")
    summary: str = Field(default="", description="SUMMARY text")
    location: str = Field(default="", description="LOCATION text")

    @property
    def start_key(self) -> int:
        """Integer YYYYMMDD key of the start day."""
        return date_key(self.start.date())

    @property
    def end_key(self) -> int:
        """Integer YYYYMMDD key of the end day."""
        return date_key(self.end.date())


class DateBounds(BaseModel):
    """Inclusive date range requested on the command line.

    A bound left as None is open on that side.
    """

    model_config = ConfigDict(frozen=True)

    start: date | None = None
    end: date | None = None


def date_key(value: date) -> int:
    """Return an integer YYYYMMDD key for comparing days."""
    return value.year * 10000 + value.month * 100 + value.day


class ExcludedItem(BaseModel):
    """An event that a filter rejected."""

    item_type: str = Field(description="Type of item, always 'event' for now")
    name: str = Field(description="Event identifier (summary and start)")
    reason: str = Field(description="Reason for exclusion")
    filter_name: str | None = Field(default=None, description="Filter that caused exclusion")


class RankOptions(BaseModel):
    """Options for one ranked-import run."""

    sort_by: str = Field(description="Requested sort key name, kept verbatim for the CSV header")
    display: int = Field(default=0, description="Number of rows to write")
    files: list[Path] = Field(default_factory=list, description="Input song CSV files, in order")
    energy: float = Field(default=0.0, description="Accepted for compatibility, not used for ranking")
    danceability: float = Field(default=0.0, description="Accepted for compatibility, not used for ranking")

    @property
    def sort_key(self) -> SortKey | None:
        return SortKey.lookup(self.sort_by)


class AgendaResult(BaseModel):
    """Final output of one agenda run."""

    source: Path = Field(description="Calendar file that was scanned")
    lines: list[str] = Field(default_factory=list, description="Rendered agenda lines")
    events_seen: int = Field(default=0, description="Complete event blocks parsed")
    events_matched: int = Field(default=0, description="Events inside the date range")
    excluded: list[ExcludedItem] = Field(default_factory=list, description="Events outside the range")


class RankResult(BaseModel):
    """Final output of one ranked-import run."""

    output_path: Path = Field(description="CSV file that was written")
    sort_by: str = Field(description="Sort key name used for the header")
    records: list[SongRecord] = Field(default_factory=list, description="Rows written, in order")
    files_read: list[Path] = Field(default_factory=list, description="Input files that were read")
    files_skipped: list[Path] = Field(default_factory=list, description="Input files that could not be opened")
    rows_read: int = Field(default=0, description="Data rows inserted into the ranked list")
    malformed_rows: int = Field(default=0, description="Rows that needed default values")
