"""Song CSV reader for the ranked importer.

Expected layout, one song per line after a header row::

    artist,song,duration_ms,explicit,year,popularity,danceability,energy,...

Lines are split on bare commas and empty tokens are skipped, so the field
positions below count non-empty values only.
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..logging import get_logger
from ..models import SongRecord, SortKey

logger = get_logger(__name__)

ARTIST_FIELD = 0
TITLE_FIELD = 1
YEAR_FIELD = 4
MIN_FIELDS = 8


def _to_int(token: str) -> int | None:
    """Convert a token to int, returning None if invalid."""
    try:
        return int(float(token))
    except (ValueError, OverflowError):
        return None


def _to_float(token: str) -> float | None:
    """Convert a token to a finite float, returning None if invalid."""
    try:
        value = float(token)
    except ValueError:
        return None
    # nan/inf would break the rank ordering
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class SongLine:
    """A parsed CSV line plus whatever was wrong with it."""

    record: SongRecord
    problems: tuple[str, ...] = ()

    @property
    def malformed(self) -> bool:
        return bool(self.problems)


def split_fields(line: str) -> list[str]:
    """Split a CSV line on commas, dropping empty tokens and the line break."""
    return [token for token in line.rstrip("\r\n").split(",") if token]


def parse_song_line(line: str, sort_by: str | SortKey | None) -> SongLine:
    """Build a SongRecord from one CSV data line.

    Never raises: missing or unparsable fields keep their zero defaults and
    are listed in ``SongLine.problems``. When ``sort_by`` is not a recognized
    key the rank stays 0.0 (not reported as a problem here; the caller warns
    once per run).
    """
    key = sort_by if isinstance(sort_by, SortKey) else SortKey.lookup(sort_by)
    tokens = split_fields(line)
    problems: list[str] = []

    if len(tokens) < MIN_FIELDS:
        problems.append(f"expected {MIN_FIELDS} fields, found {len(tokens)}")

    values: dict[str, object] = {}
    if len(tokens) > ARTIST_FIELD:
        values["artist"] = tokens[ARTIST_FIELD]
    if len(tokens) > TITLE_FIELD:
        values["title"] = tokens[TITLE_FIELD]

    if len(tokens) > YEAR_FIELD:
        year = _to_int(tokens[YEAR_FIELD])
        if year is None:
            problems.append(f"year {tokens[YEAR_FIELD]!r} is not a number")
        else:
            values["year"] = year

    if key is not None and len(tokens) > key.field_index:
        raw = tokens[key.field_index]
        rank = _to_float(raw)
        if rank is None:
            problems.append(f"{key.value} {raw!r} is not a finite number")
        else:
            values["rank"] = rank

    return SongLine(record=SongRecord(**values), problems=tuple(problems))


@dataclass
class SongCsvReader:
    """Streams parsed song lines from several CSV files in order.

    Files that cannot be opened are reported and skipped; the remaining
    files are still read.
    """

    sort_by: str
    encoding: str = "utf-8"
    files_read: list[Path] = field(default_factory=list)
    files_skipped: list[Path] = field(default_factory=list)

    def read(self, paths: Iterable[Path]) -> Iterator[SongLine]:
        for path in paths:
            try:
                handle = open(path, "r", encoding=self.encoding, errors="replace", newline="")
            except OSError as e:
                logger.error("song_file_unreadable", path=str(path), error=str(e))
                self.files_skipped.append(path)
                continue

            with handle:
                logger.info("song_file_opened", path=str(path))
                self.files_read.append(path)
                yield from self._read_lines(path, handle)

    def _read_lines(self, path: Path, lines: Iterable[str]) -> Iterator[SongLine]:
        # First line is the column header
        for lineno, line in enumerate(lines, start=1):
            if lineno == 1 or not line.strip():
                continue
            song = parse_song_line(line, self.sort_by)
            if song.malformed:
                logger.warning(
                    "song_line_malformed",
                    path=str(path),
                    line=lineno,
                    problems=list(song.problems),
                )
            yield song
