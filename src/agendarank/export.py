"""CSV output for the ranked importer."""

import csv
from collections.abc import Iterable
from pathlib import Path

from .models import SongRecord

HEADER_PREFIX = ["artist", "song", "year"]


def format_rank(rank: float) -> str:
    """Render a rank the way printf's ``%g`` does (``0.5``, ``73``, ``1e-05``)."""
    return f"{rank:g}"


def song_row(record: SongRecord) -> list[str]:
    return [record.artist, record.title, str(record.year), format_rank(record.rank)]


def write_ranked_csv(
    path: Path,
    sort_by: str,
    records: Iterable[SongRecord],
    encoding: str = "utf-8",
) -> list[SongRecord]:
    """Write the header and one row per record; return the records written.

    Raises:
        OSError: If the file cannot be created or written
    """
    written: list[SongRecord] = []
    with path.open("w", newline="", encoding=encoding) as f:
        w = csv.writer(f, lineterminator="\n")
        w.writerow([*HEADER_PREFIX, sort_by])
        for record in records:
            w.writerow(song_row(record))
            written.append(record)
    return written
