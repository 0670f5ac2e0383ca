"""Tests for the ranked CSV writer."""

from __future__ import annotations

from pathlib import Path

from agendarank.export import format_rank, write_ranked_csv
from agendarank.models import SongRecord


def test_format_rank_matches_printf_g() -> None:
    """Whole numbers drop the decimal point, small ones use exponents."""
    assert format_rank(73.0) == "73"
    assert format_rank(0.451) == "0.451"
    assert format_rank(0.00001) == "1e-05"


def test_fields_with_quotes_are_quoted(tmp_path: Path) -> None:
    """A double quote in a title is escaped so the row stays parseable."""
    out = tmp_path / "out.csv"
    records = [
        SongRecord(artist="Prince", title='The "Purple" One', year=1984, rank=0.5),
        SongRecord(artist="Adele", title="Hello", year=2015, rank=0.9),
    ]

    written = write_ranked_csv(out, "energy", records)

    assert written == records
    assert out.read_text(encoding="utf-8").splitlines() == [
        "artist,song,year,energy",
        'Prince,"The ""Purple"" One",1984,0.5',
        "Adele,Hello,2015,0.9",
    ]
