"""Tests for song CSV parsing and reading."""

from __future__ import annotations

from pathlib import Path

from structlog.testing import capture_logs

from agendarank.models import SortKey
from agendarank.ranking import RankedList
from agendarank.sources.songs_csv import SongCsvReader, parse_song_line, split_fields

ROW = "Adele,Hello,295493,False,2015,82,0.481,0.451,5\n"


def test_split_fields_skips_empty_tokens() -> None:
    """Consecutive commas do not produce empty fields."""
    assert split_fields("a,,b,c\r\n") == ["a", "b", "c"]


def test_field_mapping_for_each_key() -> None:
    """Rank comes from field 5, 6 or 7 depending on the key."""
    assert parse_song_line(ROW, "popularity").record.rank == 82.0
    assert parse_song_line(ROW, "danceability").record.rank == 0.481
    assert parse_song_line(ROW, SortKey.ENERGY).record.rank == 0.451


def test_energy_uses_field_seven() -> None:
    """With empty fields collapsed, energy is the eighth non-empty token."""
    line = parse_song_line("Adele,Hello,x,y,,2015,0.8,0.5,0.9", "energy")
    record = line.record
    assert record.artist == "Adele"
    assert record.title == "Hello"
    assert record.year == 2015
    assert record.rank == 0.9
    assert not line.malformed


def test_unrecognized_key_defaults_rank() -> None:
    """An unknown sort key leaves the rank at 0.0 without a problem."""
    line = parse_song_line(ROW, "tempo")
    assert line.record.rank == 0.0
    assert line.record.year == 2015
    assert not line.malformed


def test_short_line_is_partial() -> None:
    """A short line keeps what it has and reports the shortfall."""
    line = parse_song_line("Adele,Hello\n", "energy")
    assert line.record.artist == "Adele"
    assert line.record.title == "Hello"
    assert line.record.year == 0
    assert line.record.rank == 0.0
    assert line.malformed
    assert "expected 8 fields" in line.problems[0]


def test_non_numeric_values_default_to_zero() -> None:
    """Unparsable year and rank become zero and are reported."""
    line = parse_song_line("A,B,1,True,soon,high,0.2,0.3\n", "popularity")
    assert line.record.year == 0
    assert line.record.rank == 0.0
    assert len(line.problems) == 2


def test_year_accepts_decimal_text() -> None:
    """A year written as a float still parses."""
    assert parse_song_line("A,B,1,True,1999.0,1,2,3\n", "energy").record.year == 1999


def test_reader_skips_header_and_unreadable_files(write_songs, tmp_path: Path) -> None:
    """Missing files are skipped, the others are read in order."""
    first = write_songs("a.csv", ["A,One,1,False,2001,10,0.1,0.9"])
    second = write_songs("b.csv", ["B,Two,1,False,2002,20,0.2,0.8", "", "C,Three,1,False,2003,30,0.3,0.7"])
    missing = tmp_path / "nope.csv"

    reader = SongCsvReader("energy")
    lines = list(reader.read([first, missing, second]))

    assert [line.record.title for line in lines] == ["One", "Two", "Three"]
    assert reader.files_read == [first, second]
    assert reader.files_skipped == [missing]


def test_non_finite_ranks_are_malformed() -> None:
    """nan and inf ranks default to 0.0 and keep the list sorted."""
    lines = [
        parse_song_line(f"A,{value},1,False,2001,10,0.1,{value}\n", "energy")
        for value in ("nan", "0.5", "inf", "0.2", "-inf")
    ]

    assert [line.malformed for line in lines] == [True, False, True, False, True]
    assert "is not a finite number" in lines[0].problems[0]

    ranked = RankedList(line.record for line in lines)
    ranks = [r.rank for r in ranked]
    assert all(a <= b for a, b in zip(ranks, ranks[1:]))
    assert ranks == [0.0, 0.0, 0.0, 0.2, 0.5]


def test_reader_warns_once_per_malformed_line(write_songs) -> None:
    """Each bad row logs song_line_malformed with its line number."""
    path = write_songs("bad.csv", [
        "A,Short",
        "B,Fine,1,False,2002,60,0.2,0.4",
        "C,Loud,1,False,2003,70,0.3,nan",
    ])

    with capture_logs() as logs:
        list(SongCsvReader("energy").read([path]))

    warnings = [entry for entry in logs if entry["event"] == "song_line_malformed"]
    assert [entry["line"] for entry in warnings] == [2, 4]
    assert all(entry["log_level"] == "warning" for entry in warnings)
