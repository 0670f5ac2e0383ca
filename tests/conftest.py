"""Pytest configuration for agendarank tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from agendarank.config import get_settings
from agendarank.logging import configure_logging


@pytest.fixture(autouse=True)
def _isolated_run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Run each test from its own directory with fresh settings."""
    monkeypatch.chdir(tmp_path)
    for name in ("AGENDARANK_OUTPUT_PATH", "AGENDARANK_LOG_LEVEL", "AGENDARANK_LOG_FORMAT", "AGENDARANK_ENCODING"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    configure_logging(level="WARNING")
    yield
    get_settings.cache_clear()


SONG_HEADER = "artist,song,duration_ms,explicit,year,popularity,danceability,energy,key\n"


@pytest.fixture
def write_songs(tmp_path: Path):
    """Write a song CSV (header added) and return its path."""

    def _write(name: str, rows: list[str]) -> Path:
        path = tmp_path / name
        path.write_text(SONG_HEADER + "".join(row + "\n" for row in rows), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_calendar(tmp_path: Path):
    """Write a calendar file from (start, end, summary, location) tuples."""

    def _write(name: str, events: list[tuple[str, str, str, str]]) -> Path:
        lines = ["BEGIN:VCALENDAR"]
        for start, end, summary, location in events:
            lines += [
                "BEGIN:VEVENT",
                f"DTSTART:{start}",
                f"DTEND:{end}",
                f"SUMMARY:{summary}",
                f"LOCATION:{location}",
                "END:VEVENT",
            ]
        lines.append("END:VCALENDAR")
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
