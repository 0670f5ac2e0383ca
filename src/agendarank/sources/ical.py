"""iCalendar-like event scanner.

Only a tiny subset of the format is understood: blocks delimited by
``BEGIN:VEVENT`` / ``END:VEVENT`` lines and, inside a block, the
``DTSTART:``, ``DTEND:``, ``SUMMARY:`` and ``LOCATION:`` properties. Every
other line is ignored.
"""

import re
from collections.abc import Iterable, Iterator
from datetime import datetime
from pathlib import Path

from ..logging import get_logger
from ..models import EventRecord

logger = get_logger(__name__)

BEGIN_MARKER = "BEGIN:VEVENT"
END_MARKER = "END:VEVENT"

FIELD_PREFIXES = {
    "DTSTART:": "start",
    "DTEND:": "end",
    "SUMMARY:": "summary",
    "LOCATION:": "location",
}

# YYYYMMDDTHHMM, anything after the minutes (seconds, zone) is ignored
_TIMESTAMP_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})T(\d{2})(\d{2})")


def parse_timestamp(value: str) -> datetime:
    """Parse a ``YYYYMMDDTHHMM[SS][Z]`` timestamp to a naive datetime.

    Raises:
        ValueError: If the value does not start with a valid timestamp
    """
    match = _TIMESTAMP_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid timestamp: {value!r}")
    year, month, day, hour, minute = (int(part) for part in match.groups())
    return datetime(year, month, day, hour, minute)


def _event_from_fields(fields: dict[str, str]) -> EventRecord:
    missing = [name for name in ("start", "end") if name not in fields]
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} timestamp")
    return EventRecord(
        start=parse_timestamp(fields["start"]),
        end=parse_timestamp(fields["end"]),
        summary=fields.get("summary", ""),
        location=fields.get("location", ""),
    )


def scan_events(lines: Iterable[str], source: str = "<stream>") -> Iterator[EventRecord]:
    """Yield one EventRecord per complete VEVENT block, in file order.

    Blocks with a missing or unparsable timestamp are skipped with a warning.
    A block left open at end of input is dropped.
    """
    fields: dict[str, str] | None = None

    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")

        if fields is None:
            if line.startswith(BEGIN_MARKER):
                fields = {}
            continue

        if line.startswith(END_MARKER):
            try:
                yield _event_from_fields(fields)
            except ValueError as e:
                logger.warning(
                    "event_block_skipped",
                    source=source,
                    line=lineno,
                    error=str(e),
                )
            fields = None
            continue

        for prefix, name in FIELD_PREFIXES.items():
            if line.startswith(prefix):
                value = line[len(prefix):]
                # Timestamps stop at the first whitespace
                if name in ("start", "end"):
                    parts = value.split()
                    value = parts[0] if parts else ""
                fields[name] = value
                break

    if fields is not None:
        logger.warning("event_block_unterminated", source=source)


def read_events(path: Path, encoding: str = "utf-8") -> Iterator[EventRecord]:
    """Scan a calendar file.

    The file is opened before the first event is requested, so a missing or
    unreadable file raises OSError at the first ``next()`` call.
    """
    with open(path, "r", encoding=encoding, errors="replace") as handle:
        logger.info("calendar_file_opened", path=str(path))
        yield from scan_events(handle, source=str(path))
