"""Agenda text rendering.

Output shape for two events on one day and one on the next::

    January 15, 2023
    ----------------
     9:00 AM to 10:30 AM: Standup {{Room 4}}
    12:00 PM to  1:00 PM: Lunch {{Cafe}}

    January 16, 2023
    ----------------
     2:00 PM to  3:00 PM: Review {{Room 2}}
"""

from collections.abc import Iterator
from datetime import date, datetime

from .models import EventRecord

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_day_header(day: date) -> list[str]:
    """Return the ``Month DD, YYYY`` header and its dashed underline."""
    header = f"{MONTH_NAMES[day.month - 1]} {day.day:02d}, {day.year}"
    return [header, "-" * len(header)]


def format_clock(moment: datetime) -> str:
    """12-hour clock time, hour right-aligned to two columns."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour:2d}:{moment.minute:02d} {suffix}"


def format_event_line(event: EventRecord) -> str:
    return (
        f"{format_clock(event.start)} to {format_clock(event.end)}: "
        f"{event.summary} {{{{{event.location}}}}}"
    )


class AgendaFormatter:
    """Renders events into grouped agenda lines.

    Consecutive events that start on the same day share one header. A blank
    line separates day groups. One formatter covers one run.
    """

    def __init__(self):
        self._current_day: date | None = None
        self._headers = 0

    def format(self, event: EventRecord) -> Iterator[str]:
        """Yield the lines needed to print ``event``, header included if due."""
        day = event.start.date()
        if day != self._current_day:
            if self._headers:
                yield ""
            yield from format_day_header(day)
            self._current_day = day
            self._headers += 1
        yield format_event_line(event)

    @property
    def day_count(self) -> int:
        """Number of day headers emitted so far."""
        return self._headers
