"""Date range filter for calendar events."""

from ..models import DateBounds, EventRecord, date_key
from . import BaseFilter


class DateRangeFilter(BaseFilter):
    """Filter events by an inclusive day range.

    An event is kept when it starts on or after the start bound and ends on
    or before the end bound. Only the day part of each timestamp takes part
    in the comparison, so an event ending at 23:59 on the end day is kept.
    """

    def __init__(self, bounds: DateBounds):
        """Initialize the date range filter.

        Args:
            bounds: Start and end day (inclusive); a None side is open
        """
        self.bounds = bounds
        self._start_key = date_key(bounds.start) if bounds.start else None
        self._end_key = date_key(bounds.end) if bounds.end else None

    @property
    def name(self) -> str:
        start = self.bounds.start or "*"
        end = self.bounds.end or "*"
        return f"date_range({start}:{end})"

    def reason_to_exclude(self, event: EventRecord) -> str | None:
        if self._start_key is not None and event.start_key < self._start_key:
            return f"Starts {event.start.date()} before {self.bounds.start}"
        if self._end_key is not None and event.end_key > self._end_key:
            return f"Ends {event.end.date()} after {self.bounds.end}"
        return None
