"""Event filters for the agenda tool.

Filters look at one EventRecord at a time so the calendar can be scanned as
a stream. Add new filters by subclassing BaseFilter and implementing
``reason_to_exclude``.
"""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from ..models import EventRecord, ExcludedItem


@runtime_checkable
class Filter(Protocol):
    """Protocol for event filters."""

    @property
    def name(self) -> str:
        """Unique identifier for this filter."""
        ...

    def check(self, event: EventRecord) -> ExcludedItem | None:
        """Return an ExcludedItem if the event is rejected, else None."""
        ...


class BaseFilter(ABC):
    """Abstract base class for filters with common functionality."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this filter."""
        pass

    @abstractmethod
    def reason_to_exclude(self, event: EventRecord) -> str | None:
        """Explain why the event is rejected, or None to keep it."""
        pass

    def check(self, event: EventRecord) -> ExcludedItem | None:
        reason = self.reason_to_exclude(event)
        if reason is None:
            return None
        return ExcludedItem(
            item_type="event",
            name=describe_event(event),
            reason=reason,
            filter_name=self.name,
        )


class FilterChain:
    """Chain of filters applied sequentially.

    An event is kept only if every filter keeps it. The first filter that
    rejects an event supplies the exclusion reason.
    """

    def __init__(self):
        self._filters: list[Filter] = []

    def add(self, filter: Filter) -> "FilterChain":
        """Add a filter to the chain. Returns self for chaining."""
        self._filters.append(filter)
        return self

    def check(self, event: EventRecord) -> ExcludedItem | None:
        for filter in self._filters:
            excluded = filter.check(event)
            if excluded is not None:
                return excluded
        return None

    @property
    def filters(self) -> list[Filter]:
        """Get all filters in the chain."""
        return self._filters.copy()


def describe_event(event: EventRecord) -> str:
    return f"{event.summary} @ {event.start:%Y-%m-%d %H:%M}"


# Re-export filter implementations
from .date_range import DateRangeFilter

__all__ = [
    "Filter",
    "BaseFilter",
    "FilterChain",
    "DateRangeFilter",
    "describe_event",
]
