"""agendarank - two small text converters.

- ``agendarank agenda``: date-range agenda from an iCalendar-like file
- ``agendarank rank``: songs from CSV files ranked by one metric
"""

from .cli import main

__all__ = ["main"]
