"""Line-oriented input readers.

- ``ical``: VEVENT block scanner for the agenda tool
- ``songs_csv``: song row parser and multi-file reader for the ranked importer
"""

from .ical import parse_timestamp, read_events, scan_events
from .songs_csv import SongCsvReader, SongLine, parse_song_line, split_fields

__all__ = [
    "parse_timestamp",
    "read_events",
    "scan_events",
    "SongCsvReader",
    "SongLine",
    "parse_song_line",
    "split_fields",
]
