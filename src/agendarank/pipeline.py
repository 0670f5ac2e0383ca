"""Pipeline orchestrators for agendarank.

AgendaPipeline:
1. Open the calendar file (fatal if unreadable)
2. Scan VEVENT blocks
3. Filter by date range
4. Render grouped agenda lines

RankPipeline:
1. Stream song rows from every input file (unreadable files are skipped)
2. Insert each record into the ranked list
3. Write the first N records to the output CSV
"""

from pathlib import Path

from .agenda import AgendaFormatter
from .config import Settings, get_settings
from .export import write_ranked_csv
from .filters import DateRangeFilter, FilterChain
from .logging import get_logger
from .models import AgendaResult, DateBounds, RankOptions, RankResult
from .ranking import RankedList
from .sources import SongCsvReader, read_events

logger = get_logger(__name__)


class AgendaPipeline:
    """Date-range agenda builder for one calendar file."""

    def __init__(self, settings: Settings | None = None):
        """Initialize the pipeline.

        Args:
            settings: Optional settings override
        """
        self.settings = settings or get_settings()

    def run(self, path: Path, bounds: DateBounds) -> AgendaResult:
        """Scan ``path`` and render the events inside ``bounds``.

        Raises:
            OSError: If the calendar file cannot be opened or read
        """
        logger.info(
            "agenda_start",
            path=str(path),
            date_range=f"{bounds.start or '*'} to {bounds.end or '*'}",
        )

        filter_chain = FilterChain().add(DateRangeFilter(bounds))
        formatter = AgendaFormatter()
        result = AgendaResult(source=path)

        for event in read_events(path, encoding=self.settings.encoding):
            result.events_seen += 1
            excluded = filter_chain.check(event)
            if excluded is not None:
                logger.debug("event_excluded", item=excluded.name, reason=excluded.reason)
                result.excluded.append(excluded)
                continue
            result.events_matched += 1
            result.lines.extend(formatter.format(event))

        logger.info(
            "agenda_complete",
            events_seen=result.events_seen,
            events_matched=result.events_matched,
            days=formatter.day_count,
        )
        return result


class RankPipeline:
    """Ranked importer: many song CSVs in, one trimmed CSV out."""

    def __init__(self, settings: Settings | None = None):
        """Initialize the pipeline.

        Args:
            settings: Optional settings override
        """
        self.settings = settings or get_settings()

    def build(self, options: RankOptions, reader: SongCsvReader | None = None) -> tuple[RankedList, int, int]:
        """Read every input file into a ranked list.

        Returns:
            The list, the number of rows read and the number of malformed rows
        """
        reader = reader or SongCsvReader(options.sort_by, encoding=self.settings.encoding)
        ranked = RankedList()
        rows = malformed = 0

        for song in reader.read(options.files):
            ranked.insert(song.record)
            rows += 1
            if song.malformed:
                malformed += 1

        return ranked, rows, malformed

    def run(
        self,
        options: RankOptions,
        output_path: Path | None = None,
        reader: SongCsvReader | None = None,
    ) -> RankResult:
        """Run the importer and write the output CSV.

        Pass ``reader`` to inspect ``files_skipped`` even when the write fails.

        Raises:
            OSError: If the output file cannot be written
        """
        output_path = output_path or self.settings.output_path
        logger.info(
            "rank_start",
            sort_by=options.sort_by,
            display=options.display,
            files=[str(f) for f in options.files],
        )

        if options.sort_key is None:
            logger.warning(
                "sort_key_unrecognized",
                sort_by=options.sort_by,
                detail="every rank defaults to 0.0; newest rows come first",
            )

        reader = reader or SongCsvReader(options.sort_by, encoding=self.settings.encoding)
        ranked, rows, malformed = self.build(options, reader)
        logger.info("ranked_list_built", size=len(ranked), malformed=malformed)

        try:
            written = write_ranked_csv(
                output_path,
                options.sort_by,
                ranked.take(options.display),
                encoding=self.settings.encoding,
            )
        except OSError as e:
            logger.error("output_write_failed", path=str(output_path), error=str(e))
            raise

        logger.info("rank_complete", output=str(output_path), rows_written=len(written))

        return RankResult(
            output_path=output_path,
            sort_by=options.sort_by,
            records=written,
            files_read=reader.files_read,
            files_skipped=reader.files_skipped,
            rows_read=rows,
            malformed_rows=malformed,
        )
