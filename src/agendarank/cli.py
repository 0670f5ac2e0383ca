"""agendarank CLI using Typer.

Commands:
- agenda: Print the calendar events that fall inside a date range
- rank: Rank songs from CSV files by one metric and write the top rows
"""

from datetime import date, datetime
from pathlib import Path
from typing import Annotated, Literal, Optional

import typer

from .config import get_settings
from .export import song_row
from .logging import configure_logging, get_logger
from .models import DateBounds, RankOptions
from .pipeline import AgendaPipeline, RankPipeline
from .sources import SongCsvReader

app = typer.Typer(
    name="agendarank",
    help="Filter calendar events into an agenda, or rank songs from CSV files.",
    add_completion=False,
)


def parse_date(value: str) -> date:
    """Parse a date string in YYYY/MM/DD format."""
    try:
        return datetime.strptime(value.strip(), "%Y/%m/%d").date()
    except ValueError:
        raise typer.BadParameter(f"Invalid date format: {value}. Use YYYY/MM/DD.")


def parse_file_list(value: str) -> list[Path]:
    """Split a comma-separated list of paths, ignoring empty entries."""
    return [Path(part) for part in value.split(",") if part]


def _report_skipped(paths: list[Path]) -> None:
    for path in paths:
        typer.echo(f"Failed to open file {path} for reading.", err=True)


def _configure(log_level: Optional[str], log_format: Optional[str]) -> None:
    settings = get_settings()
    fmt: Literal["console", "json"] = "json" if (log_format or settings.log_format) == "json" else "console"
    configure_logging(level=log_level or settings.log_level, format=fmt)


@app.command()
def agenda(
    file: Annotated[Path, typer.Option("--file", "-f", help="Calendar file with VEVENT blocks")],
    start: Annotated[Optional[str], typer.Option("--start", "-s", help="First day to include (YYYY/MM/DD)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", "-e", help="Last day to include (YYYY/MM/DD)")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")] = None,
    log_format: Annotated[Optional[str], typer.Option("--log-format", help="Log format (console, json)")] = None,
) -> None:
    """Print the events between two dates, grouped by day.

    Example:
        agendarank agenda --start=2023/01/01 --end=2023/01/31 --file=events.ics
    """
    _configure(log_level, log_format)
    logger = get_logger(__name__)

    try:
        bounds = DateBounds(
            start=parse_date(start) if start else None,
            end=parse_date(end) if end else None,
        )
    except typer.BadParameter as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if bounds.start and bounds.end and bounds.start > bounds.end:
        typer.echo("Error: start date must not be after end date", err=True)
        raise typer.Exit(1)

    try:
        result = AgendaPipeline().run(file, bounds)
    except OSError as e:
        logger.error("calendar_unreadable", path=str(file), error=str(e))
        typer.echo(f"Error: Cannot read calendar file {file}: {e.strerror or e}", err=True)
        raise typer.Exit(1)

    for line in result.lines:
        typer.echo(line)


@app.command()
def rank(
    sort_by: Annotated[str, typer.Option("--sortBy", help="Ranking field: popularity, danceability or energy")],
    files: Annotated[str, typer.Option("--files", help="Comma-separated list of song CSV files")],
    display: Annotated[int, typer.Option("--display", help="Number of rows to write")] = 0,
    energy: Annotated[float, typer.Option("--energy", help="Energy threshold (accepted, not used)")] = 0.0,
    danceability: Annotated[float, typer.Option("--danceability", help="Danceability threshold (accepted, not used)")] = 0.0,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output CSV path (default: output.csv)")] = None,
    preview: Annotated[bool, typer.Option("--preview/--no-preview", help="Also print the written rows")] = False,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")] = None,
    log_format: Annotated[Optional[str], typer.Option("--log-format", help="Log format (console, json)")] = None,
) -> None:
    """Rank songs by one metric and write the lowest-ranked N to a CSV file.

    Example:
        agendarank rank --sortBy=energy --display=10 --files=a.csv,b.csv
    """
    _configure(log_level, log_format)

    options = RankOptions(
        sort_by=sort_by,
        display=display,
        files=parse_file_list(files),
        energy=energy,
        danceability=danceability,
    )

    settings = get_settings()
    reader = SongCsvReader(options.sort_by, encoding=settings.encoding)

    try:
        result = RankPipeline(settings).run(options, output_path=output, reader=reader)
    except OSError as e:
        _report_skipped(reader.files_skipped)
        typer.echo(f"Error: Failed to open {output or settings.output_path} for writing: {e.strerror or e}", err=True)
        raise typer.Exit(1)

    _report_skipped(result.files_skipped)

    if preview:
        for record in result.records:
            typer.echo(",".join(song_row(record)))


def main() -> None:
    """CLI entry point."""
    app()
