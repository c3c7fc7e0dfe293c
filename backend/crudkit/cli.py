"""crudkit console — administrative commands run outside the HTTP app.

Invariants:
    - Commands configure logging from settings before doing any work
    - Out-of-range years abort with a usage error (exit code 2)
    - The start year is resolved before the end year is validated against it
"""

import asyncio
import logging

import typer
from rich.console import Console
from rich.progress import (
    BarColumn, MofNCompleteColumn, Progress, TextColumn,
    TimeElapsedColumn, TimeRemainingColumn,
)

from crudkit.commands import date_dimension
from crudkit.config import get_settings
from crudkit.db.session import create_session_factory
from crudkit.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="crudkit administrative commands.")

_console = Console()


@app.callback()
def main() -> None:
    """crudkit administrative commands."""


def _year_start_callback(value: int) -> int:
    try:
        return date_dimension.validate_year_start(value)
    except date_dimension.YearRangeError as e:
        raise typer.BadParameter(str(e))


def _year_end_callback(ctx: typer.Context, value: int) -> int:
    year_start = ctx.params.get("year_start", date_dimension.YEAR_MIN)
    try:
        return date_dimension.validate_year_end(value, year_start)
    except date_dimension.YearRangeError as e:
        raise typer.BadParameter(str(e))


@app.command("create-date-dimension-entities")
def create_date_dimension_entities(
    year_start: int = typer.Option(
        date_dimension.YEAR_MIN, "--year-start",
        prompt="Give a year where to start",
        is_eager=True,
        callback=_year_start_callback,
        help=f"First year to create ({date_dimension.YEAR_MIN}-{date_dimension.YEAR_MAX}).",
    ),
    year_end: int = typer.Option(
        date_dimension.YEAR_MAX, "--year-end",
        prompt="Give a year where to end",
        callback=_year_end_callback,
        help="Last year to create, not before the start year.",
    ),
) -> None:
    """Console command to create 'DateDimension' entities."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    _console.rule("Console command to create 'DateDimension' entities")
    logger.info(
        f"Seeding DateDimension rows for {year_start}-{year_end}",
        extra={"year_start": year_start, "year_end": year_end},
    )

    created = asyncio.run(
        _run(settings.database_url, year_start, year_end, settings.date_dimension_batch_size),
    )

    _console.print(f"[green]Created {created} DateDimension entities.[/green]")
    _console.print("[bold green]All done - have a nice day![/bold green]")


async def _run(database_url: str, year_start: int, year_end: int, batch_size: int) -> int:
    session_factory = create_session_factory(database_url)
    progress = Progress(
        TextColumn("{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
        console=_console,
    )
    try:
        with progress:
            task = progress.add_task(
                f"Creating DateDimension entities between years {year_start} and {year_end}...",
                total=date_dimension.day_count(year_start, year_end),
            )
            async with session_factory() as session:
                return await date_dimension.create_entities(
                    session, year_start, year_end, batch_size,
                    progress=lambda n: progress.advance(task, n),
                )
    finally:
        await session_factory.kw["bind"].dispose()


if __name__ == "__main__":
    app()
