"""Date Dimension Seeding — recreates one DateDimension row per calendar day.

Invariants:
    - Years are bounded to [YEAR_MIN, YEAR_MAX] and end year >= start year
    - Existing rows are removed before seeding, in the same transaction
    - The session is flushed and cleared every `batch_size` rows, then once more
      for the remainder, so memory stays flat for long ranges
    - Nothing is committed when seeding fails
    - batch_size is a positive integer
"""

import datetime as dt
import logging
from typing import Callable, Iterator

from sqlalchemy.ext.asyncio import AsyncSession

from crudkit.models.date_dimension import DateDimension
from crudkit.resources.date_dimension import DateDimensionResource

logger = logging.getLogger(__name__)

YEAR_MIN = 1970
YEAR_MAX = 2047
DEFAULT_BATCH_SIZE = 1000


class YearRangeError(ValueError):
    """Given year is outside the accepted range or before the start year."""


def validate_year_start(year) -> int:
    year = _as_int(year)
    if year < YEAR_MIN or year > YEAR_MAX:
        raise YearRangeError(f"Start year must be between {YEAR_MIN} and {YEAR_MAX}")
    return year


def validate_year_end(year, year_start: int) -> int:
    year = _as_int(year)
    if year < YEAR_MIN or year > YEAR_MAX:
        raise YearRangeError(f"End year must be between {YEAR_MIN} and {YEAR_MAX}")
    if year < year_start:
        raise YearRangeError("End year cannot be before given start year")
    return year


def _as_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise YearRangeError(f"'{value}' is not a valid year")


def days_between(year_start: int, year_end: int) -> Iterator[dt.date]:
    """Every date from Jan 1st of `year_start` through Dec 31st of `year_end`."""
    day = dt.date(year_start, 1, 1)
    last = dt.date(year_end, 12, 31)
    while day <= last:
        yield day
        day += dt.timedelta(days=1)


def day_count(year_start: int, year_end: int) -> int:
    return (dt.date(year_end, 12, 31) - dt.date(year_start, 1, 1)).days + 1


async def create_entities(
    session: AsyncSession,
    year_start: int,
    year_end: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
    progress: Callable[[int], None] | None = None,
) -> int:
    """Replace all DateDimension rows with one per day of the range; returns rows created."""
    year_start = validate_year_start(year_start)
    year_end = validate_year_end(year_end, year_start)
    if batch_size < 1:
        raise ValueError(f"Batch size must be positive, got {batch_size}")

    await DateDimensionResource().delete_all(session)

    created = 0
    for day in days_between(year_start, year_end):
        session.add(DateDimension.from_date(day))
        created += 1
        if created % batch_size == 0:
            await session.flush()
            session.expunge_all()
        if progress is not None:
            progress(1)

    await session.flush()
    session.expunge_all()
    await session.commit()

    logger.info(
        f"Created {created} DateDimension rows",
        extra={"rows": created, "year_start": year_start, "year_end": year_end},
    )
    return created
