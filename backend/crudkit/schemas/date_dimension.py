"""DateDimension DTO — read-only; rows are created by the seeding command only."""

import datetime as dt

from crudkit.schemas.base import RestDto


class DateDimensionDto(RestDto):
    date: dt.date
    year: int
    month: int
    day: int
    quarter: int
    week_number: int
    day_number_of_week: int
    day_number_of_year: int
    leap_year: bool
    week_numbering_year: int
    unix_time: int
