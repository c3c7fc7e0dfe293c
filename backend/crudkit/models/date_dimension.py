"""DateDimension ORM — one row per calendar day for reporting joins.

Invariants:
    - date is unique; every other column is derived from it in from_date()
    - day_number_of_week follows ISO-8601 (Monday=1 .. Sunday=7)
    - week_number / week_numbering_year are ISO-8601 week values
    - unix_time is the UTC midnight timestamp of `date`
"""

import calendar
import uuid
import datetime as dt

from sqlalchemy import Boolean, Date, Integer, BigInteger, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from crudkit.db.base import Base


class DateDimension(Base):
    """Calendar dimension row."""
    __tablename__ = "date_dimensions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, unique=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    quarter: Mapped[int] = mapped_column(Integer, nullable=False)
    week_number: Mapped[int] = mapped_column(Integer, nullable=False)
    day_number_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    day_number_of_year: Mapped[int] = mapped_column(Integer, nullable=False)
    leap_year: Mapped[bool] = mapped_column(Boolean, nullable=False)
    week_numbering_year: Mapped[int] = mapped_column(Integer, nullable=False)
    unix_time: Mapped[int] = mapped_column(BigInteger, nullable=False)

    @classmethod
    def from_date(cls, day: dt.date) -> "DateDimension":
        iso_year, iso_week, iso_weekday = day.isocalendar()
        return cls(
            date=day,
            year=day.year,
            month=day.month,
            day=day.day,
            quarter=(day.month - 1) // 3 + 1,
            week_number=iso_week,
            day_number_of_week=iso_weekday,
            day_number_of_year=day.timetuple().tm_yday,
            leap_year=calendar.isleap(day.year),
            week_numbering_year=iso_year,
            unix_time=int(
                dt.datetime.combine(day, dt.time.min, tzinfo=dt.timezone.utc).timestamp()
            ),
        )
