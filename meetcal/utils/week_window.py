"""
Sunday-aligned calendar week helpers.

Everything here works on calendar dates only; no instants or timezones.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, NamedTuple, Union

from ..core.exceptions import ValidationException

DAYS_PER_WEEK = 7

DateLike = Union[date, str]


class WeekWindow(NamedTuple):
    start_date: date
    dates: List[date]

    @property
    def end_date(self) -> date:
        return self.dates[-1]

    def __contains__(self, day: object) -> bool:
        return day in self.dates


def week_start_for(day: date) -> date:
    # date.weekday() is Monday=0; shift so Sunday=0
    offset = (day.weekday() + 1) % DAYS_PER_WEEK
    return day - timedelta(days=offset)


def window_for(day: date) -> WeekWindow:
    """Return the Sunday..Saturday window containing ``day``."""
    start = week_start_for(day)
    return WeekWindow(start, [start + timedelta(days=i) for i in range(DAYS_PER_WEEK)])


def parse_calendar_date(value: DateLike, *, field: str = "date") -> date:
    """
    Coerce ``value`` into a calendar date.

    Accepts ``date`` objects (datetimes are reduced to their date) and ISO
    ``YYYY-MM-DD`` strings.

    Raises:
        ValidationException: If the value is not a real calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationException(
        f"Invalid {field}: expected YYYY-MM-DD",
        code="INVALID_DATE",
        details={"field": field, "value": str(value)},
    )
