"""Pure calendar calculations on ISO-8601 weeks (Monday = 1 .. Sunday = 7)."""

import calendar
from dataclasses import dataclass
from datetime import date, datetime

DAYS_PER_WEEK = 7


def as_date(value: date) -> date:
    """Return the calendar date of ``value``; time of day is dropped."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"expected a date, got {type(value).__name__}")


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def first_weekday_of_month(d: date) -> int:
    """ISO weekday (1..7) of the first day of ``d``'s month."""
    return d.replace(day=1).isoweekday()


def days_in_month(d: date) -> int:
    """Return the number of days in the month of ``d``."""
    return calendar.monthrange(d.year, d.month)[1]


def days_in_previous_month(d: date) -> int:
    """Return the number of days in the month before ``d``'s month."""
    year, month = prev_month(d.year, d.month)
    return calendar.monthrange(year, month)[1]


def first_iso_week_of_month(d: date) -> int:
    """ISO week number of the first day of ``d``'s month."""
    return d.replace(day=1).isocalendar()[1]


def last_iso_week_of_month(d: date) -> int:
    """ISO week number of the last day of ``d``'s month."""
    return d.replace(day=days_in_month(d)).isocalendar()[1]


def iso_weeks_in_year(year: int) -> int:
    """Return 52 or 53, the number of ISO weeks in ``year``.

    December 28 always lies in the last ISO week of its own year, unlike
    December 31 which may already belong to week 1 of the next one.
    """
    return date(year, 12, 28).isocalendar()[1]


def month_row_count(d: date) -> int:
    """Number of Monday-started week rows that ``d``'s month touches."""
    leading = first_weekday_of_month(d) - 1
    return (leading + days_in_month(d) + DAYS_PER_WEEK - 1) // DAYS_PER_WEEK


def next_week_number(week: int, weeks_in_year: int) -> int:
    """Advance an ISO week number, wrapping to 1 after the year's last week."""
    if week >= weeks_in_year:
        return 1
    return week + 1


@dataclass(frozen=True)
class MonthFacts:
    """Everything the grid builder needs to know about a reference date."""

    reference: date
    day: int
    weekday: int
    first_weekday: int
    first_week: int
    first_week_year: int
    first_week_year_weeks: int
    last_week: int
    days_in_month: int
    days_in_previous_month: int
    # weeks of the reference year; differs from first_week_year_weeks when
    # January opens in week 52/53 of the previous ISO year
    year_week_count: int
    row_count: int

    @property
    def date_string(self) -> str:
        return self.reference.isoformat()


def month_facts(value: date) -> MonthFacts:
    """Compute all facts for ``value`` at once."""
    d = as_date(value)
    first_year = d.replace(day=1).isocalendar()[0]
    return MonthFacts(
        reference=d,
        day=d.day,
        weekday=d.isoweekday(),
        first_weekday=first_weekday_of_month(d),
        first_week=first_iso_week_of_month(d),
        first_week_year=first_year,
        first_week_year_weeks=iso_weeks_in_year(first_year),
        last_week=last_iso_week_of_month(d),
        days_in_month=days_in_month(d),
        days_in_previous_month=days_in_previous_month(d),
        year_week_count=iso_weeks_in_year(d.year),
        row_count=month_row_count(d),
    )
