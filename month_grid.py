"""Month-view grid keyed by ISO week number, with the current week marked."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Mapping

from calendar_logic import (
    DAYS_PER_WEEK,
    MonthFacts,
    month_facts,
    next_week_number,
)
from settings import apply_log_level, load_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayCell:
    """One day position of a week row.

    Blank slots keep the adjacent month's day number; only
    ``in_current_month`` says whether the cell is shown.
    """

    day: int
    in_current_month: bool

    def to_dict(self) -> dict:
        return {"day": self.day, "in_current_month": self.in_current_month}


@dataclass(frozen=True)
class WeekRow:
    """One week of the grid; ``cells`` holds positions 1..7 in order."""

    week_number: int
    cells: tuple[DayCell, ...]
    is_current_week: bool = False

    @property
    def days(self) -> Mapping[int, DayCell]:
        """Read-only view of the cells keyed by day position 1..7."""
        return MappingProxyType(dict(enumerate(self.cells, start=1)))

    def days_of_month(self) -> list[int | None]:
        """Return the 7 cells as day numbers, None for adjacent-month slots."""
        return [c.day if c.in_current_month else None for c in self.cells]

    def to_dict(self) -> dict:
        return {
            "is_current_week": self.is_current_week,
            "days": {pos: cell.to_dict() for pos, cell in self.days.items()},
        }


CalendarGrid = dict[int, WeekRow]


def _previous_month_cells(facts: MonthFacts) -> list[DayCell]:
    """Blank cells for the tail of the previous month in the first row."""
    lead = facts.first_weekday - 1
    first_backing = facts.days_in_previous_month - lead + 1
    return [DayCell(first_backing + i, False) for i in range(lead)]


def _build_week(facts: MonthFacts, week_number: int, start_day: int,
                highlight: bool) -> tuple[WeekRow, int]:
    """Build one row from ``start_day``; also return the next row's start day."""
    cells: list[DayCell] = []
    if start_day == 1 and facts.first_weekday > 1:
        cells.extend(_previous_month_cells(facts))

    day = start_day
    in_month = True
    while len(cells) < DAYS_PER_WEEK:
        if in_month and day > facts.days_in_month:
            # month ended mid-row, the rest belongs to the next month
            day = 1
            in_month = False
        cells.append(DayCell(day, in_month))
        day += 1

    is_current = highlight and any(
        c.in_current_month and c.day == facts.day for c in cells
    )
    return WeekRow(week_number, tuple(cells), is_current), day


def _grid_from_facts(facts: MonthFacts, highlight: bool) -> CalendarGrid:
    grid: CalendarGrid = {}
    week = facts.first_week
    day = 1
    for _ in range(facts.row_count):
        row, day = _build_week(facts, week, day, highlight)
        grid[week] = row
        week = next_week_number(week, facts.first_week_year_weeks)

    logger.debug(
        "Built %d rows for %s (weeks %s)",
        len(grid), facts.date_string, list(grid),
    )
    return grid


def build_grid(reference: date, *, highlight: bool = True) -> CalendarGrid:
    """Build the month grid for ``reference``.

    Rows are keyed by ISO week number in chronological order. A month that
    crosses the ISO year boundary (January opening in week 52/53, December
    closing in week 1) wraps its keys once back to 1.
    """
    return _grid_from_facts(month_facts(reference), highlight)


def grid_to_dict(grid: CalendarGrid) -> dict[int, dict]:
    """Plain nested dicts, keys in the grid's week order."""
    return {week: row.to_dict() for week, row in grid.items()}


class MonthCalendar:
    """Month grid for one reference date; facts are computed up front."""

    def __init__(self, reference: date, *, highlight: bool = True) -> None:
        self.facts = month_facts(reference)
        self.highlight = highlight

    @classmethod
    def from_settings(cls, reference: date, settings: dict | None = None) -> MonthCalendar:
        """Create a calendar honouring the stored (or given) settings."""
        if settings is None:
            settings = load_settings()
        apply_log_level(settings)
        return cls(reference, highlight=settings.get("highlight_current_week", True))

    @property
    def reference(self) -> date:
        return self.facts.reference

    def grid(self) -> CalendarGrid:
        return _grid_from_facts(self.facts, self.highlight)

    def current_week(self) -> int | None:
        """ISO week number of the highlighted row, or None."""
        for week, row in self.grid().items():
            if row.is_current_week:
                return week
        return None
