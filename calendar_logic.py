"""Pure calendar calculations, no UI dependencies."""

import calendar
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, timedelta

DAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

GRID_WEEKS = 6
GRID_CELLS = GRID_WEEKS * 7

PREVIOUS = "previous"
CURRENT = "current"
NEXT = "next"

# Earliest/latest months whose full 6-week grid stays inside datetime.date
FIRST_VIEW = (MINYEAR, 2)
LAST_VIEW = (MAXYEAR, 11)


@dataclass(frozen=True)
class GridCell:
    """One day slot of the month grid."""

    date: date
    month_kind: str
    selectable: bool
    selected: bool
    today: bool

    @property
    def day(self) -> int:
        return self.date.day

    @property
    def inert(self) -> bool:
        return self.month_kind != CURRENT


@dataclass(frozen=True)
class DateBounds:
    """Inclusive [min_date, max_date] selection range; either end may be open."""

    min_date: date | None = None
    max_date: date | None = None

    def contains(self, d: date) -> bool:
        return is_within_bounds(d, self.min_date, self.max_date)

    @property
    def is_empty(self) -> bool:
        return (self.min_date is not None and self.max_date is not None
                and self.min_date > self.max_date)


def days_in_month(year: int, month: int) -> int:
    """Return the last valid day number of the month."""
    return calendar.monthrange(year, month)[1]


def first_weekday_of_month(year: int, month: int) -> int:
    """Return the weekday of day 1, Sunday = 0."""
    # date.weekday() is Monday = 0
    return (date(year, month, 1).weekday() + 1) % 7


def is_within_bounds(d: date, min_date: date | None = None,
                     max_date: date | None = None) -> bool:
    if min_date is not None and d < min_date:
        return False
    if max_date is not None and d > max_date:
        return False
    return True


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def clamp_view(year: int, month: int) -> tuple[int, int]:
    """Keep a viewed month inside the range that can render a full grid."""
    return max(FIRST_VIEW, min(LAST_VIEW, (year, month)))


def view_of(d: date) -> tuple[int, int]:
    """Return the viewed month that shows the given date."""
    return clamp_view(d.year, d.month)


def navigate_month(viewed_month: tuple[int, int], direction: str) -> tuple[int, int]:
    """Step the viewed month one calendar month back or forward.

    Browsing is not limited by the selection bounds; it only stops at the
    edges of the range datetime.date can represent.
    """
    year, month = viewed_month
    if direction == PREVIOUS:
        return clamp_view(*prev_month(year, month))
    if direction == NEXT:
        return clamp_view(*next_month(year, month))
    raise ValueError(f"unknown direction: {direction!r}")


def build_grid(viewed_month: tuple[int, int], selected_date: date | None,
               min_date: date | None, max_date: date | None,
               today: date) -> list[GridCell]:
    """Return the 42 cells (6 weeks, Sunday first) for the viewed month.

    Cells before day 1 hold the trailing days of the previous month and
    cells after the last day hold the leading days of the next month. Both
    are inert: they keep the grid rectangular but are never selectable.
    """
    year, month = viewed_month
    start = date(year, month, 1) - timedelta(days=first_weekday_of_month(year, month))

    cells: list[GridCell] = []
    for offset in range(GRID_CELLS):
        d = start + timedelta(days=offset)
        if (d.year, d.month) < viewed_month:
            kind = PREVIOUS
        elif (d.year, d.month) > viewed_month:
            kind = NEXT
        else:
            kind = CURRENT
        cells.append(GridCell(
            date=d,
            month_kind=kind,
            selectable=kind == CURRENT and is_within_bounds(d, min_date, max_date),
            selected=d == selected_date,
            today=d == today,
        ))
    return cells


def grid_rows(cells: list[GridCell]) -> list[list[GridCell]]:
    """Split the flat grid into its 6 week rows."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"
