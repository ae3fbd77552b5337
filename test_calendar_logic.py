"""Tests for the pure calendar engine.

Run: python -m pytest -v
"""

from datetime import date, timedelta

import pytest

from calendar_logic import (
    CURRENT,
    FIRST_VIEW,
    GRID_CELLS,
    LAST_VIEW,
    NEXT,
    PREVIOUS,
    DateBounds,
    build_grid,
    days_in_month,
    first_weekday_of_month,
    grid_rows,
    is_within_bounds,
    month_title,
    navigate_month,
    view_of,
)

TODAY = date(2024, 3, 14)


class TestDaysInMonth:
    def test_leap_february(self):
        assert days_in_month(2024, 2) == 29

    def test_common_february(self):
        assert days_in_month(2023, 2) == 28

    def test_century_rules(self):
        assert days_in_month(1900, 2) == 28
        assert days_in_month(2000, 2) == 29

    def test_thirty_and_thirty_one(self):
        assert days_in_month(2024, 4) == 30
        assert days_in_month(2024, 12) == 31


class TestFirstWeekday:
    def test_sunday_is_zero(self):
        # 1 September 2024 was a Sunday
        assert first_weekday_of_month(2024, 9) == 0

    def test_saturday_is_six(self):
        # 1 June 2024 was a Saturday
        assert first_weekday_of_month(2024, 6) == 6

    def test_monday(self):
        assert first_weekday_of_month(2024, 1) == 1


class TestNavigateMonth:
    def test_previous_rolls_back_year(self):
        assert navigate_month((2024, 1), PREVIOUS) == (2023, 12)

    def test_next_rolls_over_year(self):
        assert navigate_month((2024, 12), NEXT) == (2025, 1)

    def test_within_year(self):
        assert navigate_month((2024, 5), NEXT) == (2024, 6)
        assert navigate_month((2024, 5), PREVIOUS) == (2024, 4)

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            navigate_month((2024, 5), "sideways")

    def test_stops_at_representable_edges(self):
        assert navigate_month(FIRST_VIEW, PREVIOUS) == FIRST_VIEW
        assert navigate_month(LAST_VIEW, NEXT) == LAST_VIEW

    def test_view_of_clamps_extreme_dates(self):
        assert view_of(date(1, 1, 5)) == FIRST_VIEW
        assert view_of(date(9999, 12, 31)) == LAST_VIEW
        assert view_of(TODAY) == (2024, 3)


class TestBounds:
    def test_open_bounds(self):
        assert is_within_bounds(TODAY)

    def test_inclusive_ends(self):
        lo, hi = date(2024, 1, 10), date(2024, 1, 20)
        assert is_within_bounds(lo, lo, hi)
        assert is_within_bounds(hi, lo, hi)
        assert not is_within_bounds(lo - timedelta(days=1), lo, hi)
        assert not is_within_bounds(hi + timedelta(days=1), lo, hi)

    def test_inverted_bounds_select_nothing(self):
        bounds = DateBounds(date(2024, 2, 1), date(2024, 1, 1))
        assert bounds.is_empty
        assert not bounds.contains(date(2024, 1, 15))
        assert not bounds.contains(date(2024, 2, 1))


class TestBuildGrid:
    @pytest.mark.parametrize("year,month", [
        (2024, 1), (2024, 2), (2023, 2), (2024, 9), (2024, 6), (2015, 2),
        (2024, 12), (2000, 2), (1, 2), (9999, 11),
    ])
    def test_shape_and_current_run(self, year, month):
        cells = build_grid((year, month), None, None, None, TODAY)
        assert len(cells) == GRID_CELLS

        kinds = [c.month_kind for c in cells]
        current = [c for c in cells if c.month_kind == CURRENT]
        assert len(current) == days_in_month(year, month)
        # one contiguous run of current-month cells
        first = kinds.index(CURRENT)
        assert kinds[first:first + len(current)] == [CURRENT] * len(current)
        assert first == first_weekday_of_month(year, month)
        assert [c.day for c in current] == list(range(1, len(current) + 1))

        # every cell is one day after the previous one
        for a, b in zip(cells, cells[1:]):
            assert b.date - a.date == timedelta(days=1)

    def test_adjacent_month_fill_uses_their_own_lengths(self):
        # March 2024 starts on a Friday: leading cells are Feb 25..29 (leap)
        cells = build_grid((2024, 3), None, None, None, TODAY)
        leading = [c for c in cells if c.month_kind == PREVIOUS]
        assert [c.date for c in leading] == [date(2024, 2, d) for d in range(25, 30)]
        trailing = [c for c in cells if c.month_kind == NEXT]
        assert trailing[0].date == date(2024, 4, 1)
        assert len(leading) + 31 + len(trailing) == GRID_CELLS

    def test_adjacent_cells_are_inert(self):
        cells = build_grid((2024, 3), None, None, None, TODAY)
        for c in cells:
            if c.month_kind != CURRENT:
                assert c.inert
                assert not c.selectable

    def test_bounds_mark_cells_unselectable(self):
        cells = build_grid((2024, 1), None, date(2024, 1, 10), date(2024, 1, 20), TODAY)
        selectable = [c.date for c in cells if c.selectable]
        assert selectable == [date(2024, 1, d) for d in range(10, 21)]

    def test_selected_and_today_flags(self):
        selected = date(2024, 3, 2)
        cells = build_grid((2024, 3), selected, None, None, TODAY)
        assert [c.date for c in cells if c.selected] == [selected]
        assert [c.date for c in cells if c.today] == [TODAY]

    def test_grid_rows(self):
        rows = grid_rows(build_grid((2024, 3), None, None, None, TODAY))
        assert len(rows) == 6
        assert all(len(r) == 7 for r in rows)


def test_month_title():
    assert month_title(2024, 2) == "February 2024"
