"""Tests for the month grid and calendar cursor."""

from datetime import date

import pytest

from finance_tracker.aggregation import totals_by_date
from finance_tracker.calendar import (
    WEEKDAY_LABELS,
    CalendarCursor,
    day_detail,
    grid_weeks,
    month_grid,
    month_label,
    tone_for,
)
from finance_tracker.models.aggregates import DayTone, DayTotals
from finance_tracker.models.entry import EntryKind


class TestMonthGrid:
    """Tests for month grid layout."""

    @pytest.mark.parametrize("year,month", [
        (2024, 1), (2024, 2), (2023, 2), (2024, 9), (2021, 2), (2024, 12),
    ])
    def test_grid_covers_whole_weeks(self, year, month):
        cells = month_grid(date(year, month, 15), {})
        assert len(cells) % 7 == 0

        in_month = [c.day for c in cells if c.in_month]
        assert in_month[0] == date(year, month, 1)
        assert all(d.month == month for d in in_month)
        assert len(in_month) == len({d for d in in_month})

    def test_weeks_start_on_monday(self):
        cells = month_grid(date(2024, 1, 1), {})
        assert all(week[0].day.weekday() == 0 for week in grid_weeks(cells))
        assert WEEKDAY_LABELS[0] == "Lun"

    def test_leading_days_from_previous_month(self):
        # March 2024 starts on a Friday
        cells = month_grid(date(2024, 3, 1), {})
        assert cells[0].day == date(2024, 2, 26)
        assert not cells[0].in_month
        assert cells[4].day == date(2024, 3, 1)
        assert cells[4].in_month

    def test_february_starting_on_monday_is_four_weeks(self):
        cells = month_grid(date(2021, 2, 1), {})
        assert len(cells) == 28
        assert all(c.in_month for c in cells)

    def test_cells_carry_day_totals(self, scenario_entries):
        daily = totals_by_date(scenario_entries)
        cells = {c.day: c for c in month_grid(date(2024, 1, 1), daily)}

        assert cells[date(2024, 1, 5)].income == 200
        assert cells[date(2024, 1, 5)].expense == 50
        assert cells[date(2024, 1, 5)].tone == DayTone.SURPLUS
        assert cells[date(2024, 1, 5)].entry_count == 2

        assert cells[date(2024, 1, 6)].net == -30
        assert cells[date(2024, 1, 6)].tone == DayTone.DEFICIT

        assert cells[date(2024, 1, 7)].tone == DayTone.EMPTY
        assert cells[date(2024, 1, 7)].entry_count == 0


class TestTone:
    """Tests for day coloring."""

    def test_day_without_entries_is_empty(self):
        assert tone_for(DayTotals(income_sum=10)) == DayTone.EMPTY
        assert tone_for(None) == DayTone.EMPTY

    def test_tone_from_entries(self, make_entry):
        day = date(2024, 4, 2)
        daily = totals_by_date([
            make_entry("1", EntryKind.INCOME, "Ventas", 40, day),
            make_entry("2", EntryKind.EXPENSE, "Pan", 40, day),
        ])
        tone = tone_for(daily[day.isoformat()])
        assert tone == DayTone.EVEN
        assert tone.is_neutral

    def test_non_neutral_tones(self):
        assert not DayTone.SURPLUS.is_neutral
        assert not DayTone.DEFICIT.is_neutral
        assert DayTone.EMPTY.is_neutral


class TestDayDetail:
    """Tests for the day-detail panel."""

    def test_day_with_entries(self, scenario_entries):
        detail = day_detail(date(2024, 1, 5), totals_by_date(scenario_entries))
        assert [e.id for e in detail.entries] == ["1", "2"]
        assert detail.income == 200
        assert detail.expense == 50
        assert detail.net == 150
        assert not detail.is_empty

    def test_day_without_entries(self, scenario_entries):
        detail = day_detail(date(2024, 1, 9), totals_by_date(scenario_entries))
        assert detail.is_empty
        assert detail.net == 0


class TestCalendarCursor:
    """Tests for month navigation and day selection."""

    def test_for_today_starts_on_first_of_month(self):
        cursor = CalendarCursor.for_today(date(2024, 5, 17))
        assert cursor.month == date(2024, 5, 1)
        assert cursor.selected is None

    def test_month_is_normalized(self):
        assert CalendarCursor(month=date(2024, 5, 17)).month == date(2024, 5, 1)

    def test_previous_and_next_cross_years(self):
        cursor = CalendarCursor(month=date(2024, 1, 1))
        assert cursor.previous_month().month == date(2023, 12, 1)
        assert cursor.previous_month().next_month().month == date(2024, 1, 1)
        assert CalendarCursor(month=date(2024, 12, 1)).next_month().month == date(2025, 1, 1)

    def test_select_and_clear(self):
        cursor = CalendarCursor(month=date(2024, 1, 1)).select(date(2024, 1, 5))
        assert cursor.selected == date(2024, 1, 5)
        assert cursor.month == date(2024, 1, 1)
        assert cursor.clear_selection().selected is None

    def test_navigation_clears_selection(self):
        cursor = CalendarCursor(month=date(2024, 1, 1)).select(date(2024, 1, 5))
        assert cursor.next_month().selected is None
        assert cursor.previous_month().selected is None
        assert cursor.go_to(date(2024, 7, 9)).selected is None
        assert cursor.go_to(date(2024, 7, 9)).month == date(2024, 7, 1)

    def test_cursor_is_immutable(self):
        cursor = CalendarCursor(month=date(2024, 1, 1))
        with pytest.raises(ValueError):
            cursor.month = date(2024, 2, 1)


class TestMonthLabel:
    def test_spanish_month_names(self):
        assert month_label(date(2024, 1, 1)) == "enero 2024"
        assert month_label(date(2023, 9, 1)) == "septiembre 2023"
