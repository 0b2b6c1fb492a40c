"""
Calendar Grid

Builds the month view: full Monday-start weeks covering the displayed
month, including the leading and trailing days of the neighbouring
months, so the grid is always a whole number of weeks.

Each cell is toned by the day's net balance:
    net > 0            -> SURPLUS
    net < 0            -> DEFICIT
    entries, net == 0  -> EVEN
    no entries         -> EMPTY
"""

import calendar
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from finance_tracker.models.aggregates import (
    CalendarCell,
    DayDetail,
    DayTone,
    DayTotals,
)


WEEKDAY_LABELS = ("Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom")

MONTH_NAMES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

_MONDAY_CALENDAR = calendar.Calendar(firstweekday=calendar.MONDAY)


def tone_for(day_totals: Optional[DayTotals]) -> DayTone:
    """Tone of a day given its totals (None when the day has no entries)."""
    if day_totals is None or not day_totals.entries:
        return DayTone.EMPTY
    if day_totals.net > 0:
        return DayTone.SURPLUS
    if day_totals.net < 0:
        return DayTone.DEFICIT
    return DayTone.EVEN


def month_grid(
    reference: date,
    daily: dict[str, DayTotals],
) -> list[CalendarCell]:
    """
    Cells for the month containing `reference`.

    Args:
        reference: Any day of the month to display
        daily: Output of totals_by_date

    Returns:
        Cells in display order, row by row; len() is a multiple of 7
    """
    cells = []
    for week in _MONDAY_CALENDAR.monthdatescalendar(reference.year, reference.month):
        for day in week:
            totals = daily.get(day.isoformat())
            cells.append(CalendarCell(
                day=day,
                in_month=day.month == reference.month,
                income=totals.income_sum if totals else 0.0,
                expense=totals.expense_sum if totals else 0.0,
                net=totals.net if totals else 0.0,
                entry_count=len(totals.entries) if totals else 0,
                tone=tone_for(totals),
            ))
    return cells


def grid_weeks(cells: list[CalendarCell]) -> list[list[CalendarCell]]:
    """Split a grid into rows of seven."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def day_detail(day: date, daily: dict[str, DayTotals]) -> DayDetail:
    """Entries and totals for the day-detail panel."""
    totals = daily.get(day.isoformat())
    if totals is None:
        return DayDetail(day=day)
    return DayDetail(
        day=day,
        entries=list(totals.entries),
        income=totals.income_sum,
        expense=totals.expense_sum,
    )


def month_label(month: date) -> str:
    """e.g. 'enero 2024'."""
    return f"{MONTH_NAMES[month.month - 1]} {month.year}"


def _shift_month(month: date, delta: int) -> date:
    index = month.year * 12 + (month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


class CalendarCursor(BaseModel):
    """
    Displayed month and selected day.

    Plain cursor state: any month or day is reachable in one step.
    Moving to another month clears the selection.
    """

    model_config = ConfigDict(frozen=True)

    month: date
    selected: Optional[date] = None

    @field_validator("month")
    @classmethod
    def first_of_month(cls, v: date) -> date:
        return v.replace(day=1)

    @classmethod
    def for_today(cls, today: Optional[date] = None) -> "CalendarCursor":
        return cls(month=(today or date.today()).replace(day=1))

    def previous_month(self) -> "CalendarCursor":
        return CalendarCursor(month=_shift_month(self.month, -1))

    def next_month(self) -> "CalendarCursor":
        return CalendarCursor(month=_shift_month(self.month, 1))

    def go_to(self, month: date) -> "CalendarCursor":
        return CalendarCursor(month=month.replace(day=1))

    def select(self, day: date) -> "CalendarCursor":
        return self.model_copy(update={"selected": day})

    def clear_selection(self) -> "CalendarCursor":
        return self.model_copy(update={"selected": None})
