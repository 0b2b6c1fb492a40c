"""Calendar grid package."""

from finance_tracker.calendar.grid import (
    MONTH_NAMES,
    WEEKDAY_LABELS,
    CalendarCursor,
    day_detail,
    grid_weeks,
    month_grid,
    month_label,
    tone_for,
)

__all__ = [
    "MONTH_NAMES",
    "WEEKDAY_LABELS",
    "CalendarCursor",
    "day_detail",
    "grid_weeks",
    "month_grid",
    "month_label",
    "tone_for",
]
