"""
Derived Models for Personal Finance Tracker

These models hold totals computed from the entry list. None of them
are persisted; they are rebuilt from the full list on every render.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from finance_tracker.models.entry import Entry


# =============================================================================
# TOTALS
# =============================================================================

class TypeTotals(BaseModel):
    """Global (or per-period) totals split by kind."""

    expense_total: float = 0.0
    income_total: float = 0.0
    balance: float = Field(
        default=0.0,
        description="income_total - expense_total"
    )

    @classmethod
    def from_sums(cls, income_total: float, expense_total: float) -> "TypeTotals":
        return cls(
            expense_total=expense_total,
            income_total=income_total,
            balance=income_total - expense_total,
        )


class CategoryTotals(BaseModel):
    """Summed amount per category, one mapping per kind."""

    expense: dict[str, float] = Field(default_factory=dict)
    income: dict[str, float] = Field(default_factory=dict)


class DayTotals(BaseModel):
    """Income, expense and entries recorded on a single day."""

    income_sum: float = 0.0
    expense_sum: float = 0.0
    entries: list[Entry] = Field(default_factory=list)

    @property
    def net(self) -> float:
        return self.income_sum - self.expense_sum


class CategoryShare(BaseModel):
    """One row of the category breakdown."""

    category: str
    amount: float
    percent: float = Field(
        ...,
        description="Share of the kind's total, 0-100 (0 when the total is 0)"
    )


# =============================================================================
# ANALYTICS
# =============================================================================

class Analytics(BaseModel):
    """
    Scalar ratios shown on the analytics tab.

    income_expense_ratio is None when there are no expenses; the UI
    shows a sentinel instead of a number.
    """

    entry_count: int = Field(ge=0)
    average_expense: float
    average_income: float
    income_expense_ratio: Optional[float] = None
    savings_rate: float = Field(
        ...,
        description="balance / income * 100, 0 when income is 0"
    )
    is_surplus: bool


# =============================================================================
# CALENDAR
# =============================================================================

class DayTone(str, Enum):
    """
    How a calendar day is colored.

    EVEN and EMPTY are both neutral: EVEN has entries that cancel
    out, EMPTY has none.
    """
    SURPLUS = "surplus"
    DEFICIT = "deficit"
    EVEN = "even"
    EMPTY = "empty"

    @property
    def is_neutral(self) -> bool:
        return self in (DayTone.EVEN, DayTone.EMPTY)


class CalendarCell(BaseModel):
    """One day of the month grid."""

    day: datetime.date
    in_month: bool
    income: float = 0.0
    expense: float = 0.0
    net: float = 0.0
    entry_count: int = 0
    tone: DayTone = DayTone.EMPTY


class DayDetail(BaseModel):
    """What the day-detail panel shows for a selected day."""

    day: datetime.date
    entries: list[Entry] = Field(default_factory=list)
    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense

    @property
    def is_empty(self) -> bool:
        return not self.entries
