"""
Aggregation Functions

Pure derivations over the entry list. Every function takes the full
list and returns a fresh result; nothing is cached or updated
incrementally.

GUARANTEES:
- balance == income_total - expense_total
- per-kind category sums add up to that kind's total
- per-day sums add up to the global totals
"""

import calendar
from datetime import date
from typing import Iterable, Optional, Sequence

from finance_tracker.models.aggregates import (
    CategoryShare,
    CategoryTotals,
    DayTotals,
    TypeTotals,
)
from finance_tracker.models.entry import Entry


def totals_by_type(entries: Iterable[Entry]) -> TypeTotals:
    """Sum expenses and income and derive the balance."""
    income_total = 0.0
    expense_total = 0.0

    for entry in entries:
        if entry.is_income:
            income_total += entry.amount
        else:
            expense_total += entry.amount

    return TypeTotals.from_sums(income_total, expense_total)


def totals_by_category(entries: Iterable[Entry]) -> CategoryTotals:
    """
    Sum amounts per category, one mapping per kind.

    Built in a single pass; key order follows first appearance.
    """
    expense: dict[str, float] = {}
    income: dict[str, float] = {}

    for entry in entries:
        bucket = income if entry.is_income else expense
        bucket[entry.category] = bucket.get(entry.category, 0.0) + entry.amount

    return CategoryTotals(expense=expense, income=income)


def totals_by_date(entries: Iterable[Entry]) -> dict[str, DayTotals]:
    """
    Group entries by their yyyy-MM-dd date string.

    Each day keeps its entries in insertion order.
    """
    days: dict[str, DayTotals] = {}

    for entry in entries:
        day = days.get(entry.date_key)
        if day is None:
            day = days[entry.date_key] = DayTotals()

        day.entries.append(entry)
        if entry.is_income:
            day.income_sum += entry.amount
        else:
            day.expense_sum += entry.amount

    return days


def totals_for_month(
    daily: dict[str, DayTotals],
    year: int,
    month: int,
) -> TypeTotals:
    """
    Totals of one calendar month, from per-day totals.

    Args:
        daily: Output of totals_by_date
        year: Year of the month
        month: Month number (1-12)
    """
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])

    income_total = 0.0
    expense_total = 0.0
    for key, day in daily.items():
        if first.isoformat() <= key <= last.isoformat():
            income_total += day.income_sum
            expense_total += day.expense_sum

    return TypeTotals.from_sums(income_total, expense_total)


def recent_entries(
    entries: Sequence[Entry],
    limit: Optional[int] = None,
) -> list[Entry]:
    """Entries newest-first (reverse insertion order)."""
    newest_first = list(reversed(entries))
    if limit is not None:
        return newest_first[:limit]
    return newest_first


def category_shares(totals: dict[str, float], kind_total: float) -> list[CategoryShare]:
    """
    Turn a category mapping into rows for the breakdown tab.

    percent is 0 for every row when kind_total is 0.
    """
    return [
        CategoryShare(
            category=category,
            amount=amount,
            percent=(amount / kind_total) * 100 if kind_total > 0 else 0.0,
        )
        for category, amount in totals.items()
    ]
