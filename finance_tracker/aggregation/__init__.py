"""Aggregation package."""

from finance_tracker.aggregation.totals import (
    category_shares,
    recent_entries,
    totals_by_category,
    totals_by_date,
    totals_by_type,
    totals_for_month,
)

__all__ = [
    "category_shares",
    "recent_entries",
    "totals_by_category",
    "totals_by_date",
    "totals_by_type",
    "totals_for_month",
]
