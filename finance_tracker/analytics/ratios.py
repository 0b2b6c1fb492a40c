"""
Analytics Derivations

Scalar ratios for the analytics tab, computed on demand from the
aggregates. Read-only display values; nothing here is stored.
"""

from typing import Iterable, Optional

from finance_tracker.aggregation import totals_by_type
from finance_tracker.models.aggregates import Analytics
from finance_tracker.models.entry import Entry


# Shown instead of the income/expense ratio when there are no expenses
UNDEFINED_RATIO = "∞"


def compute_analytics(entries: Iterable[Entry]) -> Analytics:
    """
    Averages, income/expense ratio and savings rate.

    - average_expense: expense total / number of expense entries (0 if none)
    - average_income: income total / number of income entries (0 if none)
    - income_expense_ratio: income / expense, None when expense is 0
    - savings_rate: balance / income * 100, 0 when income is 0
    """
    entries = list(entries)
    totals = totals_by_type(entries)

    expense_count = sum(1 for e in entries if e.is_expense)
    income_count = len(entries) - expense_count

    ratio: Optional[float] = None
    if totals.expense_total > 0:
        ratio = totals.income_total / totals.expense_total

    savings_rate = 0.0
    if totals.income_total > 0:
        savings_rate = (totals.balance / totals.income_total) * 100

    return Analytics(
        entry_count=len(entries),
        average_expense=totals.expense_total / expense_count if expense_count else 0.0,
        average_income=totals.income_total / income_count if income_count else 0.0,
        income_expense_ratio=ratio,
        savings_rate=savings_rate,
        is_surplus=totals.balance >= 0,
    )


def format_ratio(ratio: Optional[float]) -> str:
    if ratio is None:
        return UNDEFINED_RATIO
    return f"{ratio:.2f}"


def format_savings_rate(rate: float) -> str:
    return f"{rate:.1f}%"


def format_amount(amount: float, currency_symbol: str = "$") -> str:
    """Amount with thousands separators, e.g. '$1,234.5'."""
    amount = round(amount, 2)
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{abs(amount):,.2f}".rstrip("0").rstrip(".")
