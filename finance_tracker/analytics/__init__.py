"""Analytics package."""

from finance_tracker.analytics.ratios import (
    UNDEFINED_RATIO,
    compute_analytics,
    format_amount,
    format_ratio,
    format_savings_rate,
)

__all__ = [
    "UNDEFINED_RATIO",
    "compute_analytics",
    "format_amount",
    "format_ratio",
    "format_savings_rate",
]
