"""
Personal Finance Tracker - Source Package

A small personal finance tracker for recording income and expense
entries, viewing aggregated totals, browsing entries in a calendar
and exporting data as JSON.

DESIGN PRINCIPLES:
1. One flat entry list, persisted as a single blob
2. Storage is an injected port
3. Totals are always derived, never stored
4. Storage failures are logged, never fatal
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Tracker Team"
