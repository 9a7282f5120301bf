# backend/networth/utils/__init__.py
"""
Utility modules for the Net Worth Tracker.

This package contains cross-cutting utilities used throughout the application:
- logging: Logging configuration and setup
- date_utils: Injectable clock, calendar boundaries and lookback arithmetic

Usage:
    from networth.utils import setup_logging, get_logger
    from networth.utils.date_utils import PeriodCalendar, FixedClock
"""

from networth.utils.date_utils import (
    Lookback,
    PeriodCalendar,
    SystemClock,
    FixedClock,
    format_period_date,
)
from networth.utils.logging import setup_logging, get_logger

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Dates
    "Lookback",
    "PeriodCalendar",
    "SystemClock",
    "FixedClock",
    "format_period_date",
]
