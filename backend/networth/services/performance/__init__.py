# backend/networth/services/performance/__init__.py
"""
Performance Package.

This package derives, on demand, everything the dashboards show:
- Current value of an account
- Change metrics: last update, today, 1M, 3M, 1Y, all time
- Chart series for one account or the whole portfolio

Architecture:
    performance/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Value objects (UpdateRecord, PerformanceResult, ...)
    ├── calculators.py           # Pure change/valuation functions
    ├── series.py                # Account and portfolio chart series
    └── service.py               # PerformanceService (orchestrator)

Data Flow:
    UpdateStore → AccountHistory snapshots
        ↓
    calculators / series (pure, re-derived every call)
        ↓
    PerformanceResult / ChartSeries → presentation layer

Usage:
    from networth.services.performance import PerformanceService, TimePeriod

    service = PerformanceService(store)
    service.get_account_performance(account_id=1, period=TimePeriod.THREE_MONTHS)
    list(service.get_portfolio_series(TimePeriod.ONE_YEAR))
"""

from networth.services.performance.calculators import (
    PerformanceCalculator,
    calculate_current_value,
    calculate_change_from_last_update,
    calculate_change_all_time,
    calculate_change_over_period,
    calculate_change_today,
    calculate_portfolio_change_from_last_update,
    calculate_portfolio_change_over_period,
    calculate_portfolio_change_all_time,
)
from networth.services.performance.series import (
    generate_account_series,
    generate_portfolio_series,
    filter_series_from,
    last_update_window,
)
from networth.services.performance.service import PerformanceService
from networth.services.performance.types import (
    UpdateRecord,
    AccountHistory,
    PerformanceResult,
    ChartDataPoint,
    ChartSeries,
    TimePeriod,
)

__all__ = [
    # Main service
    "PerformanceService",

    # Data types
    "UpdateRecord",
    "AccountHistory",
    "PerformanceResult",
    "ChartDataPoint",
    "ChartSeries",
    "TimePeriod",

    # Calculators
    "PerformanceCalculator",
    "calculate_current_value",
    "calculate_change_from_last_update",
    "calculate_change_all_time",
    "calculate_change_over_period",
    "calculate_change_today",
    "calculate_portfolio_change_from_last_update",
    "calculate_portfolio_change_over_period",
    "calculate_portfolio_change_all_time",

    # Series
    "generate_account_series",
    "generate_portfolio_series",
    "filter_series_from",
    "last_update_window",
]
