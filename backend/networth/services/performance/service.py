# backend/networth/services/performance/service.py
"""
Performance Service - single entry point for the presentation layer.

- get_account_value(): Current value of one account
- get_account_performance(): Change of one account over a period
- get_account_summary(): Every account period at once
- get_portfolio_performance(): Change of the active portfolio over a period
- get_portfolio_summary(): Every portfolio period at once
- get_account_series() / get_portfolio_series(): Chart data, windowed

Design Principles:
- Dependency Injection: store, clock and calendar via the constructor
- Stateless: every call re-reads the store and re-derives; no caching
- No presentation knowledge: raises domain exceptions only

Usage:
    from networth.services.performance import PerformanceService
    from networth.services.store import SqlAlchemyUpdateStore

    service = PerformanceService(SqlAlchemyUpdateStore(db))
    result = service.get_portfolio_performance(TimePeriod.TODAY)
    print(result.actual_period_label, result.percentage)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from networth.config import settings
from networth.services.exceptions import AccountNotFoundError, InvalidPeriodError
from networth.services.performance.calculators import (
    PerformanceCalculator,
    calculate_current_value,
)
from networth.services.performance.series import (
    filter_series_from,
    generate_account_series,
    generate_portfolio_series,
    last_update_window,
)
from networth.services.performance.types import (
    AccountHistory,
    ChartSeries,
    PerformanceResult,
    TimePeriod,
)
from networth.utils.date_utils import PeriodCalendar, SystemClock

if TYPE_CHECKING:
    from networth.services.protocols import ClockProtocol, UpdateStoreProtocol

logger = logging.getLogger(__name__)


class PerformanceService:
    """
    Orchestrates store reads, calculations and series windowing.

    Attributes:
        _store: Read-only accessor for accounts and updates
        _calculator: Period dispatcher bound to the clock and calendar
    """

    def __init__(
            self,
            store: UpdateStoreProtocol,
            clock: ClockProtocol | None = None,
            calendar: PeriodCalendar | None = None,
    ) -> None:
        """
        Initialize the performance service.

        Args:
            store: Accessor supplying account snapshots
            clock: Source of "now". Defaults to SystemClock.
            calendar: Day/month boundaries. Defaults to settings.timezone.
        """
        self._store = store
        self._calculator = PerformanceCalculator(
            clock=clock or SystemClock(),
            calendar=calendar or PeriodCalendar(settings.timezone),
        )

        logger.info(f"PerformanceService initialized (calendar={self._calculator.calendar!r})")

    # =========================================================================
    # ACCOUNT
    # =========================================================================

    def get_account_value(self, account_id: int) -> Decimal:
        """
        Current value of an account.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        account = self._require_account(account_id)
        return calculate_current_value(account.updates)

    def get_account_performance(
            self,
            account_id: int,
            period: TimePeriod | str,
    ) -> PerformanceResult:
        """
        Change of one account over a period.

        Args:
            account_id: Account to evaluate
            period: TimePeriod or its value/display name ("oneMonth", "1M")

        Raises:
            AccountNotFoundError: If the account does not exist
            InvalidPeriodError: If the period is unknown or is TODAY
        """
        period = TimePeriod.parse(period)
        account = self._require_account(account_id)

        result = self._calculator.account_performance(account.updates, period)
        logger.debug(
            f"Account {account_id} {period.display_name}: "
            f"has_data={result.has_data}, percentage={result.percentage}"
        )
        return result

    def get_account_summary(self, account_id: int) -> dict[TimePeriod, PerformanceResult]:
        """Every account period for one account, at a single instant."""
        account = self._require_account(account_id)
        return self._calculator.account_summary(account.updates)

    def get_account_series(
            self,
            account_id: int,
            period: TimePeriod | str = TimePeriod.ALL_TIME,
    ) -> ChartSeries:
        """
        Chart series for one account, windowed to ``period``.

        Raises:
            AccountNotFoundError: If the account does not exist
            InvalidPeriodError: If the period is unknown or is TODAY
        """
        period = TimePeriod.parse(period)
        if not period.is_account_period:
            raise InvalidPeriodError(
                period.value,
                reason=f"Period '{period.display_name}' is only available for the portfolio",
            )

        account = self._require_account(account_id)
        return self._window(generate_account_series(account.updates), period)

    # =========================================================================
    # PORTFOLIO
    # =========================================================================

    def get_portfolio_performance(self, period: TimePeriod | str) -> PerformanceResult:
        """
        Change of the active portfolio over a period.

        Raises:
            InvalidPeriodError: If the period is unknown
        """
        period = TimePeriod.parse(period)
        accounts = self._active_accounts()

        result = self._calculator.portfolio_performance(accounts, period)
        logger.debug(
            f"Portfolio {period.display_name}: accounts={len(accounts)}, "
            f"has_data={result.has_data}, label='{result.actual_period_label}'"
        )
        return result

    def get_portfolio_summary(self) -> dict[TimePeriod, PerformanceResult]:
        """Every period for the active portfolio, at a single instant."""
        return self._calculator.portfolio_summary(self._active_accounts())

    def get_portfolio_total(self) -> Decimal:
        """Sum of the current values of all active accounts."""
        return sum(
            (calculate_current_value(account.updates) for account in self._active_accounts()),
            Decimal("0"),
        )

    def get_portfolio_series(self, period: TimePeriod | str = TimePeriod.ALL_TIME) -> ChartSeries:
        """
        Portfolio chart series (running total across active accounts).

        Raises:
            InvalidPeriodError: If the period is unknown
        """
        period = TimePeriod.parse(period)
        return self._window(generate_portfolio_series(self._active_accounts()), period)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _require_account(self, account_id: int) -> AccountHistory:
        account = self._store.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def _active_accounts(self) -> list[AccountHistory]:
        return [account for account in self._store.list_accounts(active_only=True) if account.is_active]

    def _window(self, series: ChartSeries, period: TimePeriod) -> ChartSeries:
        """Restrict a full series to the chart window of ``period``."""
        if period is TimePeriod.ALL_TIME:
            return series
        if period is TimePeriod.LAST_UPDATE:
            return last_update_window(series)

        now = self._calculator.now()
        calendar = self._calculator.calendar
        if period is TimePeriod.TODAY:
            start = calendar.start_of_day(now)
        else:
            start = calendar.subtract(now, period.lookback)
        return filter_series_from(series, start)
