# backend/networth/services/performance/calculators.py
"""
Valuation and change calculators.

Pure functions deriving an account's current value and its change over
several periods from an unordered collection of updates, plus the
portfolio-level equivalents.

All functions are stateless: input order never matters (updates are
re-sorted by timestamp first), nothing is cached, and "now" plus the
calendar are always passed in explicitly.

Formulas:
    absolute   = latest - baseline
    percentage = absolute / baseline × 100

Baseline Selection (lookback windows):
    cutoff   = now - lookback
    baseline = latest update with timestamp <= cutoff (inclusive)
               else the first update (account younger than the window)

Zero-Base Guard:
    A percentage against a baseline <= 0 is undefined or misleading, so
    single-account and series-based results report has_data=False with
    zero percentage and zero absolute change.

    The portfolio TODAY metric is the exception: a zero start-of-day total
    with a non-zero change is "all new money" and reports +100%.

Precision Note:
    Values stay Decimal end to end. Percentages are quantized to
    PERCENTAGE_PRECISION; results too large for the Decimal context are
    returned unquantized rather than raising.
"""

import decimal
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

from networth.services.constants import (
    ZERO,
    HUNDRED,
    PERCENTAGE_PRECISION,
    ALL_NEW_MONEY_PERCENTAGE,
    ONE_MONTH,
    THREE_MONTHS,
    ONE_YEAR,
    LABEL_LAST_UPDATE,
    LABEL_ONE_MONTH,
    LABEL_THREE_MONTHS,
    LABEL_ONE_YEAR,
    LABEL_ALL_TIME,
    LABEL_CUSTOM_PERIOD,
)
from networth.services.exceptions import InvalidPeriodError
from networth.services.performance.series import (
    generate_portfolio_series,
    sort_updates,
)
from networth.services.performance.types import (
    AccountHistory,
    ChartDataPoint,
    PerformanceResult,
    TimePeriod,
    UpdateRecord,
)
from networth.services.protocols import ClockProtocol
from networth.utils.date_utils import Lookback, PeriodCalendar, format_period_date

logger = logging.getLogger(__name__)

_LOOKBACK_LABELS = {
    ONE_MONTH: LABEL_ONE_MONTH,
    THREE_MONTHS: LABEL_THREE_MONTHS,
    ONE_YEAR: LABEL_ONE_YEAR,
}


# =============================================================================
# SHARED HELPERS
# =============================================================================

def calculate_percentage_change(absolute: Decimal, baseline: Decimal) -> Decimal:
    """
    Percentage change of ``absolute`` against a non-zero ``baseline``.

    Returns:
        Percent (e.g. Decimal("20.0000") for +20%)
    """
    percentage = absolute / baseline * HUNDRED
    try:
        return percentage.quantize(PERCENTAGE_PRECISION, rounding=ROUND_HALF_UP)
    except decimal.InvalidOperation:
        # Too many digits for the context precision
        return percentage


def compare_values(
        baseline: Decimal,
        latest: Decimal,
        label: str,
        update_count: int,
) -> PerformanceResult:
    """
    Build a PerformanceResult from a baseline and a latest value.

    Applies the zero-base guard: a baseline <= 0 yields has_data=False.
    """
    if baseline <= ZERO:
        logger.debug(f"Zero-base guard applied: baseline={baseline}, latest={latest}")
        return PerformanceResult.no_data(label, update_count)

    absolute = latest - baseline
    return PerformanceResult(
        has_data=True,
        percentage=calculate_percentage_change(absolute, baseline),
        absolute=absolute,
        is_positive=absolute >= ZERO,
        actual_period_label=label,
        update_count=update_count,
    )


def _since_label(instant: datetime, calendar: PeriodCalendar | None) -> str:
    local = calendar.normalize(instant) if calendar is not None else instant
    return f"Since {format_period_date(local)}"


def _nominal_label(lookback: Lookback | timedelta) -> str:
    return _LOOKBACK_LABELS.get(lookback, LABEL_CUSTOM_PERIOD)


# =============================================================================
# ACCOUNT-LEVEL CALCULATIONS
# =============================================================================

def calculate_current_value(updates: Iterable[UpdateRecord]) -> Decimal:
    """
    Current value of an account: the chronologically latest update.

    Returns:
        Latest value, or 0 when there are no updates
    """
    ordered = sort_updates(updates)
    if not ordered:
        return ZERO
    return ordered[-1].value


def calculate_change_from_last_update(updates: Iterable[UpdateRecord]) -> PerformanceResult:
    """
    Change between the second-to-last and the last update.

    Needs at least 2 updates; a previous value <= 0 gives has_data=False.
    """
    ordered = sort_updates(updates)
    if len(ordered) < 2:
        return PerformanceResult.no_data(LABEL_LAST_UPDATE, len(ordered))

    previous, latest = ordered[-2], ordered[-1]
    return compare_values(previous.value, latest.value, LABEL_LAST_UPDATE, len(ordered))


def calculate_change_all_time(updates: Iterable[UpdateRecord]) -> PerformanceResult:
    """
    Change between the first and the last update.

    Needs at least 2 updates; a first value <= 0 gives has_data=False.
    """
    ordered = sort_updates(updates)
    if len(ordered) < 2:
        return PerformanceResult.no_data(LABEL_ALL_TIME, len(ordered))

    return compare_values(ordered[0].value, ordered[-1].value, LABEL_ALL_TIME, len(ordered))


def select_baseline(
        ordered: Sequence[UpdateRecord],
        cutoff: datetime,
) -> tuple[UpdateRecord | None, bool]:
    """
    Pick the baseline update for a lookback window.

    Args:
        ordered: Updates in ascending timestamp order
        cutoff: Window start; an update exactly at the cutoff is eligible

    Returns:
        (baseline, used_fallback). used_fallback is True when no update is
        at or before the cutoff and the first update was used instead.
        baseline is None only for an empty input.
    """
    for update in reversed(ordered):
        if update.timestamp <= cutoff:
            return update, False

    if not ordered:
        return None, False
    return ordered[0], True


def calculate_change_over_period(
        updates: Iterable[UpdateRecord],
        lookback: Lookback | timedelta,
        now: datetime,
        calendar: PeriodCalendar,
) -> PerformanceResult:
    """
    Change over a lookback window (1M, 3M, 1Y or any custom window).

    Args:
        updates: The account's updates, in any order
        lookback: Window length (calendar-aware Lookback or exact timedelta)
        now: Current instant
        calendar: Calendar used to evaluate the window

    Returns:
        PerformanceResult; the label reads "Since <date>" when the account
        is younger than the window and its first update was used.
    """
    ordered = sort_updates(updates)
    label = _nominal_label(lookback)

    if len(ordered) < 2:
        return PerformanceResult.no_data(label, len(ordered))

    cutoff = calendar.subtract(now, lookback)
    baseline, used_fallback = select_baseline(ordered, cutoff)

    if used_fallback:
        label = _since_label(baseline.timestamp, calendar)

    logger.debug(
        f"Period baseline: cutoff={cutoff.isoformat()}, "
        f"baseline={baseline.timestamp.isoformat()}, fallback={used_fallback}"
    )

    return compare_values(baseline.value, ordered[-1].value, label, len(ordered))


# =============================================================================
# PORTFOLIO-LEVEL CALCULATIONS
# =============================================================================

def today_label(accounts_updated: int) -> str:
    """Label for the TODAY metric, e.g. "Today's changes (2 accounts)"."""
    noun = "account" if accounts_updated == 1 else "accounts"
    return f"Today's changes ({accounts_updated} {noun})"


def calculate_change_today(
        accounts: Iterable[AccountHistory],
        now: datetime,
        calendar: PeriodCalendar,
) -> PerformanceResult:
    """
    Portfolio change since the start of today (local calendar day).

    For each account:
        start value   = latest update strictly before midnight (0 if none,
                        so a brand-new account counts fully as today's gain)
        current value = latest update overall

    Zero-Base Handling:
        start total == 0, change != 0 -> has_data, +100% (all new money)
        start total == 0, change == 0 -> has_data, 0%
        start total <  0              -> has_data=False

    Returns:
        PerformanceResult labelled with the number of accounts that have
        at least one update dated today; update_count is the number of
        updates dated today.
    """
    start_of_today = calendar.start_of_day(now)

    start_total = ZERO
    current_total = ZERO
    accounts_updated_today = 0
    updates_today = 0

    for account in accounts:
        ordered = sort_updates(account.updates)
        if not ordered:
            continue

        before_today = [u for u in ordered if u.timestamp < start_of_today]
        todays_count = len(ordered) - len(before_today)

        if before_today:
            start_total += before_today[-1].value
        current_total += ordered[-1].value

        if todays_count:
            accounts_updated_today += 1
            updates_today += todays_count

    label = today_label(accounts_updated_today)
    absolute = current_total - start_total

    if start_total < ZERO:
        logger.debug(f"Negative start-of-day total {start_total}; no percentage")
        return PerformanceResult.no_data(label, updates_today)

    if start_total == ZERO:
        percentage = ALL_NEW_MONEY_PERCENTAGE if absolute != ZERO else ZERO
        return PerformanceResult(
            has_data=True,
            percentage=percentage,
            absolute=absolute,
            is_positive=absolute >= ZERO,
            actual_period_label=label,
            update_count=updates_today,
        )

    return PerformanceResult(
        has_data=True,
        percentage=calculate_percentage_change(absolute, start_total),
        absolute=absolute,
        is_positive=absolute >= ZERO,
        actual_period_label=label,
        update_count=updates_today,
    )


def calculate_portfolio_change_from_last_update(
        accounts: Iterable[AccountHistory],
) -> PerformanceResult:
    """Change between the last two points of the portfolio series."""
    points = generate_portfolio_series(accounts).to_list()
    if len(points) < 2:
        return PerformanceResult.no_data(LABEL_LAST_UPDATE, len(points))

    return compare_values(points[-2].value, points[-1].value, LABEL_LAST_UPDATE, len(points))


def calculate_portfolio_change_over_period(
        accounts: Iterable[AccountHistory],
        lookback: Lookback | timedelta,
        now: datetime,
        calendar: PeriodCalendar,
) -> PerformanceResult:
    """
    Portfolio change over a lookback window, read from the portfolio series.

    Baseline is the running total at the latest series point at or before
    the cutoff; when the portfolio is younger than the window, the first
    point is used and the label reads "Since <date>".
    """
    points = generate_portfolio_series(accounts).to_list()
    label = _nominal_label(lookback)

    if len(points) < 2:
        return PerformanceResult.no_data(label, len(points))

    cutoff = calendar.subtract(now, lookback)
    baseline = _point_at_or_before(points, cutoff)
    if baseline is None:
        baseline = points[0]
        label = _since_label(baseline.date, calendar)

    return compare_values(baseline.value, points[-1].value, label, len(points))


def calculate_portfolio_change_all_time(
        accounts: Iterable[AccountHistory],
        calendar: PeriodCalendar | None = None,
) -> PerformanceResult:
    """Change between the first and last points of the portfolio series."""
    points = generate_portfolio_series(accounts).to_list()
    if len(points) < 2:
        return PerformanceResult.no_data(LABEL_ALL_TIME, len(points))

    label = _since_label(points[0].date, calendar)
    return compare_values(points[0].value, points[-1].value, label, len(points))


def _point_at_or_before(points: Sequence[ChartDataPoint], cutoff: datetime) -> ChartDataPoint | None:
    for point in reversed(points):
        if point.date <= cutoff:
            return point
    return None


# =============================================================================
# CALCULATOR (clock + calendar bound)
# =============================================================================

class PerformanceCalculator:
    """
    Period dispatcher over the pure calculation functions.

    Binds a clock and a calendar so callers can ask for a TimePeriod
    without threading "now" through every call. "now" is read once per
    call, so all periods of one summary share the same instant.

    Attributes:
        _clock: Source of the current instant
        _calendar: Calendar for day/month boundaries
    """

    def __init__(self, clock: ClockProtocol, calendar: PeriodCalendar) -> None:
        self._clock = clock
        self._calendar = calendar

    @property
    def calendar(self) -> PeriodCalendar:
        return self._calendar

    def now(self) -> datetime:
        return self._clock.now()

    def account_performance(
            self,
            updates: Iterable[UpdateRecord],
            period: TimePeriod,
            now: datetime | None = None,
    ) -> PerformanceResult:
        """
        Change of one account over ``period``.

        Raises:
            InvalidPeriodError: For TODAY, which only exists for portfolios
        """
        if now is None:
            now = self.now()

        if period is TimePeriod.LAST_UPDATE:
            return calculate_change_from_last_update(updates)
        if period is TimePeriod.ALL_TIME:
            return calculate_change_all_time(updates)
        if period.lookback is not None:
            return calculate_change_over_period(updates, period.lookback, now, self._calendar)

        raise InvalidPeriodError(
            period.value,
            reason=f"Period '{period.display_name}' is only available for the portfolio",
        )

    def account_summary(self, updates: Iterable[UpdateRecord]) -> dict[TimePeriod, PerformanceResult]:
        """All account periods evaluated at one instant."""
        snapshot = tuple(updates)
        now = self.now()
        return {
            period: self.account_performance(snapshot, period, now=now)
            for period in TimePeriod
            if period.is_account_period
        }

    def portfolio_performance(
            self,
            accounts: Iterable[AccountHistory],
            period: TimePeriod,
            now: datetime | None = None,
    ) -> PerformanceResult:
        """Change of the whole portfolio over ``period``."""
        if now is None:
            now = self.now()

        if period is TimePeriod.TODAY:
            return calculate_change_today(accounts, now, self._calendar)
        if period is TimePeriod.LAST_UPDATE:
            return calculate_portfolio_change_from_last_update(accounts)
        if period is TimePeriod.ALL_TIME:
            return calculate_portfolio_change_all_time(accounts, self._calendar)
        return calculate_portfolio_change_over_period(accounts, period.lookback, now, self._calendar)

    def portfolio_summary(self, accounts: Iterable[AccountHistory]) -> dict[TimePeriod, PerformanceResult]:
        """Every period for the portfolio, evaluated at one instant."""
        snapshot = tuple(accounts)
        now = self.now()
        return {
            period: self.portfolio_performance(snapshot, period, now=now)
            for period in TimePeriod
        }
