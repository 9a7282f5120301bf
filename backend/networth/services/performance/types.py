# backend/networth/services/performance/types.py
"""
Data types for the performance engine.

These dataclasses are the engine's inputs and outputs. They are plain
value objects: nothing here touches the database.

Design Principles:
- Immutable (frozen=True): the engine only ever reads updates
- Decimal for ALL monetary values (never float)
- Timezone-aware datetimes (naive values are taken as UTC)
- "Cannot compute" is data (has_data=False), not an exception

Type Hierarchy:
    UpdateRecord        - One timestamped valuation
    AccountHistory      - An account identity plus its (unordered) updates
    PerformanceResult   - Outcome of a change computation
    ChartDataPoint      - One point of a chart series
    ChartSeries         - Lazy, restartable sequence of ChartDataPoint
    TimePeriod          - The periods offered to the presentation layer
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from networth.services.constants import (
    ZERO,
    ONE_MONTH,
    THREE_MONTHS,
    ONE_YEAR,
)
from networth.services.exceptions import InvalidPeriodError
from networth.utils.date_utils import Lookback, ensure_aware


# =============================================================================
# INPUT TYPES
# =============================================================================

@dataclass(frozen=True)
class UpdateRecord:
    """
    One user-entered valuation of an account.

    Attributes:
        value: Account value at that instant
        timestamp: When the valuation was recorded
        account_id: Owning account (a lookup key, not an owning reference)
    """
    value: Decimal
    timestamp: datetime
    account_id: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            # str() first so floats keep their printed digits
            object.__setattr__(self, "value", Decimal(str(self.value)))
        object.__setattr__(self, "timestamp", ensure_aware(self.timestamp))


@dataclass(frozen=True)
class AccountHistory:
    """
    Read-only snapshot of an account and its updates.

    The order of ``updates`` carries no meaning; every calculation sorts
    by timestamp first. For equal timestamps the supplied order is kept.

    Attributes:
        account_id: Unique identity of the account
        name: Display name (not unique)
        updates: Valuations in unspecified order
        is_active: False once the account is closed
        created_at: When the account was created (informational)
        closed_at: When the account was closed (None while active)
    """
    account_id: int
    name: str
    updates: tuple[UpdateRecord, ...] = ()
    is_active: bool = True
    created_at: datetime | None = None
    closed_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.updates, tuple):
            object.__setattr__(self, "updates", tuple(self.updates))

    @property
    def update_count(self) -> int:
        return len(self.updates)


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class PerformanceResult:
    """
    Result of a change-over-period computation.

    Attributes:
        has_data: Whether a meaningful baseline existed
        percentage: Change relative to the baseline, in percent (0 without data)
        absolute: Change in value (0 without data)
        is_positive: True when the change is >= 0 (zero counts as positive)
        actual_period_label: Period actually used (may differ from the nominal one)
        update_count: Number of updates that fed the computation

    Note:
        percentage is already multiplied by 100 (Decimal("20") means +20%).
    """
    has_data: bool
    percentage: Decimal
    absolute: Decimal
    is_positive: bool
    actual_period_label: str = ""
    update_count: int = 0

    @classmethod
    def no_data(cls, label: str = "", update_count: int = 0) -> PerformanceResult:
        """Result for 'cannot compute': zero change, flagged as no data."""
        return cls(
            has_data=False,
            percentage=ZERO,
            absolute=ZERO,
            is_positive=True,
            actual_period_label=label,
            update_count=update_count,
        )


@dataclass(frozen=True)
class ChartDataPoint:
    """
    A single point of a chart series.

    Attributes:
        date: Instant of the point
        value: Account value, or running portfolio total
    """
    date: datetime
    value: Decimal


class ChartSeries:
    """
    Lazy, finite, restartable sequence of chart points.

    Nothing is computed until iteration, and every iteration re-derives the
    points from the captured input, so a series can be consumed any number
    of times.

    Usage:
        series = generate_account_series(updates)
        points = list(series)
        last = series.last()
    """

    def __init__(self, build: Callable[[], Iterable[ChartDataPoint]]) -> None:
        self._build = build

    def __iter__(self) -> Iterator[ChartDataPoint]:
        return iter(self._build())

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None

    def to_list(self) -> list[ChartDataPoint]:
        return list(self)

    def last(self) -> ChartDataPoint | None:
        point = None
        for point in self:
            pass
        return point

    def __repr__(self) -> str:
        return f"ChartSeries({self.to_list()!r})"


# =============================================================================
# TIME PERIODS
# =============================================================================

class TimePeriod(str, Enum):
    """
    Periods offered to the presentation layer.

    TODAY is a portfolio-only period (change since local midnight across
    accounts); the others apply to accounts and to the portfolio.
    """
    LAST_UPDATE = "lastUpdate"
    TODAY = "today"
    ONE_MONTH = "oneMonth"
    THREE_MONTHS = "threeMonths"
    ONE_YEAR = "oneYear"
    ALL_TIME = "allTime"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def lookback(self) -> Lookback | None:
        """Window for lookback periods, None otherwise."""
        return _LOOKBACKS.get(self)

    @property
    def is_account_period(self) -> bool:
        return self is not TimePeriod.TODAY

    @classmethod
    def parse(cls, value: TimePeriod | str) -> TimePeriod:
        """
        Resolve a period from its value ("oneMonth") or display name ("1M").

        Raises:
            InvalidPeriodError: If the value matches no period
        """
        if isinstance(value, cls):
            return value
        for period in cls:
            if value in (period.value, period.display_name, period.name):
                return period
        raise InvalidPeriodError(value)


_DISPLAY_NAMES = {
    TimePeriod.LAST_UPDATE: "Latest",
    TimePeriod.TODAY: "Today",
    TimePeriod.ONE_MONTH: "1M",
    TimePeriod.THREE_MONTHS: "3M",
    TimePeriod.ONE_YEAR: "1Y",
    TimePeriod.ALL_TIME: "Max",
}

_LOOKBACKS = {
    TimePeriod.ONE_MONTH: ONE_MONTH,
    TimePeriod.THREE_MONTHS: THREE_MONTHS,
    TimePeriod.ONE_YEAR: ONE_YEAR,
}
