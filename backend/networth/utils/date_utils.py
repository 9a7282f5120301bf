# backend/networth/utils/date_utils.py
"""
Date utility functions for the Net Worth Tracker.

Every period boundary depends on "now" and on a calendar's idea of a day
and a month. Both are injected here instead of being read from global
state, so calculations are deterministic under test:

- Clock: SystemClock (real time) or FixedClock (frozen instant)
- PeriodCalendar: start of day and month arithmetic in one timezone
- Lookback: a calendar-aware duration (months + days)

Usage:
    from networth.utils.date_utils import PeriodCalendar, Lookback, SystemClock

    calendar = PeriodCalendar("Europe/London")
    cutoff = calendar.subtract(SystemClock().now(), Lookback(months=1))
"""

import calendar as _calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class Lookback:
    """
    A calendar-aware lookback window.

    Months are subtracted first (clamping the day to the end of shorter
    months: 31 Mar - 1 month = 28/29 Feb), then days.

    Attributes:
        months: Whole calendar months to go back
        days: Whole days to go back
    """
    months: int = 0
    days: int = 0


class SystemClock:
    """Clock returning the real current instant (UTC)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock frozen at a given instant. Used by tests and replays."""

    def __init__(self, instant: datetime) -> None:
        self._instant = ensure_aware(instant)

    def now(self) -> datetime:
        return self._instant


def ensure_aware(instant: datetime) -> datetime:
    """
    Return a timezone-aware datetime.

    Naive values are interpreted as UTC so they can be compared with the
    aware values produced by clocks and the store.
    """
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def shift_months(instant: datetime, months: int) -> datetime:
    """
    Move an instant by whole calendar months, clamping the day.

    Args:
        instant: Starting point
        months: Months to add (negative to go back)

    Returns:
        Same wall-clock time on the shifted month

    Example:
        >>> shift_months(datetime(2024, 3, 31), -1)
        datetime(2024, 2, 29)
    """
    month_index = instant.year * 12 + (instant.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = _calendar.monthrange(year, month)[1]
    return instant.replace(year=year, month=month, day=min(instant.day, last_day))


class PeriodCalendar:
    """
    Calendar used for period boundaries.

    Day and month boundaries are evaluated as wall-clock time in the
    calendar's timezone; results are returned as aware datetimes in that
    timezone (comparable with any other aware datetime).
    """

    def __init__(self, tz: str | tzinfo = "UTC") -> None:
        self.tz: tzinfo = ZoneInfo(tz) if isinstance(tz, str) else tz

    def normalize(self, instant: datetime) -> datetime:
        """Convert an instant to this calendar's timezone."""
        return ensure_aware(instant).astimezone(self.tz)

    def start_of_day(self, instant: datetime) -> datetime:
        """Midnight (local) of the day containing the instant."""
        local = self.normalize(instant)
        midnight = datetime(local.year, local.month, local.day)
        return midnight.replace(tzinfo=self.tz)

    def subtract(self, instant: datetime, lookback: Lookback | timedelta) -> datetime:
        """
        Compute the cutoff instant for a lookback window.

        A plain timedelta is exact elapsed time; a Lookback is evaluated on
        local wall-clock time so "1 month ago" keeps the time of day.
        """
        if isinstance(lookback, timedelta):
            return ensure_aware(instant) - lookback

        local = self.normalize(instant)
        if lookback.months:
            local = shift_months(local, -lookback.months)
        naive = local.replace(tzinfo=None) - timedelta(days=lookback.days)
        return naive.replace(tzinfo=self.tz)

    def __repr__(self) -> str:
        return f"PeriodCalendar({self.tz!s})"


def format_period_date(instant: datetime) -> str:
    """Short human-readable date used in period labels (e.g. '3 Aug 2025')."""
    return f"{instant.day} {instant:%b %Y}"
