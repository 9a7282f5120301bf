# backend/tests/utils/test_date_utils.py
"""Tests for clocks, calendar boundaries and month arithmetic."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfoNotFoundError

import pytest

from networth.utils.date_utils import (
    FixedClock,
    Lookback,
    PeriodCalendar,
    SystemClock,
    ensure_aware,
    format_period_date,
    shift_months,
)


class TestClocks:
    """Tests for SystemClock and FixedClock."""

    def test_system_clock_is_aware(self):
        assert SystemClock().now().tzinfo is not None

    def test_fixed_clock(self):
        instant = datetime(2025, 8, 9, 12, 0, tzinfo=timezone.utc)

        assert FixedClock(instant).now() == instant

    def test_fixed_clock_naive_is_utc(self):
        assert FixedClock(datetime(2025, 8, 9)).now() == datetime(2025, 8, 9, tzinfo=timezone.utc)


class TestEnsureAware:
    def test_naive(self):
        assert ensure_aware(datetime(2025, 1, 1)).tzinfo is timezone.utc

    def test_aware_untouched(self):
        instant = datetime(2025, 1, 1, tzinfo=timezone(timedelta(hours=2)))

        assert ensure_aware(instant) is instant


class TestShiftMonths:
    """Tests for calendar month arithmetic."""

    @pytest.mark.parametrize("start,months,expected", [
        (datetime(2025, 8, 9), -1, datetime(2025, 7, 9)),
        (datetime(2024, 3, 31), -1, datetime(2024, 2, 29)),
        (datetime(2025, 3, 31), -1, datetime(2025, 2, 28)),
        (datetime(2025, 1, 31), -1, datetime(2024, 12, 31)),
        (datetime(2025, 5, 31), -1, datetime(2025, 4, 30)),
        (datetime(2024, 2, 29), -12, datetime(2023, 2, 28)),
        (datetime(2025, 11, 15), 3, datetime(2026, 2, 15)),
    ])
    def test_shift(self, start, months, expected):
        assert shift_months(start, months) == expected

    def test_keeps_time_of_day(self):
        assert shift_months(datetime(2025, 8, 9, 15, 30), -1) == datetime(2025, 7, 9, 15, 30)


class TestPeriodCalendar:
    """Tests for PeriodCalendar."""

    def test_start_of_day_utc(self):
        calendar = PeriodCalendar("UTC")

        result = calendar.start_of_day(datetime(2025, 8, 9, 15, 30, tzinfo=timezone.utc))

        assert result == datetime(2025, 8, 9, tzinfo=timezone.utc)

    def test_start_of_day_local(self):
        """
        Test local midnight in London during BST.

        23:30 UTC on 9 Aug is 00:30 on 10 Aug in London, so the day starts
        at 10 Aug 00:00 BST = 9 Aug 23:00 UTC.
        """
        calendar = PeriodCalendar("Europe/London")

        result = calendar.start_of_day(datetime(2025, 8, 9, 23, 30, tzinfo=timezone.utc))

        assert result == datetime(2025, 8, 9, 23, 0, tzinfo=timezone.utc)

    def test_subtract_timedelta_is_exact(self):
        calendar = PeriodCalendar("UTC")
        now = datetime(2025, 8, 9, 15, 30, tzinfo=timezone.utc)

        assert calendar.subtract(now, timedelta(days=30)) == datetime(2025, 7, 10, 15, 30, tzinfo=timezone.utc)

    def test_subtract_month(self):
        calendar = PeriodCalendar("UTC")
        now = datetime(2025, 3, 31, 10, 0, tzinfo=timezone.utc)

        assert calendar.subtract(now, Lookback(months=1)) == datetime(2025, 2, 28, 10, 0, tzinfo=timezone.utc)

    def test_subtract_days(self):
        calendar = PeriodCalendar("UTC")
        now = datetime(2025, 8, 9, 15, 30, tzinfo=timezone.utc)

        assert calendar.subtract(now, Lookback(days=90)) == now - timedelta(days=90)

    def test_subtract_month_keeps_local_wall_time(self):
        """Test 1M across a DST change keeps 09:00 local."""
        calendar = PeriodCalendar("Europe/London")
        # 09:00 BST
        now = datetime(2025, 4, 15, 8, 0, tzinfo=timezone.utc)

        # 09:00 GMT
        assert calendar.subtract(now, Lookback(months=1)) == datetime(2025, 3, 15, 9, 0, tzinfo=timezone.utc)

    def test_accepts_tzinfo(self):
        calendar = PeriodCalendar(timezone.utc)

        assert calendar.normalize(datetime(2025, 1, 1)).tzinfo is timezone.utc

    def test_unknown_timezone(self):
        with pytest.raises(ZoneInfoNotFoundError):
            PeriodCalendar("Not/AZone")


class TestFormatPeriodDate:
    def test_no_leading_zero(self):
        assert format_period_date(datetime(2025, 8, 3)) == "3 Aug 2025"

    def test_two_digit_day(self):
        assert format_period_date(datetime(2024, 12, 25)) == "25 Dec 2024"
