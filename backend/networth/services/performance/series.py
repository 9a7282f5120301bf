# backend/networth/services/performance/series.py
"""
Series generation for account and portfolio charts.

Produces chronologically ordered ChartDataPoint sequences:
- Account series: one point per update, no interpolation or resampling
- Portfolio series: one point per update across ALL accounts, valued at
  the running total of every account's latest-seen value

Rolling State:
    The portfolio series walks one merged, time-ordered stream of updates
    and keeps a map account_id -> latest value plus a running total.
    Complexity: O(N log N) for the merge, O(N) for the walk.

    Accounts contribute 0 until their first update appears in the stream,
    so accounts updated on different days give a step-like series.

Ordering Rules:
    Updates are always re-sorted by timestamp; storage order is never
    trusted. Python's sort is stable, so equal timestamps keep their
    supplied order:
    - within one account: the order the updates were supplied in
    - across accounts: the order the accounts were supplied in
    Only intermediate points depend on this; the final total does not.

Accounts are keyed by account_id, never by name (names are not unique).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime
from decimal import Decimal

from networth.services.constants import ZERO
from networth.services.performance.types import (
    AccountHistory,
    ChartDataPoint,
    ChartSeries,
    UpdateRecord,
)
from networth.utils.date_utils import ensure_aware


# =============================================================================
# ORDERING
# =============================================================================

def sort_updates(updates: Iterable[UpdateRecord]) -> list[UpdateRecord]:
    """Return updates in ascending timestamp order (stable for ties)."""
    return sorted(updates, key=lambda update: update.timestamp)


def merge_account_updates(
        accounts: Iterable[AccountHistory],
) -> list[tuple[int, UpdateRecord]]:
    """
    Merge every account's updates into one chronological stream.

    Returns:
        (account_id, update) pairs in ascending timestamp order
    """
    tagged = [
        (account.account_id, update)
        for account in accounts
        for update in sort_updates(account.updates)
    ]
    return sorted(tagged, key=lambda item: item[1].timestamp)


# =============================================================================
# SERIES GENERATORS
# =============================================================================

def generate_account_series(updates: Iterable[UpdateRecord]) -> ChartSeries:
    """
    Chart series for a single account: one point per update.

    Args:
        updates: The account's updates, in any order

    Returns:
        ChartSeries in ascending date order
    """
    snapshot = tuple(updates)

    def _points() -> Iterator[ChartDataPoint]:
        for update in sort_updates(snapshot):
            yield ChartDataPoint(date=update.timestamp, value=update.value)

    return ChartSeries(_points)


def generate_portfolio_series(accounts: Iterable[AccountHistory]) -> ChartSeries:
    """
    Chart series for a portfolio: running total after every update.

    Args:
        accounts: Accounts to aggregate (filter inactive ones beforehand)

    Returns:
        ChartSeries with exactly one point per update across all accounts

    Example:
        A: 100 @ day 1, 150 @ day 3
        B:  50 @ day 2
        -> [(day 1, 100), (day 2, 150), (day 3, 200)]
    """
    snapshot = tuple(accounts)

    def _points() -> Iterator[ChartDataPoint]:
        latest_values: dict[int, Decimal] = {}
        running_total = ZERO

        for account_id, update in merge_account_updates(snapshot):
            previous = latest_values.get(account_id, ZERO)
            latest_values[account_id] = update.value
            running_total += update.value - previous
            yield ChartDataPoint(date=update.timestamp, value=running_total)

    return ChartSeries(_points)


# =============================================================================
# WINDOWING
# =============================================================================

def filter_series_from(
        points: Iterable[ChartDataPoint],
        start: datetime,
) -> ChartSeries:
    """
    Restrict a series to points at or after ``start``.

    When no point falls exactly on ``start``, the last point before it is
    kept as a leading boundary so the chart line enters the window at the
    value that was current at ``start``.

    Args:
        points: Series in ascending date order
        start: First instant of the window (inclusive)

    Returns:
        Windowed ChartSeries
    """
    source = points if isinstance(points, ChartSeries) else tuple(points)
    start = ensure_aware(start)

    def _points() -> list[ChartDataPoint]:
        boundary: ChartDataPoint | None = None
        in_window: list[ChartDataPoint] = []
        exact_match = False

        for point in source:
            if point.date < start:
                boundary = point
            else:
                exact_match = exact_match or point.date == start
                in_window.append(point)

        if boundary is not None and not exact_match:
            in_window.insert(0, boundary)
        return in_window

    return ChartSeries(_points)


def last_update_window(points: Iterable[ChartDataPoint]) -> ChartSeries:
    """The last two points of a series (all points when fewer than two)."""
    source = points if isinstance(points, ChartSeries) else tuple(points)

    def _points() -> Sequence[ChartDataPoint]:
        return list(source)[-2:]

    return ChartSeries(_points)
