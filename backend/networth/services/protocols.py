# backend/networth/services/protocols.py
"""
Protocol interfaces for service dependency injection.

Using typing.Protocol enables structural subtyping:
- The SQLAlchemy store satisfies UpdateStoreProtocol without inheritance
- Tests can pass a plain in-memory object
- Clocks are swappable (SystemClock in production, FixedClock in tests)
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from networth.services.performance.types import AccountHistory


class ClockProtocol(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        ...


class UpdateStoreProtocol(Protocol):
    """
    Read-only access to accounts and their updates.

    Implementations must hand out stable snapshots: the engine assumes the
    data does not change while a single call is running.
    """

    def get_account(self, account_id: int) -> AccountHistory | None:
        ...

    def list_accounts(self, active_only: bool = True) -> list[AccountHistory]:
        ...
