"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Database session fixtures (in-memory SQLite)
- A frozen clock and a calendar
- Factories for updates, account snapshots and ORM accounts
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterator

import pytest
from sqlalchemy.orm import Session, sessionmaker

from networth.database import create_store_engine
from networth.models import Base, Account, AccountUpdate
from networth.services.performance.types import AccountHistory, UpdateRecord
from networth.utils.date_utils import FixedClock, PeriodCalendar

# Saturday afternoon, well clear of any DST switch
NOW = datetime(2025, 8, 9, 15, 30, tzinfo=timezone.utc)


# =============================================================================
# CLOCK & CALENDAR FIXTURES
# =============================================================================

@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at NOW."""
    return FixedClock(NOW)


@pytest.fixture
def calendar() -> PeriodCalendar:
    """UTC calendar (day boundaries at 00:00 UTC)."""
    return PeriodCalendar("UTC")


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_store_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def db(db_engine) -> Iterator[Session]:
    """Create a database session for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


# =============================================================================
# FACTORY FUNCTIONS
# =============================================================================

def ago(days: float = 0, hours: float = 0, minutes: float = 0) -> datetime:
    """Instant relative to NOW."""
    return NOW - timedelta(days=days, hours=hours, minutes=minutes)


def update(value: str | int, at: datetime, account_id: int | None = None) -> UpdateRecord:
    """Factory: one valuation record."""
    return UpdateRecord(value=Decimal(str(value)), timestamp=at, account_id=account_id)


def history(
        account_id: int,
        *entries: tuple[str | int, datetime],
        name: str | None = None,
        is_active: bool = True,
) -> AccountHistory:
    """Factory: account snapshot from (value, timestamp) pairs."""
    return AccountHistory(
        account_id=account_id,
        name=name or f"Account {account_id}",
        updates=tuple(update(value, at, account_id) for value, at in entries),
        is_active=is_active,
    )


def create_account(
        db: Session,
        name: str,
        *entries: tuple[str | int, datetime],
        is_active: bool = True,
        closed_at: datetime | None = None,
) -> Account:
    """Factory: persist an account with its updates."""
    account = Account(
        name=name,
        created_at=ago(days=400),
        is_active=is_active,
        closed_at=closed_at if closed_at is not None else (None if is_active else ago(days=1)),
    )
    account.updates = [
        AccountUpdate(value=Decimal(str(value)), timestamp=at)
        for value, at in entries
    ]
    db.add(account)
    db.commit()
    db.refresh(account)
    return account
