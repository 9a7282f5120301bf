# backend/tests/services/test_update_store.py
"""
Integration tests for SqlAlchemyUpdateStore.

Uses the in-memory SQLite database from conftest. Timestamp columns
store every instant as UTC, whatever offset it was written with.
"""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select

from networth.models import AccountUpdate
from networth.services.performance.types import AccountHistory
from networth.services.store import SqlAlchemyUpdateStore
from tests.conftest import ago, create_account


class TestGetAccount:
    """Tests for SqlAlchemyUpdateStore.get_account."""

    def test_snapshot(self, db):
        """Test account and updates are copied into value objects."""
        account = create_account(db, "Savings", ("1000", ago(days=2)), ("1200.5", ago(days=1)))
        store = SqlAlchemyUpdateStore(db)

        history = store.get_account(account.id)

        assert isinstance(history, AccountHistory)
        assert history.account_id == account.id
        assert history.name == "Savings"
        assert history.is_active is True
        assert [u.value for u in history.updates] == [Decimal("1000"), Decimal("1200.5")]
        assert all(u.account_id == account.id for u in history.updates)

    def test_timestamps_are_aware_utc(self, db):
        """Test stored timestamps come back timezone-aware and unchanged."""
        when = ago(days=3)
        account = create_account(db, "Cash", ("10", when))

        history = SqlAlchemyUpdateStore(db).get_account(account.id)

        assert history.updates[0].timestamp.tzinfo is not None
        assert history.updates[0].timestamp == when

    def test_offset_timestamps_keep_their_instant(self, db):
        """
        Test a non-UTC timestamp is stored as the same instant.

        00:30 at +02:00 on 9 Aug is 22:30 UTC on 8 Aug; it must not come
        back as 00:30 UTC.
        """
        when = datetime(2025, 8, 9, 0, 30, tzinfo=timezone(timedelta(hours=2)))
        account = create_account(db, "Abroad", ("10", when))

        stored = SqlAlchemyUpdateStore(db).get_account(account.id).updates[0].timestamp

        assert stored == when
        assert stored == datetime(2025, 8, 8, 22, 30, tzinfo=timezone.utc)
        assert stored.utcoffset() == timedelta(0)

    def test_missing_account(self, db):
        """Test unknown id returns None."""
        assert SqlAlchemyUpdateStore(db).get_account(999) is None

    def test_equal_timestamps_keep_insertion_order(self, db):
        """Test rows with equal timestamps are handed out in insert order."""
        when = ago(days=1)
        account = create_account(db, "Cash", ("100", when), ("250", when))

        history = SqlAlchemyUpdateStore(db).get_account(account.id)

        assert [u.value for u in history.updates] == [Decimal("100"), Decimal("250")]


class TestListAccounts:
    """Tests for SqlAlchemyUpdateStore.list_accounts."""

    def test_active_only(self, db):
        """Test closed accounts are excluded by default."""
        open_account = create_account(db, "Open", ("1", ago(days=1)))
        create_account(db, "Closed", ("2", ago(days=1)), is_active=False)

        accounts = SqlAlchemyUpdateStore(db).list_accounts()

        assert [a.account_id for a in accounts] == [open_account.id]

    def test_include_inactive(self, db):
        """Test every account is returned in id order when asked."""
        first = create_account(db, "First")
        second = create_account(db, "Second", is_active=False)

        accounts = SqlAlchemyUpdateStore(db).list_accounts(active_only=False)

        assert [a.account_id for a in accounts] == [first.id, second.id]
        assert accounts[1].closed_at is not None

    def test_inconsistent_state_is_logged(self, db, caplog):
        """Test an active account with closed_at set is tolerated with a warning."""
        create_account(db, "Odd", ("1", ago(days=1)), is_active=True, closed_at=ago(days=2))

        with caplog.at_level(logging.WARNING, logger="networth.services.store"):
            accounts = SqlAlchemyUpdateStore(db).list_accounts()

        assert len(accounts) == 1
        assert "inconsistent state" in caplog.text


class TestCascadeDelete:
    """Tests for account deletion."""

    def test_updates_deleted_with_account(self, db):
        """Test deleting an account removes its updates."""
        account = create_account(db, "Gone", ("1", ago(days=2)), ("2", ago(days=1)))
        kept = create_account(db, "Kept", ("3", ago(days=1)))

        db.delete(account)
        db.commit()

        remaining = db.execute(select(func.count()).select_from(AccountUpdate)).scalar_one()
        assert remaining == 1
        assert SqlAlchemyUpdateStore(db).get_account(kept.id).update_count == 1
