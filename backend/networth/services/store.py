# backend/networth/services/store.py
"""
Read-only update store backed by SQLAlchemy.

The calculation engine needs exactly two things from persistence:
- one account with all of its updates
- the list of (active) accounts with their updates

This accessor loads them in a single query each and copies the rows into
immutable AccountHistory / UpdateRecord snapshots, so later changes to
the session cannot leak into a running calculation (copy-on-read).

No writes happen here: account lifecycle and update entry belong to the
application layer.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from networth.models import Account, AccountUpdate
from networth.services.performance.types import AccountHistory, UpdateRecord
from networth.utils.date_utils import ensure_aware

logger = logging.getLogger(__name__)


class SqlAlchemyUpdateStore:
    """
    UpdateStoreProtocol implementation over the ORM models.

    Attributes:
        _db: Session the snapshots are read from
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get_account(self, account_id: int) -> AccountHistory | None:
        """
        Snapshot one account by id.

        Returns:
            AccountHistory, or None if no such account exists
        """
        stmt = (
            select(Account)
            .where(Account.id == account_id)
            .options(selectinload(Account.updates))
        )
        account = self._db.execute(stmt).scalar_one_or_none()
        if account is None:
            return None
        return self._to_history(account)

    def list_accounts(self, active_only: bool = True) -> list[AccountHistory]:
        """
        Snapshot accounts in creation order (id ascending).

        Args:
            active_only: Skip closed accounts (the portfolio view)
        """
        stmt = select(Account).options(selectinload(Account.updates)).order_by(Account.id)
        if active_only:
            stmt = stmt.where(Account.is_active.is_(True))

        accounts = self._db.execute(stmt).scalars().all()
        return [self._to_history(account) for account in accounts]

    @staticmethod
    def _to_history(account: Account) -> AccountHistory:
        if account.is_active == (account.closed_at is not None):
            # Tolerated: the engine only reads is_active
            logger.warning(
                f"Account {account.id} has inconsistent state: "
                f"is_active={account.is_active}, closed_at={account.closed_at}"
            )

        # Id order keeps equal timestamps in insertion order
        rows: list[AccountUpdate] = sorted(account.updates, key=lambda row: row.id)
        updates = tuple(
            UpdateRecord(
                value=row.value,
                timestamp=ensure_aware(row.timestamp),
                account_id=account.id,
            )
            for row in rows
        )

        return AccountHistory(
            account_id=account.id,
            name=account.name,
            updates=updates,
            is_active=account.is_active,
            created_at=ensure_aware(account.created_at) if account.created_at else None,
            closed_at=ensure_aware(account.closed_at) if account.closed_at else None,
        )
