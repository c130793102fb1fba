"""Database-backed store for imported records.

:class:`SqlStore` writes through a caller-owned SQLAlchemy session (usually
from ``db.client.session_scope``) using the ORM models in
``db.models.finance``. It satisfies :class:`bachatbox.storage.ImportSink`, so
the import services work against it exactly as against ``MemoryStore``.

Instants are stored in UTC. Backends without timezone support (SQLite) hand
back naive values, which are re-tagged as UTC on the way out.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.finance import BbGoal, BbTransaction, BbUser, BbWallet, BbWalletTransaction

from .errors import RecordNotFound
from .logging_setup import get_logger
from .models import (
    Goal,
    Transaction,
    TransactionCreate,
    Wallet,
    WalletTransaction,
    WalletTransactionCreate,
)
from .storage import balance_delta

logger = get_logger(__name__)

_CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    # Same scale as the Numeric(12, 2) columns, so records match a re-read.
    return Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _tx_from_row(row: BbTransaction) -> Transaction:
    return Transaction(
        id=row.id,
        user_id=row.user_id,
        amount=Decimal(row.amount),
        description=row.description,
        category=row.category,
        transaction_type=row.transaction_type,
        date=_to_utc(row.date),
    )


def _wtx_from_row(row: BbWalletTransaction) -> WalletTransaction:
    return WalletTransaction(
        id=row.id,
        wallet_id=row.wallet_id,
        amount=Decimal(row.amount),
        description=row.description,
        transaction_type=row.transaction_type,
        category=row.category,
        date=_to_utc(row.date),
    )


def _wallet_from_row(row: BbWallet) -> Wallet:
    return Wallet(id=row.id, user_id=row.user_id, balance=Decimal(row.balance))


def _goal_from_row(row: BbGoal) -> Goal:
    return Goal(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        target_amount=Decimal(row.target_amount),
        current_amount=Decimal(row.current_amount),
        target_date=_to_utc(row.target_date),
        monthly_income=Decimal(row.monthly_income),
    )


class SqlStore:
    """Import sink and read helpers over a SQLAlchemy session.

    The store never commits; the session scope that created the session owns
    the transaction, so one import is persisted atomically.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # ---- Import sink -----------------------------------------------------

    def bulk_create_transactions(self, payloads: Sequence[TransactionCreate]) -> list[Transaction]:
        rows = [
            BbTransaction(
                user_id=p.user_id,
                amount=_money(p.amount),
                description=p.description,
                category=p.category,
                transaction_type=p.transaction_type,
                date=_to_utc(p.date),
            )
            for p in payloads
        ]
        self.session.add_all(rows)
        self.session.flush()
        logger.debug("inserted %d transactions", len(rows))
        return [_tx_from_row(r) for r in rows]

    def bulk_create_wallet_transactions(
        self, payloads: Sequence[WalletTransactionCreate]
    ) -> list[WalletTransaction]:
        wallets = {wid: self._require_wallet(wid) for wid in {p.wallet_id for p in payloads}}
        rows = [
            BbWalletTransaction(
                wallet_id=p.wallet_id,
                amount=_money(p.amount),
                description=p.description,
                transaction_type=p.transaction_type,
                category=p.category,
                date=_to_utc(p.date),
            )
            for p in payloads
        ]
        self.session.add_all(rows)
        self.session.flush()
        created = [_wtx_from_row(r) for r in rows]
        for wid, wallet in wallets.items():
            delta = balance_delta(w for w in created if w.wallet_id == wid)
            wallet.balance = _money(Decimal(wallet.balance) + delta)
        self.session.flush()
        logger.debug("inserted %d wallet transactions", len(rows))
        return created

    # ---- Reads / setup ---------------------------------------------------

    def _require_wallet(self, wallet_id: int) -> BbWallet:
        wallet = self.session.get(BbWallet, wallet_id)
        if wallet is None:
            raise RecordNotFound(f"wallet {wallet_id} not found")
        return wallet

    def get_wallet(self, wallet_id: int) -> Wallet | None:
        row = self.session.get(BbWallet, wallet_id)
        return _wallet_from_row(row) if row is not None else None

    def ensure_user(self, *, username: str, email: str) -> int:
        """Return the id of the user named ``username``, creating it if needed."""

        row = self.session.scalars(select(BbUser).where(BbUser.username == username)).first()
        if row is None:
            row = BbUser(username=username, email=email)
            self.session.add(row)
            self.session.flush()
        return row.id

    def ensure_wallet(self, user_id: int) -> Wallet:
        """Return the user's wallet, creating an empty one if needed."""

        row = self.session.scalars(select(BbWallet).where(BbWallet.user_id == user_id)).first()
        if row is None:
            row = BbWallet(user_id=user_id, balance=Decimal(0))
            self.session.add(row)
            self.session.flush()
        return _wallet_from_row(row)

    def list_transactions(self, user_id: int) -> list[Transaction]:
        stmt = (
            select(BbTransaction)
            .where(BbTransaction.user_id == user_id)
            .order_by(BbTransaction.id)
        )
        return [_tx_from_row(r) for r in self.session.scalars(stmt)]

    # ---- Goals -----------------------------------------------------------

    def create_goal(
        self,
        *,
        user_id: int,
        name: str,
        target_amount: Decimal,
        current_amount: Decimal,
        target_date: datetime,
        monthly_income: Decimal,
    ) -> Goal:
        row = BbGoal(
            user_id=user_id,
            name=name,
            target_amount=_money(target_amount),
            current_amount=_money(current_amount),
            target_date=_to_utc(target_date),
            monthly_income=_money(monthly_income),
        )
        self.session.add(row)
        self.session.flush()
        return _goal_from_row(row)

    def get_goal(self, goal_id: int) -> Goal | None:
        row = self.session.get(BbGoal, goal_id)
        return _goal_from_row(row) if row is not None else None

    def list_goals(self, user_id: int) -> list[Goal]:
        stmt = select(BbGoal).where(BbGoal.user_id == user_id).order_by(BbGoal.id)
        return [_goal_from_row(r) for r in self.session.scalars(stmt)]

    def list_wallet_transactions(self, wallet_id: int) -> list[WalletTransaction]:
        """Wallet transactions, newest first."""

        stmt = (
            select(BbWalletTransaction)
            .where(BbWalletTransaction.wallet_id == wallet_id)
            .order_by(BbWalletTransaction.date.desc(), BbWalletTransaction.id.desc())
        )
        return [_wtx_from_row(r) for r in self.session.scalars(stmt)]


__all__ = ["SqlStore"]
