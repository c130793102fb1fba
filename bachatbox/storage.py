"""In-process storage for transactions, goals, wallets and wallet transactions.

:class:`MemoryStore` is constructed once at process start and injected into
whatever needs it; nothing here is module-global. The import pipeline only
sees the narrow :class:`ImportSink` protocol, so a database-backed store
(:class:`bachatbox.persistence.SqlStore`) can take its place unchanged.

Ids auto-increment per collection, starting at 1. Updates are last-write-wins.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any, Generic, Protocol, TypeVar

from .errors import RecordNotFound
from .models import (
    CREDIT,
    Goal,
    Transaction,
    TransactionCreate,
    Wallet,
    WalletTransaction,
    WalletTransactionCreate,
)

RowT = TypeVar("RowT")


class ImportSink(Protocol):
    """Bulk-create surface the import services write through."""

    def bulk_create_transactions(
        self, payloads: Sequence[TransactionCreate]
    ) -> list[Transaction]: ...

    def bulk_create_wallet_transactions(
        self, payloads: Sequence[WalletTransactionCreate]
    ) -> list[WalletTransaction]: ...


def balance_delta(items: Iterable[WalletTransactionCreate | WalletTransaction]) -> Decimal:
    """Net balance change of wallet transactions: credits minus debits."""

    total = Decimal(0)
    for it in items:
        total += it.amount if it.transaction_type == CREDIT else -it.amount
    return total


class _Table(Generic[RowT]):
    """Auto-incrementing id -> frozen dataclass map."""

    def __init__(self, kind: str) -> None:
        self._kind = kind
        self._rows: dict[int, RowT] = {}
        self._next_id = 1

    def insert(self, build: Callable[[int], RowT]) -> RowT:
        row = build(self._next_id)
        self._rows[self._next_id] = row
        self._next_id += 1
        return row

    def get(self, row_id: int) -> RowT | None:
        return self._rows.get(row_id)

    def require(self, row_id: int) -> RowT:
        row = self._rows.get(row_id)
        if row is None:
            raise RecordNotFound(f"{self._kind} {row_id} not found")
        return row

    def update(self, row_id: int, changes: dict[str, Any]) -> RowT:
        if "id" in changes:
            raise ValueError("id cannot be changed")
        row = dataclasses.replace(self.require(row_id), **changes)
        self._rows[row_id] = row
        return row

    def delete(self, row_id: int) -> None:
        self.require(row_id)
        del self._rows[row_id]

    def values(self) -> list[RowT]:
        return list(self._rows.values())


class MemoryStore:
    """Mock persistence layer keeping every collection in memory."""

    def __init__(self) -> None:
        self._transactions: _Table[Transaction] = _Table("transaction")
        self._goals: _Table[Goal] = _Table("goal")
        self._wallets: _Table[Wallet] = _Table("wallet")
        self._wallet_transactions: _Table[WalletTransaction] = _Table("wallet transaction")

    # ---- Transactions -----------------------------------------------------

    def create_transaction(self, payload: TransactionCreate) -> Transaction:
        return self._transactions.insert(
            lambda i: Transaction(
                id=i,
                user_id=payload.user_id,
                amount=payload.amount,
                description=payload.description,
                category=payload.category,
                transaction_type=payload.transaction_type,
                date=payload.date,
            )
        )

    def bulk_create_transactions(self, payloads: Sequence[TransactionCreate]) -> list[Transaction]:
        return [self.create_transaction(p) for p in payloads]

    def get_transaction(self, transaction_id: int) -> Transaction | None:
        return self._transactions.get(transaction_id)

    def list_transactions(self, user_id: int) -> list[Transaction]:
        return [t for t in self._transactions.values() if t.user_id == user_id]

    def update_transaction(self, transaction_id: int, **changes: Any) -> Transaction:
        """Apply ``changes`` after re-validating the whole record as a payload.

        Raises ``pydantic.ValidationError`` for values creation would reject
        (negative amount, unknown transaction type) and ``ValueError`` for
        fields a transaction does not have.
        """

        current = self._transactions.require(transaction_id)
        if "id" in changes:
            raise ValueError("id cannot be changed")
        fields = {name: getattr(current, name) for name in TransactionCreate.model_fields}
        unknown = sorted(set(changes) - set(fields))
        if unknown:
            raise ValueError(f"unknown transaction fields: {', '.join(unknown)}")
        payload = TransactionCreate.model_validate({**fields, **changes})
        return self._transactions.update(transaction_id, payload.model_dump())

    def delete_transaction(self, transaction_id: int) -> None:
        self._transactions.delete(transaction_id)

    # ---- Goals ------------------------------------------------------------

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
        return self._goals.insert(
            lambda i: Goal(
                id=i,
                user_id=user_id,
                name=name,
                target_amount=target_amount,
                current_amount=current_amount,
                target_date=target_date,
                monthly_income=monthly_income,
            )
        )

    def get_goal(self, goal_id: int) -> Goal | None:
        return self._goals.get(goal_id)

    def list_goals(self, user_id: int) -> list[Goal]:
        return [g for g in self._goals.values() if g.user_id == user_id]

    def update_goal(self, goal_id: int, **changes: Any) -> Goal:
        return self._goals.update(goal_id, changes)

    def delete_goal(self, goal_id: int) -> None:
        self._goals.delete(goal_id)

    # ---- Wallets ----------------------------------------------------------

    def create_wallet(self, *, user_id: int, balance: Decimal = Decimal(0)) -> Wallet:
        if self.get_wallet_by_user(user_id) is not None:
            raise ValueError(f"user {user_id} already has a wallet")
        return self._wallets.insert(lambda i: Wallet(id=i, user_id=user_id, balance=balance))

    def get_wallet(self, wallet_id: int) -> Wallet | None:
        return self._wallets.get(wallet_id)

    def require_wallet(self, wallet_id: int) -> Wallet:
        return self._wallets.require(wallet_id)

    def get_wallet_by_user(self, user_id: int) -> Wallet | None:
        return next((w for w in self._wallets.values() if w.user_id == user_id), None)

    def update_wallet(self, wallet_id: int, *, balance: Decimal) -> Wallet:
        """Set a wallet's balance; balances never go below zero."""

        if balance < 0:
            raise ValueError(f"wallet balance cannot be negative: {balance}")
        return self._wallets.update(wallet_id, {"balance": balance})

    # ---- Wallet transactions ---------------------------------------------

    def create_wallet_transaction(self, payload: WalletTransactionCreate) -> WalletTransaction:
        """Record a wallet transaction without touching the balance."""

        self._wallets.require(payload.wallet_id)
        return self._wallet_transactions.insert(
            lambda i: WalletTransaction(
                id=i,
                wallet_id=payload.wallet_id,
                amount=payload.amount,
                description=payload.description,
                transaction_type=payload.transaction_type,
                category=payload.category,
                date=payload.date,
            )
        )

    def bulk_create_wallet_transactions(
        self, payloads: Sequence[WalletTransactionCreate]
    ) -> list[WalletTransaction]:
        """Record imported wallet transactions and move each wallet's balance."""

        for wallet_id in {p.wallet_id for p in payloads}:
            self._wallets.require(wallet_id)
        created = [self.create_wallet_transaction(p) for p in payloads]
        for wallet_id in {p.wallet_id for p in payloads}:
            wallet = self._wallets.require(wallet_id)
            delta = balance_delta(p for p in payloads if p.wallet_id == wallet_id)
            self._wallets.update(wallet_id, {"balance": wallet.balance + delta})
        return created

    def get_wallet_transaction(self, transaction_id: int) -> WalletTransaction | None:
        return self._wallet_transactions.get(transaction_id)

    def list_wallet_transactions(self, wallet_id: int) -> list[WalletTransaction]:
        """Wallet transactions, newest first."""

        rows = [t for t in self._wallet_transactions.values() if t.wallet_id == wallet_id]
        return sorted(rows, key=lambda t: (t.date, t.id), reverse=True)

    # ---- Demo data --------------------------------------------------------

    @classmethod
    def with_demo_data(cls, *, user_id: int = 1) -> MemoryStore:
        """A store seeded with the sample account shown on first login."""

        store = cls()

        def _at(s: str) -> datetime:
            return datetime.fromisoformat(s).replace(tzinfo=UTC)

        for amount, description, category, kind, when in (
            ("1899", "Online Shopping", "Shopping", "expense", "2024-06-12"),
            ("42500", "Salary Deposit", "Income", "income", "2024-06-01"),
            ("1450", "Dinner with Friends", "Food & Dining", "expense", "2024-06-08"),
            ("18000", "Rent Payment", "Housing", "expense", "2024-06-05"),
            ("2150", "Electricity Bill", "Utilities", "expense", "2024-06-07"),
        ):
            store.create_transaction(
                TransactionCreate(
                    user_id=user_id,
                    amount=Decimal(amount),
                    description=description,
                    category=category,
                    transaction_type=kind,
                    date=_at(when),
                )
            )

        for name, target, current, when in (
            ("New Laptop", "75000", "25000", "2024-09-15"),
            ("Vacation Fund", "100000", "40000", "2024-12-20"),
        ):
            store.create_goal(
                user_id=user_id,
                name=name,
                target_amount=Decimal(target),
                current_amount=Decimal(current),
                target_date=_at(when),
                monthly_income=Decimal("42500"),
            )

        wallet = store.create_wallet(user_id=user_id, balance=Decimal("10760"))
        for amount, description, kind, category, when in (
            ("450", "Paid to friend@upi (Food)", "debit", "food", "2024-06-14T19:30:00"),
            ("5000", "Added money to wallet", "credit", None, "2024-06-12T14:15:00"),
            ("1250", "Paid to store@upi (Shopping)", "debit", "shopping", "2024-06-10T11:20:00"),
            (
                "340",
                "Paid to cab@upi (Transport)",
                "debit",
                "transportation",
                "2024-06-09T08:45:00",
            ),
            ("10000", "Added money to wallet", "credit", None, "2024-06-05T17:30:00"),
        ):
            store.create_wallet_transaction(
                WalletTransactionCreate(
                    wallet_id=wallet.id,
                    amount=Decimal(amount),
                    description=description,
                    transaction_type=kind,
                    category=category,
                    date=_at(when),
                )
            )
        return store


__all__ = ["ImportSink", "MemoryStore", "balance_delta"]
