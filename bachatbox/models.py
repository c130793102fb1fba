"""Data models and type aliases for ``bachatbox``.

Three layers live here:

- Ephemeral pipeline shapes (``RawRow``, ``ColumnRoleMap``) that exist only for
  the duration of one import call.
- The pipeline output, :class:`CanonicalTransaction`, and the per-file
  :class:`ImportBatch` summary.
- Storage-facing shapes: pydantic payloads handed to a store for bulk creation
  and the frozen records a store hands back once ids are assigned.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Pipeline shapes
# ---------------------------------------------------------------------------

type RawRow = Mapping[str, str]
"""One source row: lower-cased trimmed header -> trimmed cell text."""

type ColumnRoleMap = Mapping[str, str]
"""Role name (``date``, ``amount``, ``creditAmount``...) -> originating header."""

type Destination = Literal["transactions", "wallet"]

INCOME = "income"
EXPENSE = "expense"
CREDIT = "credit"
DEBIT = "debit"

# Polarity names per destination: (inflow, outflow)
POLARITY: dict[str, tuple[str, str]] = {
    "transactions": (INCOME, EXPENSE),
    "wallet": (CREDIT, DEBIT),
}


@dataclass(frozen=True, slots=True)
class CanonicalTransaction:
    """A normalized, storage-ready transaction.

    ``amount`` is a magnitude; direction is carried by ``transaction_type``,
    which is ``income``/``expense`` for the transactions destination and
    ``credit``/``debit`` for the wallet destination. ``date`` is always a
    timezone-aware instant.
    """

    amount: Decimal
    transaction_type: str
    description: str
    category: str
    date: datetime


@dataclass(frozen=True, slots=True)
class ImportBatch:
    """Outcome of importing one file.

    ``total`` counts decoded rows; ``skipped`` counts rows that produced no
    record (blank rows, or rows whose normalization raised).
    """

    records: tuple[CanonicalTransaction, ...]
    skipped: int
    total: int

    @property
    def imported(self) -> int:
        return len(self.records)


# ---------------------------------------------------------------------------
# Storage payloads (what the import core hands to a store)
# ---------------------------------------------------------------------------


class _Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    amount: Decimal
    description: str
    date: datetime

    @field_validator("amount")
    @classmethod
    def _amount_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("amount must be non-negative")
        return v


class TransactionCreate(_Payload):
    """Payload for the general transactions store (``userId`` keyed)."""

    user_id: int
    category: str
    transaction_type: Literal["income", "expense"]

    @classmethod
    def from_canonical(cls, tx: CanonicalTransaction, *, user_id: int) -> TransactionCreate:
        return cls(
            user_id=user_id,
            amount=tx.amount,
            description=tx.description,
            category=tx.category,
            transaction_type=tx.transaction_type,
            date=tx.date,
        )


class WalletTransactionCreate(_Payload):
    """Payload for the wallet store (``walletId`` keyed, nullable category)."""

    wallet_id: int
    category: str | None = None
    transaction_type: Literal["credit", "debit"]

    @classmethod
    def from_canonical(
        cls, tx: CanonicalTransaction, *, wallet_id: int
    ) -> WalletTransactionCreate:
        return cls(
            wallet_id=wallet_id,
            amount=tx.amount,
            description=tx.description,
            category=tx.category or None,
            transaction_type=tx.transaction_type,
            date=tx.date,
        )


# ---------------------------------------------------------------------------
# Stored records (what a store hands back)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    id: int
    user_id: int
    amount: Decimal
    description: str
    category: str
    transaction_type: str
    date: datetime


@dataclass(frozen=True, slots=True)
class WalletTransaction:
    id: int
    wallet_id: int
    amount: Decimal
    description: str
    transaction_type: str
    category: str | None
    date: datetime


@dataclass(frozen=True, slots=True)
class Wallet:
    id: int
    user_id: int
    balance: Decimal


@dataclass(frozen=True, slots=True)
class Goal:
    """A savings goal; ``monthly_income`` feeds :func:`bachatbox.goals.savings_plan`."""

    id: int
    user_id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: datetime
    monthly_income: Decimal

    @property
    def remaining(self) -> Decimal:
        return max(self.target_amount - self.current_amount, Decimal(0))


__all__ = [
    "CREDIT",
    "DEBIT",
    "EXPENSE",
    "INCOME",
    "POLARITY",
    "CanonicalTransaction",
    "ColumnRoleMap",
    "Destination",
    "Goal",
    "ImportBatch",
    "RawRow",
    "Transaction",
    "TransactionCreate",
    "Wallet",
    "WalletTransaction",
    "WalletTransactionCreate",
]
