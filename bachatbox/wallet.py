"""Wallet top-ups and UPI payments against a :class:`MemoryStore`."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

from .categories import display_name
from .errors import InsufficientBalance
from .logging_setup import get_logger
from .models import CREDIT, DEBIT, Wallet, WalletTransactionCreate
from .storage import MemoryStore

logger = get_logger(__name__)


def _positive(amount: Decimal) -> Decimal:
    amount = Decimal(amount)
    if not amount.is_finite() or amount <= 0:
        raise ValueError("amount must be a positive number")
    return amount


def add_money(
    store: MemoryStore,
    wallet_id: int,
    amount: Decimal,
    payment_method: str,
    *,
    now: datetime | None = None,
) -> Wallet:
    """Credit ``amount`` to the wallet and record the top-up."""

    amount = _positive(amount)
    wallet = store.require_wallet(wallet_id)
    store.create_wallet_transaction(
        WalletTransactionCreate(
            wallet_id=wallet_id,
            amount=amount,
            description="Added money to wallet",
            transaction_type=CREDIT,
            category=None,
            date=now or datetime.now(UTC),
        )
    )
    logger.debug("wallet %d topped up by %s via %s", wallet_id, amount, payment_method)
    return store.update_wallet(wallet_id, balance=wallet.balance + amount)


def make_payment(
    store: MemoryStore,
    wallet_id: int,
    receiver_upi: str,
    amount: Decimal,
    category: str,
    *,
    now: datetime | None = None,
) -> Wallet:
    """Debit ``amount`` from the wallet as a payment to ``receiver_upi``.

    Raises :class:`~bachatbox.errors.InsufficientBalance` when the wallet
    cannot cover the payment; nothing is recorded in that case.
    """

    amount = _positive(amount)
    wallet = store.require_wallet(wallet_id)
    if amount > wallet.balance:
        raise InsufficientBalance("Insufficient balance")
    store.create_wallet_transaction(
        WalletTransactionCreate(
            wallet_id=wallet_id,
            amount=amount,
            description=f"Paid to {receiver_upi} ({display_name(category)})",
            transaction_type=DEBIT,
            category=category,
            date=now or datetime.now(UTC),
        )
    )
    return store.update_wallet(wallet_id, balance=wallet.balance - amount)


__all__ = ["add_money", "make_payment"]
