from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from bachatbox.errors import RecordNotFound
from bachatbox.models import TransactionCreate, WalletTransactionCreate
from bachatbox.storage import MemoryStore, balance_delta

WHEN = datetime(2024, 6, 1, tzinfo=UTC)


def _wtx(wallet_id: int, amount: str, kind: str, when: datetime = WHEN) -> WalletTransactionCreate:
    return WalletTransactionCreate(
        wallet_id=wallet_id,
        amount=Decimal(amount),
        description="x",
        transaction_type=kind,
        date=when,
    )


def test_transaction_crud_assigns_sequential_ids():
    store = MemoryStore()
    payload = TransactionCreate(
        user_id=1,
        amount=Decimal("10"),
        description="Tea",
        category="Food",
        transaction_type="expense",
        date=WHEN,
    )
    a = store.create_transaction(payload)
    b = store.create_transaction(payload)
    assert (a.id, b.id) == (1, 2)

    updated = store.update_transaction(a.id, description="Green tea")
    assert updated.description == "Green tea"
    assert store.get_transaction(a.id) == updated

    store.delete_transaction(b.id)
    assert store.get_transaction(b.id) is None
    assert store.list_transactions(1) == [updated]
    with pytest.raises(RecordNotFound):
        store.update_transaction(99, description="nope")
    with pytest.raises(ValueError):
        store.update_transaction(a.id, id=5)


@pytest.mark.parametrize(
    "changes",
    [
        {"amount": Decimal(-5)},
        {"transaction_type": "bogus"},
        {"transaction_type": "credit"},
        {"user_id": "not-a-number"},
    ],
)
def test_update_transaction_rejects_values_creation_rejects(changes):
    store = MemoryStore()
    tx = store.create_transaction(
        TransactionCreate(
            user_id=1,
            amount=Decimal("10"),
            description="Tea",
            category="Food",
            transaction_type="expense",
            date=WHEN,
        )
    )
    with pytest.raises(ValidationError):
        store.update_transaction(tx.id, **changes)
    assert store.get_transaction(tx.id) == tx


def test_update_transaction_rejects_unknown_fields_and_coerces_amount():
    store = MemoryStore()
    tx = store.create_transaction(
        TransactionCreate(
            user_id=1,
            amount=Decimal("10"),
            description="Tea",
            category="Food",
            transaction_type="expense",
            date=WHEN,
        )
    )
    with pytest.raises(ValueError, match="wallet_id"):
        store.update_transaction(tx.id, wallet_id=2)
    updated = store.update_transaction(tx.id, amount="12.50", transaction_type="income")
    assert (updated.amount, updated.transaction_type) == (Decimal("12.50"), "income")


def test_update_wallet_rejects_negative_balance():
    store = MemoryStore()
    wallet = store.create_wallet(user_id=1, balance=Decimal("50"))
    with pytest.raises(ValueError):
        store.update_wallet(wallet.id, balance=Decimal("-0.01"))
    assert store.require_wallet(wallet.id).balance == Decimal("50")
    assert store.update_wallet(wallet.id, balance=Decimal(0)).balance == Decimal(0)


def test_payloads_accept_camel_case_and_reject_negative_amounts():
    payload = TransactionCreate.model_validate(
        {
            "userId": 3,
            "amount": "12.50",
            "description": " Lunch ",
            "category": "Food",
            "transactionType": "expense",
            "date": "2024-06-01T00:00:00Z",
        }
    )
    assert (payload.user_id, payload.amount, payload.description) == (3, Decimal("12.50"), "Lunch")
    with pytest.raises(ValidationError):
        _wtx(1, "-1", "debit")
    with pytest.raises(ValidationError):
        _wtx(1, "1", "income")


def test_bulk_wallet_import_moves_balance():
    store = MemoryStore()
    wallet = store.create_wallet(user_id=1, balance=Decimal("100"))
    created = store.bulk_create_wallet_transactions(
        [_wtx(wallet.id, "50", "credit"), _wtx(wallet.id, "30", "debit")]
    )
    assert [t.id for t in created] == [1, 2]
    assert store.require_wallet(wallet.id).balance == Decimal("120")


def test_single_wallet_transaction_leaves_balance_alone():
    store = MemoryStore()
    wallet = store.create_wallet(user_id=1, balance=Decimal("100"))
    store.create_wallet_transaction(_wtx(wallet.id, "50", "credit"))
    assert store.require_wallet(wallet.id).balance == Decimal("100")


def test_bulk_wallet_import_into_missing_wallet_stores_nothing():
    store = MemoryStore()
    with pytest.raises(RecordNotFound):
        store.bulk_create_wallet_transactions([_wtx(7, "5", "credit")])
    assert store.get_wallet_transaction(1) is None


def test_one_wallet_per_user():
    store = MemoryStore()
    store.create_wallet(user_id=1)
    with pytest.raises(ValueError):
        store.create_wallet(user_id=1)
    assert store.get_wallet_by_user(2) is None


def test_wallet_transactions_newest_first():
    store = MemoryStore()
    wallet = store.create_wallet(user_id=1)
    older = store.create_wallet_transaction(_wtx(wallet.id, "1", "credit", WHEN))
    newer = store.create_wallet_transaction(
        _wtx(wallet.id, "2", "credit", datetime(2024, 6, 2, tzinfo=UTC))
    )
    assert store.list_wallet_transactions(wallet.id) == [newer, older]


def test_goals():
    store = MemoryStore()
    goal = store.create_goal(
        user_id=1,
        name="Laptop",
        target_amount=Decimal("1000"),
        current_amount=Decimal("400"),
        target_date=WHEN,
        monthly_income=Decimal("5000"),
    )
    assert goal.remaining == Decimal("600")
    goal = store.update_goal(goal.id, current_amount=Decimal("1200"))
    assert goal.remaining == Decimal(0)
    assert store.list_goals(1) == [goal]
    store.delete_goal(goal.id)
    assert store.get_goal(goal.id) is None


def test_demo_data():
    store = MemoryStore.with_demo_data()
    wallet = store.get_wallet_by_user(1)
    assert wallet is not None
    assert wallet.balance == Decimal("10760")
    assert len(store.list_transactions(1)) == 5
    assert len(store.list_goals(1)) == 2
    history = store.list_wallet_transactions(wallet.id)
    assert history[0].description == "Paid to friend@upi (Food)"
    assert balance_delta(history) == Decimal("12960")
