from __future__ import annotations

from decimal import Decimal

import pytest

from bachatbox.api import (
    import_transactions,
    preview_file,
    process_csv_transactions,
    store_transactions,
    store_wallet_transactions,
)
from bachatbox.errors import DecodeError, RecordNotFound
from bachatbox.storage import MemoryStore

GENERIC_CSV = (
    "Date,Category,Description,Amount,Type\n"
    "2024-03-15,Groceries,Supermarket,120.45,expense\n"
    "2024-03-01,Income,Salary,50000,income\n"
    ",,,,\n"
)

PHONEPE_CSV = (
    "transaction_date,description,amount,transaction_type\n"
    "2024-04-01,Cab to airport,300,debit\n"
    "2024-04-02,,1000,credit\n"
)


def test_process_csv_transactions_stores_user_records(fixed_now):
    store = MemoryStore()
    created = process_csv_transactions(GENERIC_CSV, store=store, user_id=7, now=fixed_now)
    assert [t.id for t in created] == [1, 2]
    assert store.list_transactions(7) == created
    assert [(t.transaction_type, t.amount) for t in created] == [
        ("expense", Decimal("120.45")),
        ("income", Decimal("50000")),
    ]


def test_import_transactions_updates_wallet_balance(fixed_now):
    store = MemoryStore()
    wallet = store.create_wallet(user_id=1, balance=Decimal("500"))
    created = import_transactions(
        PHONEPE_CSV, "phonepe", store=store, wallet_id=wallet.id, now=fixed_now
    )
    assert [(t.transaction_type, t.category, t.description) for t in created] == [
        ("debit", "transportation", "Cab to airport"),
        ("credit", "others", "PhonePe Transaction"),
    ]
    assert store.require_wallet(wallet.id).balance == Decimal("1200")


def test_import_into_missing_wallet_fails(fixed_now):
    with pytest.raises(RecordNotFound):
        import_transactions(PHONEPE_CSV, "phonepe", store=MemoryStore(), wallet_id=3, now=fixed_now)


def test_decode_failure_stores_nothing():
    store = MemoryStore()
    with pytest.raises(DecodeError):
        process_csv_transactions(b"\x00\x01", store=store, user_id=1, file_kind="xlsx")
    assert store.list_transactions(1) == []


def test_preview_does_not_store(fixed_now):
    batch = preview_file(GENERIC_CSV, "csv", now=fixed_now)
    assert (batch.imported, batch.skipped, batch.total) == (2, 1, 3)


def test_previewed_batches_can_be_stored_without_reimport(fixed_now):
    store = MemoryStore()
    wallet = store.create_wallet(user_id=1, balance=Decimal("500"))

    generic = preview_file(GENERIC_CSV, "csv", now=fixed_now)
    created = store_transactions(generic, store=store, user_id=7)
    assert [(t.description, t.amount) for t in created] == [
        (r.description, r.amount) for r in generic.records
    ]

    phonepe = preview_file(PHONEPE_CSV, "csv", "phonepe", now=fixed_now)
    moved = store_wallet_transactions(phonepe, store=store, wallet_id=wallet.id)
    assert [w.transaction_type for w in moved] == ["debit", "credit"]
    assert store.require_wallet(wallet.id).balance == Decimal("1200")
