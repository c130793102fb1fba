"""Import services exposed to the application layer.

Each service runs the import pipeline over one file and hands the resulting
records to a store in a single bulk-create call. The pipeline keeps no
reference to the records afterwards; the store assigns ids and owns them.

``store_transactions``/``store_wallet_transactions`` take an already built
:class:`~bachatbox.models.ImportBatch`, so a batch shown to the user with
:func:`preview_file` can be stored without decoding the file again.
"""

from __future__ import annotations

from datetime import datetime

from .ingest.assembler import import_batch
from .logging_setup import get_logger
from .models import (
    ImportBatch,
    Transaction,
    TransactionCreate,
    WalletTransaction,
    WalletTransactionCreate,
)
from .storage import ImportSink

logger = get_logger(__name__)


def preview_file(
    content: bytes | str,
    file_kind: str,
    provider_hint: str | None = None,
    *,
    now: datetime | None = None,
) -> ImportBatch:
    """Normalize a file without storing anything (the confirm-before-import step)."""

    return import_batch(content, file_kind, provider_hint, now=now)


def store_transactions(
    batch: ImportBatch, *, store: ImportSink, user_id: int
) -> list[Transaction]:
    """Bulk-create a ``transactions`` batch for ``user_id``."""

    payloads = [TransactionCreate.from_canonical(tx, user_id=user_id) for tx in batch.records]
    created = store.bulk_create_transactions(payloads)
    logger.info(
        "stored %d transactions for user %d (%d rows skipped)",
        len(created),
        user_id,
        batch.skipped,
    )
    return created


def store_wallet_transactions(
    batch: ImportBatch, *, store: ImportSink, wallet_id: int
) -> list[WalletTransaction]:
    """Bulk-create a ``wallet`` batch in ``wallet_id``; the store moves the balance."""

    payloads = [
        WalletTransactionCreate.from_canonical(tx, wallet_id=wallet_id) for tx in batch.records
    ]
    created = store.bulk_create_wallet_transactions(payloads)
    logger.info(
        "stored %d wallet transactions in wallet %d (%d rows skipped)",
        len(created),
        wallet_id,
        batch.skipped,
    )
    return created


def process_csv_transactions(
    content: bytes | str,
    *,
    store: ImportSink,
    user_id: int,
    file_kind: str = "csv",
    now: datetime | None = None,
) -> list[Transaction]:
    """Import a generic CSV/Excel file into the user's transactions.

    Columns are detected from the header row; polarity is ``income``/
    ``expense``. Raises :class:`~bachatbox.errors.DecodeError` when the file
    cannot be read; nothing is stored in that case.
    """

    batch = import_batch(content, file_kind, destination="transactions", now=now)
    return store_transactions(batch, store=store, user_id=user_id)


def import_transactions(
    content: bytes | str,
    provider_id: str,
    *,
    store: ImportSink,
    wallet_id: int,
    file_kind: str = "csv",
    now: datetime | None = None,
) -> list[WalletTransaction]:
    """Import a payment-provider export into a wallet.

    ``provider_id`` selects the export layout (``google_pay``, ``paytm``,
    ``phonepe``, ``amazon_pay``, ``bank_statement``; anything else uses the
    generic layout). Polarity is ``credit``/``debit``; categories are mapped
    onto the wallet vocabulary. The store moves the wallet balance.
    """

    batch = import_batch(content, file_kind, provider_id, destination="wallet", now=now)
    logger.debug("importing %s export into wallet %d", provider_id, wallet_id)
    return store_wallet_transactions(batch, store=store, wallet_id=wallet_id)


__all__ = [
    "import_transactions",
    "preview_file",
    "process_csv_transactions",
    "store_transactions",
    "store_wallet_transactions",
]
