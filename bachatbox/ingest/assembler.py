"""Import batch assembly: decode -> detect roles -> normalize every row.

Rows are normalized in fixed-size chunks. The chunking is invisible in the
result; it exists so the async variant can hand control back to the event
loop between chunks when a large statement is imported from an interactive
caller.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from ..logging_setup import get_logger
from ..models import CanonicalTransaction, ColumnRoleMap, Destination, ImportBatch, RawRow
from .decoder import decode, headers_of
from .normalize import normalize
from .roles import detect_roles

logger = get_logger(__name__)

DEFAULT_BATCH_SIZE = 100
_BATCH_SIZE_ENV = "BACHATBOX_IMPORT_BATCH_SIZE"


def _resolve_batch_size(batch_size: int | None) -> int:
    """Explicit size, else ``BACHATBOX_IMPORT_BATCH_SIZE``, else 100."""

    if batch_size is not None and batch_size > 0:
        return batch_size
    env_val = os.getenv(_BATCH_SIZE_ENV)
    try:
        size = int(env_val) if env_val else DEFAULT_BATCH_SIZE
    except ValueError:
        size = DEFAULT_BATCH_SIZE
    return size if size > 0 else DEFAULT_BATCH_SIZE


def iter_chunks(rows: Sequence[RawRow], size: int) -> Iterator[tuple[int, Sequence[RawRow]]]:
    """Yield ``(base_index, chunk)`` pairs covering ``rows`` in order."""

    for base in range(0, len(rows), size):
        yield base, rows[base : base + size]


@dataclass(slots=True)
class _Accumulator:
    roles: ColumnRoleMap
    provider_hint: str | None
    destination: Destination | None
    now: datetime
    records: list[CanonicalTransaction] = field(default_factory=list)
    skipped: int = 0

    def feed(self, base: int, chunk: Sequence[RawRow]) -> None:
        for offset, row in enumerate(chunk):
            row_no = base + offset + 1
            try:
                tx = normalize(
                    row,
                    self.roles,
                    self.provider_hint,
                    destination=self.destination,
                    now=self.now,
                )
            except Exception:
                logger.warning("row %d raised during normalization; skipped", row_no, exc_info=True)
                self.skipped += 1
                continue
            if tx is None:
                logger.debug("row %d has no amount, category or description; skipped", row_no)
                self.skipped += 1
                continue
            self.records.append(tx)

    def result(self, total: int) -> ImportBatch:
        return ImportBatch(records=tuple(self.records), skipped=self.skipped, total=total)


def _start(
    content: bytes | str,
    file_kind: str,
    provider_hint: str | None,
    destination: Destination | None,
    now: datetime | None,
) -> tuple[list[RawRow], _Accumulator]:
    rows = decode(content, file_kind)
    roles = detect_roles(headers_of(rows))
    logger.debug("detected column roles: %s", roles)
    acc = _Accumulator(
        roles=roles,
        provider_hint=provider_hint,
        destination=destination,
        now=now or datetime.now(UTC),
    )
    return rows, acc


def _log_outcome(batch: ImportBatch, file_kind: str, provider_hint: str | None) -> None:
    logger.info(
        "imported %d of %d %s rows (provider=%s, skipped=%d)",
        batch.imported,
        batch.total,
        file_kind,
        provider_hint or "-",
        batch.skipped,
    )


def import_batch(
    content: bytes | str,
    file_kind: str,
    provider_hint: str | None = None,
    *,
    destination: Destination | None = None,
    batch_size: int | None = None,
    now: datetime | None = None,
) -> ImportBatch:
    """Import one file into canonical records, preserving row order.

    Raises :class:`~bachatbox.errors.DecodeError` when the file cannot be
    decoded; no partial batch is returned in that case. Rows that normalize to
    nothing, or whose normalization raises, are counted in ``skipped``.
    """

    rows, acc = _start(content, file_kind, provider_hint, destination, now)
    size = _resolve_batch_size(batch_size)
    for base, chunk in iter_chunks(rows, size):
        acc.feed(base, chunk)
        logger.debug("normalized rows %d-%d", base + 1, base + len(chunk))
    batch = acc.result(len(rows))
    _log_outcome(batch, file_kind, provider_hint)
    return batch


async def aimport_batch(
    content: bytes | str,
    file_kind: str,
    provider_hint: str | None = None,
    *,
    destination: Destination | None = None,
    batch_size: int | None = None,
    now: datetime | None = None,
) -> ImportBatch:
    """Coroutine form of :func:`import_batch` that yields between chunks."""

    rows, acc = _start(content, file_kind, provider_hint, destination, now)
    size = _resolve_batch_size(batch_size)
    for base, chunk in iter_chunks(rows, size):
        acc.feed(base, chunk)
        await asyncio.sleep(0)
    batch = acc.result(len(rows))
    _log_outcome(batch, file_kind, provider_hint)
    return batch


__all__ = ["DEFAULT_BATCH_SIZE", "aimport_batch", "import_batch", "iter_chunks"]
