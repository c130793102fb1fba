"""Row normalization: one ``RawRow`` -> :class:`CanonicalTransaction`.

``normalize`` is total: malformed amounts become zero, unparseable dates fall
back to the import time, missing text falls back to placeholders. The only
"failure" is ``None`` for rows carrying nothing usable (blank trailing lines).

Amount and polarity, first matching rule wins:

1. Both ``creditAmount`` and ``debitAmount`` columns present (bank statement
   shape): a positive credit is an inflow of that amount; otherwise an outflow
   of the debit amount.
2. A ``type`` value of ``credit`` (any case): inflow of the ``amount`` column.
3. Otherwise the ``amount`` column's magnitude; inflow when the type is
   ``income``, or when there is no type and the amount is positive.

Slash dates are read day-first (``15/03/2024``, ``15/03/24``); anything else
goes through :meth:`datetime.fromisoformat`.
"""

from __future__ import annotations

from datetime import UTC, datetime, time
from decimal import Decimal, InvalidOperation

from ..categories import classify_category
from ..models import POLARITY, CanonicalTransaction, ColumnRoleMap, Destination, RawRow
from .providers import ProviderAdapter, get_adapter

DEFAULT_DESCRIPTION = "Imported transaction"
INCOME_CATEGORY = "Income"
OTHER_CATEGORY = "Others"

_ZERO = Decimal(0)

# Checked case-insensitively, longest first so "rs." wins over "rs".
_CURRENCY_MARKERS: tuple[str, ...] = ("inr", "rs.", "rs", "₹", "$")

_WEEKDAYS = frozenset(
    ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
)

# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def parse_amount(raw: str | None) -> Decimal:
    """Parse a signed decimal amount; ``Decimal(0)`` when absent or invalid.

    Accepts a leading ``+``/``-``, currency markers (``₹``, ``$``, ``Rs``,
    ``INR``), accounting parentheses and thousands separators, in any order.
    """

    if raw is None:
        return _ZERO
    s = str(raw).strip()
    if not s:
        return _ZERO

    negative = False
    while True:
        changed = False
        if s.startswith("+"):
            s = s[1:].lstrip()
            changed = True
        elif s.startswith("-"):
            negative = True
            s = s[1:].lstrip()
            changed = True
        lowered = s.lower()
        for marker in _CURRENCY_MARKERS:
            if lowered.startswith(marker):
                s = s[len(marker) :].lstrip()
                changed = True
                break
        if s.startswith("(") and s.endswith(")") and len(s) >= 2:
            negative = True
            s = s[1:-1].strip()
            changed = True
        if not changed:
            break

    s = s.replace(",", "").replace(" ", "")
    try:
        d = Decimal(s)
    except InvalidOperation:
        return _ZERO
    if not d.is_finite():
        return _ZERO
    return -abs(d) if negative else d


def _parse_day_first(text: str) -> datetime | None:
    parts = text.split("/")
    if len(parts) != 3:
        return None
    day, month = parts[0].strip(), parts[1].strip()
    year, _, clock = parts[2].strip().partition(" ")
    if len(year) == 2:
        year = "20" + year
    if len(year) != 4:
        return None
    parsed = datetime(int(year), int(month), int(day))
    if clock.strip():
        parsed = datetime.combine(parsed.date(), time.fromisoformat(clock.strip()))
    return parsed


def parse_date(raw: str | None, *, now: datetime) -> datetime:
    """Parse a source date, falling back to ``now``; never raises.

    Results without an offset are taken as UTC.
    """

    s = (raw or "").strip()
    if not s:
        return now
    try:
        parsed = _parse_day_first(s) if "/" in s else datetime.fromisoformat(s)
    except (ValueError, TypeError, OverflowError):
        return now
    if parsed is None:
        return now
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _value(row: RawRow, roles: ColumnRoleMap, role: str) -> str:
    header = roles.get(role)
    if header is None:
        return ""
    return (row.get(header) or "").strip()


def _weekday_label(row: RawRow) -> str | None:
    for header, value in row.items():
        if "day" in header and (value or "").strip().lower() in _WEEKDAYS:
            return value.strip().title()
    return None


def _resolve_amount(row: RawRow, roles: ColumnRoleMap) -> tuple[Decimal, bool]:
    """Return ``(magnitude, is_inflow)`` following the polarity rules."""

    if "creditAmount" in roles and "debitAmount" in roles:
        credit = parse_amount(_value(row, roles, "creditAmount"))
        if credit > 0:
            return credit, True
        return abs(parse_amount(_value(row, roles, "debitAmount"))), False

    type_value = _value(row, roles, "type").lower()
    signed = parse_amount(_value(row, roles, "amount"))
    if type_value == "credit":
        return abs(signed), True
    inflow = type_value == "income" or (not type_value and signed > 0)
    return abs(signed), inflow


# ---------------------------------------------------------------------------
# Row normalizer
# ---------------------------------------------------------------------------


def normalize(
    row: RawRow,
    roles: ColumnRoleMap,
    provider_hint: str | None = None,
    *,
    destination: Destination | None = None,
    now: datetime | None = None,
) -> CanonicalTransaction | None:
    """Normalize one decoded row, or return ``None`` when it carries nothing.

    Parameters
    ----------
    row:
        Decoded row (lower-cased header -> cell text).
    roles:
        Roles detected from the file's headers.
    provider_hint:
        Payment provider id (``google_pay``, ``phonepe``...). When given, the
        provider's columns take precedence over ``roles`` and free-text
        categories are mapped onto the wallet vocabulary.
    destination:
        ``"transactions"`` (income/expense) or ``"wallet"`` (credit/debit).
        Defaults to ``"wallet"`` for provider imports, else
        ``"transactions"``.
    now:
        Fallback instant for missing or unparseable dates.
    """

    adapter: ProviderAdapter | None = get_adapter(provider_hint) if provider_hint else None
    if destination is None:
        destination = "wallet" if adapter is not None else "transactions"
    inflow_name, outflow_name = POLARITY[destination]
    effective = adapter.resolve_roles(row, roles) if adapter is not None else roles

    amount, inflow = _resolve_amount(row, effective)
    raw_description = _value(row, effective, "description")
    raw_category = _value(row, effective, "category")
    if amount == 0 and not raw_category and not raw_description:
        return None

    when = parse_date(_value(row, effective, "date"), now=now or datetime.now(UTC))

    if raw_description:
        description = raw_description
    elif adapter is not None:
        description = adapter.description_fallback
    else:
        weekday = _weekday_label(row)
        description = f"{weekday} transaction" if weekday else DEFAULT_DESCRIPTION

    if adapter is not None:
        category = classify_category(raw_category or raw_description)
    else:
        category = raw_category or (INCOME_CATEGORY if inflow else OTHER_CATEGORY)

    return CanonicalTransaction(
        amount=amount,
        transaction_type=inflow_name if inflow else outflow_name,
        description=description,
        category=category,
        date=when,
    )


__all__ = [
    "DEFAULT_DESCRIPTION",
    "INCOME_CATEGORY",
    "OTHER_CATEGORY",
    "normalize",
    "parse_amount",
    "parse_date",
]
