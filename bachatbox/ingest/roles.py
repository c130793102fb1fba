"""Column role detection from header text.

Detection is purely lexical. Each role owns an ordered keyword tuple, and the
order of :data:`ROLE_KEYWORDS` is the priority order used to break ties when a
header matches several roles. ``creditAmount``/``debitAmount`` come first so
"Credit Amount" is not claimed by the generic ``amount`` role.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

ROLE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "creditAmount": ("credit", "deposit"),
    "debitAmount": ("debit", "withdrawal"),
    "date": ("date", "time", "when", "period", "day", "month", "year"),
    "amount": (
        "amount",
        "sum",
        "value",
        "price",
        "cost",
        "payment",
        "fee",
        "expense",
        "income",
    ),
    "description": (
        "desc",
        "narration",
        "particular",
        "detail",
        "memo",
        "note",
        "remark",
        "merchant",
        "payee",
    ),
    "type": ("type", "mode", "nature", "dr/cr", "cr/dr"),
    "category": ("category", "tag", "group", "class"),
    "name": ("name",),
    "email": ("email", "e-mail", "mail"),
    "phone": ("phone", "mobile", "contact"),
    "address": ("address", "city", "location"),
    "id": ("id", "reference", "ref", "utr"),
}

PERSONAL_ROLES: tuple[str, ...] = ("name", "email", "phone", "address", "id")


def detect_roles(headers: Iterable[str]) -> dict[str, str]:
    """Infer which header plays which role.

    Headers are visited in file order; for each header the roles are tried in
    priority order and the first unclaimed role with a keyword contained in the
    header (case-insensitive) claims it. A role maps to at most one header,
    so the first matching header wins. Roles without a match are absent.
    """

    roles: dict[str, str] = {}
    for header in headers:
        lowered = header.strip().lower()
        if not lowered:
            continue
        for role, keywords in ROLE_KEYWORDS.items():
            if role in roles:
                continue
            if any(k in lowered for k in keywords):
                roles[role] = header
                break
    return roles


def personal_columns(roles: Mapping[str, str]) -> list[str]:
    """Headers detected as personal information (name/email/phone/address/id)."""

    return [roles[r] for r in PERSONAL_ROLES if r in roles]


__all__ = ["PERSONAL_ROLES", "ROLE_KEYWORDS", "detect_roles", "personal_columns"]
