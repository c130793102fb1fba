"""Payment-provider export formats as data.

Each provider is one :class:`ProviderAdapter` record naming the columns its
export uses for each role. The row normalizer never branches on provider ids;
it asks the adapter for an effective role map and runs the same rules for
every source. Supporting a new export means adding one entry to
:data:`PROVIDERS`.

Field names are lower-case because decoded headers are lower-cased.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

from ..models import ColumnRoleMap, RawRow


@dataclass(frozen=True, slots=True)
class ProviderAdapter:
    """Column layout of one provider's export.

    Every ``*_fields`` attribute lists candidate headers in preference order;
    the first one present in a row is used. When none is present the generic,
    header-detected role is kept, so a partially matching file still imports.
    """

    provider_id: str
    label: str
    description_fallback: str
    amount_fields: tuple[str, ...] = ("amount",)
    type_fields: tuple[str, ...] = ("type",)
    description_fields: tuple[str, ...] = ("description",)
    date_fields: tuple[str, ...] = ("date",)
    category_fields: tuple[str, ...] = ("category",)
    credit_fields: tuple[str, ...] = ()
    debit_fields: tuple[str, ...] = ()

    def _field_map(self) -> dict[str, tuple[str, ...]]:
        return {
            "amount": self.amount_fields,
            "type": self.type_fields,
            "description": self.description_fields,
            "date": self.date_fields,
            "category": self.category_fields,
            "creditAmount": self.credit_fields,
            "debitAmount": self.debit_fields,
        }

    def resolve_roles(self, row: RawRow, fallback: ColumnRoleMap) -> dict[str, str]:
        """Effective role map for ``row``: provider fields first, then ``fallback``."""

        roles = dict(fallback)
        for role, candidates in self._field_map().items():
            for name in candidates:
                if name in row:
                    roles[role] = name
                    break
        return roles


PROVIDERS: dict[str, ProviderAdapter] = {
    a.provider_id: a
    for a in (
        ProviderAdapter(
            provider_id="google_pay",
            label="Google Pay",
            description_fallback="Google Pay Transaction",
        ),
        ProviderAdapter(
            provider_id="paytm",
            label="Paytm",
            description_fallback="Paytm Transaction",
            description_fields=("narration", "description"),
        ),
        ProviderAdapter(
            provider_id="phonepe",
            label="PhonePe",
            description_fallback="PhonePe Transaction",
            type_fields=("transaction_type",),
            date_fields=("transaction_date",),
        ),
        ProviderAdapter(
            provider_id="amazon_pay",
            label="Amazon Pay",
            description_fallback="Amazon Pay Transaction",
        ),
        ProviderAdapter(
            provider_id="bank_statement",
            label="Bank Statement",
            description_fallback="Bank Transaction",
            description_fields=("description", "narration", "particulars", "remarks"),
            date_fields=("date", "transaction date", "txn date", "value date"),
            credit_fields=("credit amount", "credit", "deposit amt.", "deposit"),
            debit_fields=("debit amount", "debit", "withdrawal amt.", "withdrawal"),
        ),
        ProviderAdapter(
            provider_id="other",
            label="Other",
            description_fallback="other Transaction",
            type_fields=("type", "transaction_type"),
            date_fields=("date", "transaction_date"),
        ),
    )
}

GENERIC_PROVIDER = "other"


def normalize_provider_id(provider_id: str) -> str:
    return provider_id.strip().lower().replace("-", "_").replace(" ", "_")


def get_adapter(provider_id: str) -> ProviderAdapter:
    """Adapter for ``provider_id``; unknown ids get the generic layout.

    The generic fallback labels blank descriptions with the caller's id, e.g.
    ``"bhim Transaction"``.
    """

    key = normalize_provider_id(provider_id)
    adapter = PROVIDERS.get(key)
    if adapter is not None:
        return adapter
    generic = PROVIDERS[GENERIC_PROVIDER]
    return replace(
        generic,
        provider_id=key or GENERIC_PROVIDER,
        description_fallback=f"{provider_id.strip() or GENERIC_PROVIDER} Transaction",
    )


def provider_labels() -> Mapping[str, str]:
    return {pid: a.label for pid, a in PROVIDERS.items()}


__all__ = [
    "GENERIC_PROVIDER",
    "PROVIDERS",
    "ProviderAdapter",
    "get_adapter",
    "normalize_provider_id",
    "provider_labels",
]
