from __future__ import annotations

import pytest

from bachatbox.ingest.providers import PROVIDERS, get_adapter, provider_labels


@pytest.mark.parametrize(
    ("given", "expected"),
    [
        ("google_pay", "google_pay"),
        ("Google Pay", "google_pay"),
        ("PHONEPE", "phonepe"),
        ("amazon-pay", "amazon_pay"),
        ("bank_statement", "bank_statement"),
    ],
)
def test_lookup_is_case_and_separator_insensitive(given, expected):
    assert get_adapter(given) is PROVIDERS[expected]


def test_unknown_provider_uses_generic_layout_with_its_own_label():
    adapter = get_adapter("bhim")
    assert adapter.provider_id == "bhim"
    assert adapter.description_fallback == "bhim Transaction"
    assert adapter.type_fields == PROVIDERS["other"].type_fields
    assert adapter.date_fields == PROVIDERS["other"].date_fields


def test_resolve_roles_prefers_present_provider_fields():
    phonepe = PROVIDERS["phonepe"]
    fallback = {"date": "date", "amount": "amount", "type": "type"}

    with_own = phonepe.resolve_roles(
        {"transaction_date": "2024-01-01", "transaction_type": "debit", "amount": "1"},
        fallback,
    )
    assert with_own["date"] == "transaction_date"
    assert with_own["type"] == "transaction_type"

    without_own = phonepe.resolve_roles({"date": "2024-01-01", "amount": "1"}, fallback)
    assert without_own["date"] == "date"
    assert without_own["type"] == "type"


def test_resolve_roles_does_not_mutate_fallback():
    fallback = {"description": "memo"}
    PROVIDERS["paytm"].resolve_roles({"narration": "x"}, fallback)
    assert fallback == {"description": "memo"}


def test_bank_statement_credit_and_debit_spellings():
    roles = PROVIDERS["bank_statement"].resolve_roles(
        {"deposit amt.": "10", "withdrawal amt.": "", "value date": "01/01/2024"}, {}
    )
    assert roles["creditAmount"] == "deposit amt."
    assert roles["debitAmount"] == "withdrawal amt."
    assert roles["date"] == "value date"


def test_labels_cover_every_provider():
    labels = provider_labels()
    assert set(labels) == {
        "google_pay",
        "paytm",
        "phonepe",
        "amazon_pay",
        "bank_statement",
        "other",
    }
    assert labels["phonepe"] == "PhonePe"
