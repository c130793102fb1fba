from __future__ import annotations

from bachatbox.ingest.roles import detect_roles, personal_columns


def test_basic_headers():
    roles = detect_roles(["date", "amount", "description", "category", "type"])
    assert roles == {
        "date": "date",
        "amount": "amount",
        "description": "description",
        "category": "category",
        "type": "type",
    }


def test_each_role_maps_to_at_most_one_header_and_first_header_wins():
    roles = detect_roles(["Txn Date", "Posting Date", "Amount"])
    assert roles == {"date": "Txn Date", "amount": "Amount"}


def test_bank_statement_headers_claim_credit_and_debit_before_amount():
    roles = detect_roles(["Date", "Narration", "Debit Amount", "Credit Amount", "Balance"])
    assert roles["creditAmount"] == "Credit Amount"
    assert roles["debitAmount"] == "Debit Amount"
    assert roles["description"] == "Narration"
    assert "amount" not in roles


def test_matching_is_case_insensitive_substring():
    roles = detect_roles(["TRANSACTION DATE", "Payment Mode", "Merchant Name"])
    assert roles["date"] == "TRANSACTION DATE"
    # "payment" is an amount keyword and amount outranks type
    assert roles["amount"] == "Payment Mode"
    assert roles["description"] == "Merchant Name"


def test_claimed_role_lets_later_header_fall_through_to_next_role():
    roles = detect_roles(["Amount", "Payment Type"])
    assert roles["amount"] == "Amount"
    assert roles["type"] == "Payment Type"


def test_unmatched_and_empty_headers_yield_no_roles():
    assert detect_roles(["foo", "", "bar"]) == {}
    assert detect_roles([]) == {}


def test_personal_information_columns():
    roles = detect_roles(["Date", "Amount", "Email", "Phone Number", "Reference"])
    assert personal_columns(roles) == ["Email", "Phone Number", "Reference"]


def test_detection_is_deterministic():
    headers = ["Date", "Particulars", "Withdrawal", "Deposit", "Mode", "Ref No"]
    assert detect_roles(headers) == detect_roles(headers)
    assert detect_roles(headers) == {
        "date": "Date",
        "description": "Particulars",
        "debitAmount": "Withdrawal",
        "creditAmount": "Deposit",
        "type": "Mode",
        "id": "Ref No",
    }
