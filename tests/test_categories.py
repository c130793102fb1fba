from __future__ import annotations

import pytest

from bachatbox.categories import CATEGORY_CODES, classify_category, display_name


@pytest.mark.parametrize(
    ("text", "code"),
    [
        ("Restaurant bill", "food"),
        ("Cab ride downtown", "transportation"),
        ("xyz123", "others"),
        ("ELECTRICITY BILL", "utilities"),
        ("Online store", "shopping"),
        ("Doctor visit", "healthcare"),
        ("School fees", "education"),
        ("House rent", "rent"),
        ("Movie night", "entertainment"),
    ],
)
def test_keyword_classification(text, code):
    assert classify_category(text) == code


def test_earlier_rule_wins_when_several_match():
    # "food" is checked before "shopping"
    assert classify_category("Food shopping") == "food"


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_text_is_others(text):
    assert classify_category(text) == "others"


def test_every_code_has_a_display_name():
    assert all(display_name(c) != c for c in CATEGORY_CODES)
    assert display_name("food") == "Food & Dining"
    assert display_name("custom") == "custom"
