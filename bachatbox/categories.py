"""Wallet category vocabulary and the keyword classifier that feeds it.

Provider exports carry free-text categories or narrations ("Restaurant bill",
"Cab ride downtown"). Imports into the wallet map that text onto a fixed
vocabulary with ordered substring rules; the first rule that matches wins, so
``food`` is checked before ``utilities`` and "Restaurant bill" is food.
"""

from __future__ import annotations

CATEGORY_CODES: tuple[str, ...] = (
    "food",
    "shopping",
    "transportation",
    "utilities",
    "entertainment",
    "healthcare",
    "education",
    "rent",
    "others",
)

DEFAULT_CATEGORY = "others"

DISPLAY_NAMES: dict[str, str] = {
    "food": "Food & Dining",
    "shopping": "Shopping",
    "transportation": "Transportation",
    "utilities": "Utilities",
    "entertainment": "Entertainment",
    "healthcare": "Healthcare",
    "education": "Education",
    "rent": "Rent & Housing",
    "others": "Others",
}

# Ordered: earlier rules take precedence.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("food", ("food", "restaurant", "dining")),
    ("shopping", ("shop", "retail", "store")),
    ("transportation", ("transport", "travel", "cab", "taxi", "ride")),
    ("utilities", ("bill", "util")),
    ("entertainment", ("entertainment", "movie", "game")),
    ("healthcare", ("health", "doctor", "medical")),
    ("education", ("edu", "school", "college")),
    ("rent", ("rent", "house", "home")),
)


def classify_category(text: str | None) -> str:
    """Map free text onto one of :data:`CATEGORY_CODES`.

    Matching is case-insensitive substring containment. Empty or unmatched
    input maps to ``"others"``.
    """

    if not text:
        return DEFAULT_CATEGORY
    lowered = text.strip().lower()
    if not lowered:
        return DEFAULT_CATEGORY
    for code, keywords in CATEGORY_KEYWORDS:
        if any(k in lowered for k in keywords):
            return code
    return DEFAULT_CATEGORY


def display_name(code: str) -> str:
    """Human label for a category code; unknown codes are returned unchanged."""

    return DISPLAY_NAMES.get(code, code)


__all__ = [
    "CATEGORY_CODES",
    "CATEGORY_KEYWORDS",
    "DEFAULT_CATEGORY",
    "DISPLAY_NAMES",
    "classify_category",
    "display_name",
]
