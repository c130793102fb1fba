"""Savings plans for goals.

A plan spreads what is left of a goal evenly over the calendar months until
its target date and expresses the monthly amount as a share of the goal's
monthly income. The share drives a short list of saving suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from .models import Goal

_CENT = Decimal("0.01")

# (share above which the tips apply, tips), heaviest first; tips accumulate.
_SUGGESTION_TIERS: tuple[tuple[Decimal, tuple[str, ...]], ...] = (
    (
        Decimal(30),
        (
            "Consider reducing non-essential expenses",
            "Look for additional income sources",
        ),
    ),
    (
        Decimal(20),
        (
            "Review and optimize monthly subscriptions",
            "Consider meal planning to reduce food expenses",
        ),
    ),
)
_ALWAYS = "Track daily expenses to identify saving opportunities"


@dataclass(frozen=True, slots=True)
class SavingsPlan:
    """Monthly saving needed to reach a goal on time.

    ``recommended_saving_percentage`` is ``None`` when the goal has no
    positive monthly income to measure against.
    """

    months_left: int
    required_monthly_saving: Decimal
    recommended_saving_percentage: Decimal | None
    suggestions: tuple[str, ...]


def months_between(start: date, end: date) -> int:
    """Calendar-month distance; days are ignored and the past is negative."""

    return (end.year - start.year) * 12 + (end.month - start.month)


def saving_suggestions(percentage: Decimal | None) -> tuple[str, ...]:
    """Tips for saving ``percentage`` of income; ``None`` counts as unaffordable."""

    tips: list[str] = []
    for threshold, tier in _SUGGESTION_TIERS:
        if percentage is None or percentage > threshold:
            tips.extend(tier)
    tips.append(_ALWAYS)
    return tuple(tips)


def savings_plan(goal: Goal, *, today: date) -> SavingsPlan:
    """Build the savings plan for ``goal`` as seen on ``today``.

    Parameters
    ----------
    goal:
        The goal; ``goal.remaining`` is what still has to be saved.
    today:
        Reference day (a ``datetime`` works too). Goals whose target month
        is this month or already past get the whole remainder as one month.
    """

    months_left = months_between(today, goal.target_date)
    required = (goal.remaining / max(1, months_left)).quantize(_CENT, rounding=ROUND_HALF_UP)
    percentage: Decimal | None = None
    if goal.monthly_income > 0:
        percentage = (required / goal.monthly_income * 100).quantize(
            _CENT, rounding=ROUND_HALF_UP
        )
    return SavingsPlan(
        months_left=months_left,
        required_monthly_saving=required,
        recommended_saving_percentage=percentage,
        suggestions=saving_suggestions(percentage),
    )


__all__ = ["SavingsPlan", "months_between", "saving_suggestions", "savings_plan"]
