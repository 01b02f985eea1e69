#!/usr/bin/env python3
"""
Spending Trend Analysis

Month-over-month comparison of a selected month's spending against the full
transaction history:

- change versus the previous calendar month
- change versus the average month
- the category with the largest month-over-month growth
- the calendar day with the largest total spend

Edge cases:
- The "all" period and empty periods produce no trends at all (``None``),
  which callers must show as "insufficient data", not as zero change.
- Without a baseline (no previous-month spend, no history) a change is 0%.
- A category with spend this month and none the month before is "new" and
  beats any finite growth rate. The first new category by name keeps the slot.
- Growth ties go to the category name that sorts first; spend-day ties go to
  the earliest day.
"""

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from ..core.currency import percent_change
from ..core.dates import parse_month_key, previous_month_key
from ..core.models import Transaction
from ..core.money import Money
from .filters import ALL

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class CategoryGrowth:
    """Top growing category. ``growth`` is ``math.inf`` for new categories."""

    name: str
    growth: float
    is_new: bool = False

    @classmethod
    def not_available(cls) -> "CategoryGrowth":
        return cls(name=NOT_AVAILABLE, growth=0.0, is_new=False)


@dataclass(frozen=True)
class SpendingDay:
    """Calendar day with the largest summed expenses."""

    day: date | None
    amount: Money


@dataclass(frozen=True)
class SpendingTrends:
    """Trend figures for one selected month."""

    month: str
    current_expenses: Money
    previous_expenses: Money
    average_monthly_expenses: Money
    vs_prev_month: float
    vs_average: float
    top_growing_category: CategoryGrowth
    largest_spending_day: SpendingDay

    def to_dict(self) -> dict[str, Any]:
        growth = self.top_growing_category
        return {
            "month": self.month,
            "current_expenses": str(self.current_expenses.to_decimal()),
            "previous_expenses": str(self.previous_expenses.to_decimal()),
            "average_monthly_expenses": str(self.average_monthly_expenses.to_decimal()),
            "vs_prev_month": round(self.vs_prev_month, 2),
            "vs_average": round(self.vs_average, 2),
            "top_growing_category": {
                "name": growth.name,
                "growth": None if growth.is_new else round(growth.growth, 2),
                "is_new": growth.is_new,
            },
            "largest_spending_day": {
                "day": self.largest_spending_day.day.isoformat() if self.largest_spending_day.day else None,
                "amount": str(self.largest_spending_day.amount.to_decimal()),
            },
        }


def _expense_cents_by(transactions: Iterable[Transaction], key) -> dict[Any, int]:
    totals: dict[Any, int] = defaultdict(int)
    for transaction in transactions:
        if transaction.is_expense:
            totals[key(transaction)] += transaction.amount.cents
    return totals


def top_growing_category(current: dict[str, int], previous: dict[str, int]) -> CategoryGrowth:
    """
    Pick the category with the largest growth from previous to current spend.

    Args:
        current: Expense cents per category for the selected month
        previous: Expense cents per category for the month before
    """
    best = CategoryGrowth.not_available()
    best_growth = -math.inf

    for name in sorted(current):
        current_cents = current[name]
        previous_cents = previous.get(name, 0)
        if previous_cents > 0:
            growth = percent_change(current_cents, previous_cents)
            if growth > best_growth:
                best_growth = growth
                best = CategoryGrowth(name=name, growth=growth)
        elif current_cents > 0 and best_growth < math.inf:
            best_growth = math.inf
            best = CategoryGrowth(name=name, growth=math.inf, is_new=True)

    return best


def largest_spending_day(transactions: Iterable[Transaction]) -> SpendingDay:
    """Day with the highest summed expenses; ties go to the earliest day."""
    by_day = _expense_cents_by(transactions, lambda t: t.day)
    if not by_day:
        return SpendingDay(day=None, amount=Money.zero())
    day, cents = min(by_day.items(), key=lambda item: (-item[1], item[0]))
    return SpendingDay(day=day, amount=Money.from_cents(cents))


def analyze_trends(
    period_transactions: Sequence[Transaction],
    all_transactions: Iterable[Transaction],
    selected_month: str,
) -> SpendingTrends | None:
    """
    Compute spending trends for a selected month.

    Args:
        period_transactions: Transactions already filtered to ``selected_month``
        all_transactions: Full history used for baselines
        selected_month: YYYY-MM key, or "all"

    Returns:
        SpendingTrends, or None when the period is "all" or has no transactions
    """
    if selected_month == ALL or not period_transactions:
        return None

    parse_month_key(selected_month)
    prev_month = previous_month_key(selected_month)
    history = list(all_transactions)

    current_cents = sum(t.amount.cents for t in period_transactions if t.is_expense)

    monthly_cents = _expense_cents_by(history, lambda t: t.month_key)
    previous_cents = monthly_cents.get(prev_month, 0)

    # avg = total / n, so (current - avg) / avg == (current * n - total) / total
    months = len(monthly_cents)
    history_cents = sum(monthly_cents.values())
    if months and history_cents:
        vs_average = percent_change(current_cents * months, history_cents)
        average_cents = history_cents // months
    else:
        vs_average = 0.0
        average_cents = 0

    current_by_category = _expense_cents_by(period_transactions, lambda t: t.category)
    previous_by_category = _expense_cents_by(
        (t for t in history if t.month_key == prev_month), lambda t: t.category
    )

    trends = SpendingTrends(
        month=selected_month,
        current_expenses=Money.from_cents(current_cents),
        previous_expenses=Money.from_cents(previous_cents),
        average_monthly_expenses=Money.from_cents(average_cents),
        vs_prev_month=percent_change(current_cents, previous_cents),
        vs_average=vs_average,
        top_growing_category=top_growing_category(current_by_category, previous_by_category),
        largest_spending_day=largest_spending_day(period_transactions),
    )
    logger.debug("Trends for %s: %s", selected_month, trends)
    return trends
