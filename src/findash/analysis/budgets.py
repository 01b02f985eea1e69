#!/usr/bin/env python3
"""
Budget Evaluation

Spent-versus-budget per category over the transactions in scope, with a
three-level threshold classification:

- over:  more than 100% spent
- near:  more than 90% and at most 100%
- under: 90% or less (including zero-amount budgets)

Budgets are assumed unique per category; rejecting duplicates is the
workspace's job.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..core.currency import percentage
from ..core.models import Budget, Transaction
from ..core.money import Money

NEAR_THRESHOLD = 90.0
OVER_THRESHOLD = 100.0


class BudgetLevel(Enum):
    UNDER = "under"
    NEAR = "near"
    OVER = "over"


@dataclass(frozen=True)
class BudgetStatus:
    """Progress of one budget."""

    category: str
    budget: Money
    spent: Money
    percentage: float
    level: BudgetLevel

    @property
    def remaining(self) -> Money:
        """Budget left; negative when over budget."""
        return self.budget - self.spent

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "budget": str(self.budget.to_decimal()),
            "spent": str(self.spent.to_decimal()),
            "remaining": str(self.remaining.to_decimal()),
            "percentage": round(self.percentage, 2),
            "level": self.level.value,
        }


def classify_percentage(value: float) -> BudgetLevel:
    """Map a spent percentage to its threshold level."""
    if value > OVER_THRESHOLD:
        return BudgetLevel.OVER
    if value > NEAR_THRESHOLD:
        return BudgetLevel.NEAR
    return BudgetLevel.UNDER


def spending_by_category(transactions: Iterable[Transaction]) -> dict[str, int]:
    """Expense cents per category."""
    totals: dict[str, int] = defaultdict(int)
    for transaction in transactions:
        if transaction.is_expense:
            totals[transaction.category] += transaction.amount.cents
    return totals


def evaluate_budgets(transactions: Iterable[Transaction], budgets: Iterable[Budget]) -> list[BudgetStatus]:
    """
    Evaluate each budget against the expenses in scope.

    Args:
        transactions: Transactions in the current filtering scope
        budgets: Budgets with unique categories

    Returns:
        One BudgetStatus per budget, in input order
    """
    spent_by_category = spending_by_category(transactions)
    statuses = []
    for budget in budgets:
        spent_cents = spent_by_category.get(budget.category, 0)
        spent_pct = percentage(spent_cents, budget.amount.cents)
        statuses.append(
            BudgetStatus(
                category=budget.category,
                budget=budget.amount,
                spent=Money.from_cents(spent_cents),
                percentage=spent_pct,
                level=classify_percentage(spent_pct),
            )
        )
    return statuses
