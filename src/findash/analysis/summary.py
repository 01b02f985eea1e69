#!/usr/bin/env python3
"""
Financial Summary Aggregation

Pure aggregation of a transaction collection (plus debts, assets and
liabilities) into the FinancialSummary shown on the dashboard: totals,
per-category expense breakdown, per-month series and net worth.

All accumulation happens in integer cents, so summarizing the same input
twice yields equal summaries.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..core.models import Asset, Debt, DebtType, Liability, Transaction
from ..core.money import Money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryTotal:
    """Summed expenses for one category."""

    name: str
    value: Money


@dataclass(frozen=True)
class MonthlyTotals:
    """Income and expenses for one YYYY-MM month."""

    month: str
    income: Money
    expenses: Money

    @property
    def net(self) -> Money:
        return self.income - self.expenses


@dataclass(frozen=True)
class FinancialSummary:
    """
    Derived view of all financial data for a scope.

    Never mutated; recompute with ``summarize`` when the inputs change.
    """

    total_income: Money
    total_expenses: Money
    net_savings: Money
    total_debt: Money
    total_receivables: Money
    net_worth: Money
    expenses_by_category: tuple[CategoryTotal, ...]
    monthly_data: tuple[MonthlyTotals, ...]

    @property
    def is_deficit(self) -> bool:
        """True when expenses exceed income."""
        return self.net_savings.cents < 0

    def top_categories(self, limit: int = 5) -> tuple[CategoryTotal, ...]:
        """Largest expense categories first."""
        return self.expenses_by_category[:limit]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization (decimal strings)."""
        return {
            "total_income": str(self.total_income.to_decimal()),
            "total_expenses": str(self.total_expenses.to_decimal()),
            "net_savings": str(self.net_savings.to_decimal()),
            "total_debt": str(self.total_debt.to_decimal()),
            "total_receivables": str(self.total_receivables.to_decimal()),
            "net_worth": str(self.net_worth.to_decimal()),
            "expenses_by_category": [
                {"name": c.name, "value": str(c.value.to_decimal())} for c in self.expenses_by_category
            ],
            "monthly_data": [
                {
                    "month": m.month,
                    "income": str(m.income.to_decimal()),
                    "expenses": str(m.expenses.to_decimal()),
                }
                for m in self.monthly_data
            ],
        }


def summarize(
    transactions: Iterable[Transaction],
    debts: Iterable[Debt] = (),
    assets: Iterable[Asset] = (),
    liabilities: Iterable[Liability] = (),
) -> FinancialSummary:
    """
    Aggregate transactions, debts, assets and liabilities.

    Args:
        transactions: Transactions in scope (already filtered by the caller)
        debts: Debts; settled ones are excluded entirely
        assets: Assets counted toward net worth
        liabilities: Liabilities subtracted from net worth

    Returns:
        FinancialSummary with categories sorted by value descending (ties by
        name ascending) and months sorted ascending
    """
    income_cents = 0
    expense_cents = 0
    category_cents: dict[str, int] = defaultdict(int)
    month_cents: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    count = 0

    for transaction in transactions:
        cents = transaction.amount.cents
        month = month_cents[transaction.month_key]
        if transaction.is_income:
            income_cents += cents
            month[0] += cents
        else:
            expense_cents += cents
            month[1] += cents
            category_cents[transaction.category] += cents
        count += 1

    debt_cents = 0
    receivable_cents = 0
    for debt in debts:
        if debt.is_settled:
            continue
        if debt.type is DebtType.OWED:
            debt_cents += debt.amount.cents
        elif debt.type is DebtType.IOU:
            receivable_cents += debt.amount.cents

    asset_cents = sum(asset.value.cents for asset in assets)
    liability_cents = sum(liability.value.cents for liability in liabilities)

    expenses_by_category = tuple(
        CategoryTotal(name=name, value=Money.from_cents(cents))
        for name, cents in sorted(category_cents.items(), key=lambda item: (-item[1], item[0]))
    )
    monthly_data = tuple(
        MonthlyTotals(month=key, income=Money.from_cents(values[0]), expenses=Money.from_cents(values[1]))
        for key, values in sorted(month_cents.items())
    )

    logger.debug("Summarized %d transactions across %d months", count, len(monthly_data))

    return FinancialSummary(
        total_income=Money.from_cents(income_cents),
        total_expenses=Money.from_cents(expense_cents),
        net_savings=Money.from_cents(income_cents - expense_cents),
        total_debt=Money.from_cents(debt_cents),
        total_receivables=Money.from_cents(receivable_cents),
        net_worth=Money.from_cents(asset_cents - liability_cents),
        expenses_by_category=expenses_by_category,
        monthly_data=monthly_data,
    )
