#!/usr/bin/env python3
"""
Dashboard Workspace

A workspace is one user's complete financial data: the transaction ledger,
categories, budgets, goals, bills, debts, assets, liabilities and reminders.
It wires the pure analysis engines to that data and is persisted as a
single JSON document by WorkspaceStore.
"""

import logging
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .analysis.budgets import BudgetStatus, evaluate_budgets
from .analysis.filters import ALL, filter_by_month
from .analysis.summary import FinancialSummary, summarize
from .analysis.trends import SpendingTrends, analyze_trends
from .core.json_utils import read_json, write_json
from .core.models import (
    DEFAULT_CATEGORIES,
    SAVINGS_GOAL_CATEGORY,
    Asset,
    Bill,
    Budget,
    Debt,
    Goal,
    Liability,
    Reminder,
    Transaction,
    TransactionType,
)
from .core.money import Money

logger = logging.getLogger(__name__)

WORKSPACE_FORMAT_VERSION = 1


def _millis() -> int:
    return int(time.time() * 1000)


class TransactionLedger:
    """
    Transactions keyed by id, in insertion order.

    Ids are immutable once a transaction is in the ledger: ``update`` replaces
    every other field of the stored transaction.
    """

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._transactions: dict[str, Transaction] = {}
        for transaction in transactions:
            self.add(transaction)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions.values())

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._transactions

    def get(self, transaction_id: str) -> Transaction:
        """Raises KeyError for an unknown id."""
        return self._transactions[transaction_id]

    def add(self, transaction: Transaction) -> None:
        if transaction.id in self._transactions:
            raise ValueError(f"Duplicate transaction id: {transaction.id}")
        self._transactions[transaction.id] = transaction

    def update(self, transaction: Transaction) -> None:
        """Replace the transaction with the same id; raises KeyError if absent."""
        if transaction.id not in self._transactions:
            raise KeyError(transaction.id)
        self._transactions[transaction.id] = transaction

    def delete(self, transaction_id: str) -> Transaction:
        """Remove and return a transaction; raises KeyError if absent."""
        return self._transactions.pop(transaction_id)

    def clear(self) -> None:
        self._transactions.clear()

    def sorted_by_date(self, newest_first: bool = False) -> list[Transaction]:
        return sorted(self, key=lambda t: (t.date, t.id), reverse=newest_first)


@dataclass
class Workspace:
    """
    Orchestration context for one user's dashboard.

    Example:
        >>> ws = Workspace()
        >>> ws.accept_import(result.valid_transactions)
        >>> ws.add_budget(Budget("Food", Money.from_dollars("400")))
        >>> ws.budget_statuses("2024-01")
    """

    ledger: TransactionLedger = field(default_factory=TransactionLedger)
    categories: list[str] = field(default_factory=lambda: sorted(DEFAULT_CATEGORIES))
    goals: list[Goal] = field(default_factory=list)
    bills: list[Bill] = field(default_factory=list)
    debts: list[Debt] = field(default_factory=list)
    budgets: list[Budget] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)
    liabilities: list[Liability] = field(default_factory=list)
    reminders: list[Reminder] = field(default_factory=list)

    @property
    def transactions(self) -> list[Transaction]:
        return list(self.ledger)

    # --- Transactions ---

    def _merge_categories(self, transactions: Iterable[Transaction]) -> None:
        merged = set(self.categories)
        merged.update(t.category for t in transactions if t.is_expense)
        self.categories = sorted(merged)

    def accept_import(self, transactions: Iterable[Transaction]) -> None:
        """Replace the ledger with an accepted import batch."""
        batch = list(transactions)
        self.ledger = TransactionLedger(batch)
        self._merge_categories(batch)
        logger.info("Accepted import of %d transactions", len(batch))

    def _next_transaction_id(self) -> str:
        millis = _millis()
        while f"txn-{millis}" in self.ledger:
            millis += 1
        return f"txn-{millis}"

    def add_transaction(
        self,
        when: datetime,
        description: str,
        category: str,
        amount: Money,
        transaction_type: TransactionType,
    ) -> Transaction:
        """Add a manually entered transaction with a generated ``txn-<millis>`` id."""
        transaction = Transaction(
            id=self._next_transaction_id(),
            date=when,
            description=description,
            category=category,
            amount=amount,
            type=transaction_type,
        )
        self.ledger.add(transaction)
        self._merge_categories([transaction])
        return transaction

    def update_transaction(self, transaction: Transaction) -> None:
        self.ledger.update(transaction)

    def delete_transaction(self, transaction_id: str) -> None:
        self.ledger.delete(transaction_id)

    # --- Budgets ---

    def _find_budget(self, category: str) -> int | None:
        for index, budget in enumerate(self.budgets):
            if budget.category == category:
                return index
        return None

    def add_budget(self, budget: Budget) -> bool:
        """
        Add a budget for a category without one.

        Returns:
            False (and changes nothing) when the category already has a budget
        """
        if self._find_budget(budget.category) is not None:
            return False
        self.budgets.append(budget)
        self.budgets.sort(key=lambda b: b.category)
        return True

    def update_budget(self, budget: Budget) -> None:
        """Replace the budget for ``budget.category``; raises KeyError if none exists."""
        index = self._find_budget(budget.category)
        if index is None:
            raise KeyError(budget.category)
        self.budgets[index] = budget

    def remove_budget(self, category: str) -> None:
        self.budgets = [b for b in self.budgets if b.category != category]

    # --- Goals ---

    def add_goal(self, name: str, target_amount: Money, deadline: date | None = None) -> Goal:
        goal = Goal(id=f"goal-{_millis()}", name=name, target_amount=target_amount, deadline=deadline)
        self.goals.append(goal)
        return goal

    def _get_goal(self, goal_id: str) -> Goal:
        for goal in self.goals:
            if goal.id == goal_id:
                return goal
        raise KeyError(goal_id)

    def add_goal_contribution(self, goal_id: str, amount: Money, when: datetime | None = None) -> Transaction:
        """
        Record a contribution toward a savings goal.

        Increases the goal's saved amount and books the contribution as an
        expense in the "Savings Goal" category.

        Raises:
            KeyError: If no goal has ``goal_id``
        """
        goal = self._get_goal(goal_id)
        index = self.goals.index(goal)
        self.goals[index] = replace(goal, saved_amount=goal.saved_amount + amount)

        return self.add_transaction(
            when=when or datetime.now(),
            description=f"Contribution to: {goal.name}",
            category=SAVINGS_GOAL_CATEGORY,
            amount=amount,
            transaction_type=TransactionType.EXPENSE,
        )

    # --- Analysis ---

    def transactions_for(self, month: str = ALL) -> list[Transaction]:
        return filter_by_month(self.ledger, month)

    def summary(self, month: str = ALL) -> FinancialSummary:
        """Summary of the month's transactions plus all debts, assets and liabilities."""
        return summarize(self.transactions_for(month), self.debts, self.assets, self.liabilities)

    def trends(self, month: str) -> SpendingTrends | None:
        return analyze_trends(self.transactions_for(month), self.ledger, month)

    def budget_statuses(self, month: str = ALL) -> list[BudgetStatus]:
        return evaluate_budgets(self.transactions_for(month), self.budgets)

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": WORKSPACE_FORMAT_VERSION,
            "transactions": [t.to_dict() for t in self.ledger],
            "categories": list(self.categories),
            "goals": [g.to_dict() for g in self.goals],
            "bills": [b.to_dict() for b in self.bills],
            "debts": [d.to_dict() for d in self.debts],
            "budgets": [b.to_dict() for b in self.budgets],
            "assets": [a.to_dict() for a in self.assets],
            "liabilities": [li.to_dict() for li in self.liabilities],
            "reminders": [r.to_dict() for r in self.reminders],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Workspace":
        version = data.get("version", WORKSPACE_FORMAT_VERSION)
        if version != WORKSPACE_FORMAT_VERSION:
            raise ValueError(f"Unsupported workspace version: {version}")

        return cls(
            ledger=TransactionLedger(Transaction.from_dict(t) for t in data.get("transactions", [])),
            categories=list(data.get("categories", sorted(DEFAULT_CATEGORIES))),
            goals=[Goal.from_dict(g) for g in data.get("goals", [])],
            bills=[Bill.from_dict(b) for b in data.get("bills", [])],
            debts=[Debt.from_dict(d) for d in data.get("debts", [])],
            budgets=[Budget.from_dict(b) for b in data.get("budgets", [])],
            assets=[Asset.from_dict(a) for a in data.get("assets", [])],
            liabilities=[Liability.from_dict(li) for li in data.get("liabilities", [])],
            reminders=[Reminder.from_dict(r) for r in data.get("reminders", [])],
        )


class WorkspaceStore:
    """
    JSON file store for workspaces, one file per workspace name.

    Layout: ``<root>/<name>.json``
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise ValueError(f"Invalid workspace name: {name!r}")
        return self.root / f"{name}.json"

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def load(self, name: str) -> Workspace:
        """
        Load a workspace.

        Raises:
            FileNotFoundError: If the workspace has never been saved
            ValueError: If the file is not a valid workspace
        """
        path = self.path_for(name)
        if not path.exists():
            raise FileNotFoundError(f"Workspace not found: {path}")

        data = read_json(path)
        if not isinstance(data, dict):
            raise ValueError(f"Invalid workspace file: {path}")
        try:
            return Workspace.from_dict(data)
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid workspace file {path}: {e}") from e

    def load_or_create(self, name: str) -> Workspace:
        return self.load(name) if self.exists(name) else Workspace()

    def save(self, name: str, workspace: Workspace) -> Path:
        path = self.path_for(name)
        write_json(path, workspace.to_dict())
        logger.debug("Saved workspace %s to %s", name, path)
        return path

    def last_modified(self, name: str) -> datetime | None:
        path = self.path_for(name)
        if not path.exists():
            return None
        return datetime.fromtimestamp(path.stat().st_mtime)
