#!/usr/bin/env python3
"""
Transaction Filters

Independent predicates over a transaction collection for display: month,
category set, transaction type and an optional drill-down. Each filter keeps
or drops a transaction on its own, so applying them in any order gives the
same result set.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from ..core.dates import month_key
from ..core.models import Transaction, TransactionType

ALL = "all"


def _normalize_type(value: TransactionType | str) -> TransactionType | str:
    # "all" or a TransactionType; anything else raises ValueError
    if value == ALL:
        return ALL
    return TransactionType(value)


class DrillDownDimension(Enum):
    """What a drill-down filter keys on."""

    CATEGORY = "category"
    TYPE = "type"


@dataclass(frozen=True)
class DrillDown:
    """Single-value filter, typically from clicking a chart segment."""

    dimension: DrillDownDimension
    value: TransactionType | str

    def __post_init__(self) -> None:
        if self.dimension is DrillDownDimension.TYPE:
            object.__setattr__(self, "value", TransactionType(self.value))

    def matches(self, transaction: Transaction) -> bool:
        if self.dimension is DrillDownDimension.CATEGORY:
            return transaction.category == self.value
        return transaction.type is self.value


def filter_by_month(transactions: Iterable[Transaction], month: str = ALL) -> list[Transaction]:
    """Keep transactions in the given YYYY-MM month; "all" keeps everything."""
    if month == ALL:
        return list(transactions)
    return [t for t in transactions if t.month_key == month]


def filter_by_categories(transactions: Iterable[Transaction], categories: Iterable[str] = ()) -> list[Transaction]:
    """Keep transactions whose category is selected; no selection keeps everything."""
    selected = frozenset(categories)
    if not selected:
        return list(transactions)
    return [t for t in transactions if t.category in selected]


def filter_by_type(
    transactions: Iterable[Transaction], transaction_type: TransactionType | str = ALL
) -> list[Transaction]:
    """Keep transactions of one type; "all" keeps everything."""
    wanted = _normalize_type(transaction_type)
    if wanted == ALL:
        return list(transactions)
    return [t for t in transactions if t.type is wanted]


def filter_by_drill_down(transactions: Iterable[Transaction], drill_down: DrillDown | None = None) -> list[Transaction]:
    """Keep transactions matching the drill-down; None keeps everything."""
    if drill_down is None:
        return list(transactions)
    return [t for t in transactions if drill_down.matches(t)]


@dataclass(frozen=True)
class TransactionFilter:
    """
    The dashboard's combined filter state.

    Example:
        >>> criteria = TransactionFilter(month="2024-01", categories=frozenset({"Food"}))
        >>> visible = criteria.apply(transactions)
    """

    month: str = ALL
    categories: frozenset[str] = field(default_factory=frozenset)
    transaction_type: TransactionType | str = ALL
    drill_down: DrillDown | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "transaction_type", _normalize_type(self.transaction_type))

    def matches(self, transaction: Transaction) -> bool:
        """True when the transaction passes every filter."""
        if self.month != ALL and transaction.month_key != self.month:
            return False
        if self.categories and transaction.category not in self.categories:
            return False
        if self.transaction_type != ALL and transaction.type is not self.transaction_type:
            return False
        return self.drill_down is None or self.drill_down.matches(transaction)

    def apply(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        """Filter a collection, preserving its order."""
        return [t for t in transactions if self.matches(t)]


def available_months(transactions: Iterable[Transaction]) -> list[str]:
    """Distinct month keys present in the collection, newest first."""
    return sorted({month_key(t.date) for t in transactions}, reverse=True)


def most_recent(transactions: Iterable[Transaction], limit: int) -> list[Transaction]:
    """The ``limit`` newest transactions by date, newest first."""
    return sorted(transactions, key=lambda t: (t.date, t.id), reverse=True)[:limit]
