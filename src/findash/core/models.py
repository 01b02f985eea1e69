#!/usr/bin/env python3
"""
Core Data Models for the Finance Dashboard

Common data structures shared by ingestion, analysis and the workspace.
Every model round-trips through ``to_dict``/``from_dict`` so an external
store can serialize it; dates travel as ISO strings.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from .dates import month_key
from .money import Money

UNCATEGORIZED = "Uncategorized"
INCOME_CATEGORY = "Income"
SAVINGS_GOAL_CATEGORY = "Savings Goal"

DEFAULT_CATEGORIES = [
    "Food",
    "Transport",
    "Shopping",
    "Utilities",
    "Entertainment",
    "Health",
    UNCATEGORIZED,
]


class TransactionType(Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class Confidence(Enum):
    """Confidence attached by the categorization collaborator."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MalformedReason(Enum):
    """Why a CSV row was rejected. One reason per row."""

    INVALID_DATE = "InvalidDate"
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_TYPE = "InvalidType"
    MISSING_DESCRIPTION = "MissingDescription"


class DebtType(Enum):
    """Who owes whom."""

    OWED = "owed"  # owed by me
    IOU = "iou"  # owed to me


class AssetType(Enum):
    CASH = "Cash"
    INVESTMENT = "Investment"
    PROPERTY = "Property"
    OTHER = "Other"


class LiabilityType(Enum):
    LOAN = "Loan"
    CREDIT_CARD = "Credit Card"
    MORTGAGE = "Mortgage"
    OTHER = "Other"


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    return date.fromisoformat(value[:10])


def _format_date(value: date | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class Transaction:
    """
    A single dated money movement.

    The amount is always non-negative; direction is carried by ``type``.
    Negative amounts passed to the constructor are normalized with ``abs``.
    Any field except ``id`` may be edited after acceptance.
    """

    id: str
    date: datetime
    description: str
    category: str
    amount: Money
    type: TransactionType
    confidence: Confidence | None = None

    def __post_init__(self) -> None:
        if self.amount.cents < 0:
            self.amount = self.amount.abs()

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def month_key(self) -> str:
        """Canonical YYYY-MM key of the transaction date."""
        return month_key(self.date)

    @property
    def day(self) -> date:
        """Calendar day of the transaction, time-of-day dropped."""
        return self.date.date()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "description": self.description,
            "category": self.category,
            "amount": self.amount.to_cents(),
            "type": self.type.value,
            "confidence": self.confidence.value if self.confidence else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """Re-hydrate a transaction serialized by ``to_dict``."""
        confidence = data.get("confidence")
        return cls(
            id=data["id"],
            date=datetime.fromisoformat(data["date"]),
            description=data["description"],
            category=data["category"],
            amount=Money.from_cents(int(data["amount"])),
            type=TransactionType(data["type"]),
            confidence=Confidence(confidence) if confidence else None,
        )


@dataclass(frozen=True)
class MalformedRow:
    """
    A rejected CSV line, kept for interactive review and then discarded.

    ``line_number`` is the 1-based line in the source file.
    """

    row: tuple[str, ...]
    reason: MalformedReason
    line_number: int | None = None

    @property
    def raw_line(self) -> str:
        """The row re-joined the way it appeared in the file."""
        return ",".join(self.row)


@dataclass
class Debt:
    """A debt owed by the user (``owed``) or to the user (``iou``)."""

    id: str
    description: str
    amount: Money
    type: DebtType
    due_date: date | None = None
    is_settled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount.to_cents(),
            "type": self.type.value,
            "due_date": _format_date(self.due_date),
            "is_settled": self.is_settled,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Debt":
        return cls(
            id=data["id"],
            description=data["description"],
            amount=Money.from_cents(int(data["amount"])),
            type=DebtType(data["type"]),
            due_date=_parse_date(data.get("due_date")),
            is_settled=data.get("is_settled", False),
        )


@dataclass
class Asset:
    id: str
    name: str
    type: AssetType
    value: Money

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.type.value, "value": self.value.to_cents()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Asset":
        return cls(
            id=data["id"],
            name=data["name"],
            type=AssetType(data["type"]),
            value=Money.from_cents(int(data["value"])),
        )


@dataclass
class Liability:
    id: str
    name: str
    type: LiabilityType
    value: Money

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.type.value, "value": self.value.to_cents()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Liability":
        return cls(
            id=data["id"],
            name=data["name"],
            type=LiabilityType(data["type"]),
            value=Money.from_cents(int(data["value"])),
        )


@dataclass
class Budget:
    """
    Spending target for one category.

    The category is the key: at most one budget exists per category.
    """

    category: str
    amount: Money

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "amount": self.amount.to_cents()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Budget":
        return cls(category=data["category"], amount=Money.from_cents(int(data["amount"])))


@dataclass
class Goal:
    """A savings goal funded by contributions."""

    id: str
    name: str
    target_amount: Money
    saved_amount: Money = field(default_factory=Money.zero)
    deadline: date | None = None

    @property
    def progress_percentage(self) -> float:
        """Saved amount as a percentage of the target, capped at 100."""
        if self.target_amount.cents <= 0:
            return 0.0
        return min(self.saved_amount.cents * 100 / self.target_amount.cents, 100.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "target_amount": self.target_amount.to_cents(),
            "saved_amount": self.saved_amount.to_cents(),
            "deadline": _format_date(self.deadline),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Goal":
        return cls(
            id=data["id"],
            name=data["name"],
            target_amount=Money.from_cents(int(data["target_amount"])),
            saved_amount=Money.from_cents(int(data.get("saved_amount", 0))),
            deadline=_parse_date(data.get("deadline")),
        )


@dataclass
class Bill:
    id: str
    name: str
    amount: Money
    due_date: date
    is_paid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount.to_cents(),
            "due_date": self.due_date.isoformat(),
            "is_paid": self.is_paid,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bill":
        return cls(
            id=data["id"],
            name=data["name"],
            amount=Money.from_cents(int(data["amount"])),
            due_date=date.fromisoformat(data["due_date"][:10]),
            is_paid=data.get("is_paid", False),
        )


@dataclass
class Reminder:
    id: str
    title: str
    date: date

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "date": self.date.isoformat()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Reminder":
        return cls(id=data["id"], title=data["title"], date=date.fromisoformat(data["date"][:10]))

