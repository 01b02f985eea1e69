#!/usr/bin/env python3
"""
Transaction Categorization

Seam for an external categorization collaborator (an AI service in the
dashboard). The collaborator itself is an opaque callable; this module owns
what is sent to it and how its answer is validated and applied.

Only uncategorized expenses are sent. A suggestion is applied only when its
category is one of the allowed categories; anything else leaves the
transaction uncategorized for manual review. Collaborator failures never
block an import.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from .core.models import UNCATEGORIZED, Confidence, Transaction

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CategorizationRequest:
    """What the collaborator sees of a transaction."""

    id: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "description": self.description}


@dataclass(frozen=True)
class Suggestion:
    category: str
    confidence: Confidence


class Categorizer(Protocol):
    """
    Protocol for the categorization collaborator.

    Receives the transactions to categorize and the allowed category names,
    and returns either decoded JSON or JSON text mapping transaction id to
    ``{"category": str, "confidence": "high" | "medium" | "low"}``.
    May raise any exception; callers recover.
    """

    def __call__(self, requests: list[CategorizationRequest], categories: list[str]) -> Any: ...


class CategorizationErrorKind(Enum):
    MALFORMED_RESPONSE = "malformed_response"
    COLLABORATOR_FAILED = "collaborator_failed"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: CategorizationErrorKind
    detail: str = ""


CategorizationOutcome = Ok[dict[str, Suggestion]] | Err


@dataclass
class CategorizationReview:
    """
    Staged import awaiting user review.

    ``categorized`` needs no review; ``to_review`` holds the uncategorized
    expenses with any accepted suggestion already applied.
    """

    categorized: list[Transaction] = field(default_factory=list)
    to_review: list[Transaction] = field(default_factory=list)

    @property
    def all_transactions(self) -> list[Transaction]:
        return self.categorized + self.to_review

    @property
    def low_confidence(self) -> list[Transaction]:
        return [t for t in self.to_review if t.confidence is Confidence.LOW]


def _parse_entry(entry: Any) -> Suggestion | None:
    if not isinstance(entry, Mapping):
        return None
    category = entry.get("category")
    confidence = entry.get("confidence")
    if not isinstance(category, str) or not isinstance(confidence, str):
        return None
    try:
        return Suggestion(category=category, confidence=Confidence(confidence.strip().lower()))
    except ValueError:
        return None


def parse_suggestions(raw: Any, allowed_categories: Iterable[str]) -> CategorizationOutcome:
    """
    Validate a collaborator response field by field.

    Args:
        raw: Decoded JSON, or JSON text
        allowed_categories: Category names a suggestion may use

    Returns:
        Ok with the valid suggestions by transaction id (invalid entries and
        unknown categories dropped), or Err(MALFORMED_RESPONSE) when the
        payload is not a JSON object
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            return Err(CategorizationErrorKind.MALFORMED_RESPONSE, str(e))

    if not isinstance(raw, Mapping):
        return Err(CategorizationErrorKind.MALFORMED_RESPONSE, f"expected object, got {type(raw).__name__}")

    allowed = set(allowed_categories)
    suggestions: dict[str, Suggestion] = {}
    for transaction_id, entry in raw.items():
        suggestion = _parse_entry(entry)
        if suggestion is None:
            logger.debug("Dropping malformed suggestion for %s: %r", transaction_id, entry)
            continue
        if suggestion.category not in allowed:
            logger.debug("Dropping suggestion outside allowed categories: %s", suggestion.category)
            continue
        suggestions[str(transaction_id)] = suggestion

    return Ok(suggestions)


def needs_categorization(transaction: Transaction) -> bool:
    return transaction.is_expense and transaction.category == UNCATEGORIZED


def request_suggestions(
    transactions: list[Transaction], categorizer: Categorizer, categories: list[str]
) -> CategorizationOutcome:
    """Call the collaborator and validate its answer; exceptions become Err."""
    requests = [CategorizationRequest(id=t.id, description=t.description) for t in transactions]
    # the collaborator is told about real categories only
    offered = [c for c in categories if c != UNCATEGORIZED]
    try:
        raw = categorizer(requests, offered)
    except Exception as e:
        return Err(CategorizationErrorKind.COLLABORATOR_FAILED, str(e))
    return parse_suggestions(raw, offered)


def categorize_transactions(
    transactions: Iterable[Transaction], categorizer: Categorizer, categories: list[str]
) -> CategorizationReview:
    """
    Stage an accepted import for review, asking the collaborator for help.

    Args:
        transactions: Valid transactions from ingestion
        categorizer: External categorization collaborator
        categories: Allowed category names

    Returns:
        CategorizationReview; on collaborator failure every uncategorized
        expense is returned unchanged in ``to_review``
    """
    review = CategorizationReview()
    pending: list[Transaction] = []
    for transaction in transactions:
        if needs_categorization(transaction):
            pending.append(transaction)
        else:
            review.categorized.append(transaction)

    if not pending:
        return review

    outcome = request_suggestions(pending, categorizer, categories)
    if isinstance(outcome, Err):
        logger.warning(
            "Categorization failed (%s), leaving %d transactions uncategorized: %s",
            outcome.error.value,
            len(pending),
            outcome.detail,
        )
        review.to_review.extend(pending)
        return review

    applied = 0
    for transaction in pending:
        suggestion = outcome.value.get(transaction.id)
        if suggestion is None:
            review.to_review.append(transaction)
        else:
            applied += 1
            review.to_review.append(
                replace(transaction, category=suggestion.category, confidence=suggestion.confidence)
            )

    logger.info("Categorization suggested %d of %d categories", applied, len(pending))
    return review
