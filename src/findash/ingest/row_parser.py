#!/usr/bin/env python3
"""
CSV Row Parser

Turns one comma-split CSV line into a Transaction, or rejects it with exactly
one MalformedReason. Rules are checked in a fixed order and the first failing
rule wins:

1. date         -> InvalidDate
2. amount       -> InvalidAmount
3. type         -> InvalidType
4. description  -> MissingDescription

Lines are split on every comma. Quoted fields are not supported, so a comma
inside a field shifts the remaining columns; malformed-row reasons are defined
against this simple split.
"""

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..core.currency import parse_decimal_to_cents
from ..core.dates import DEFAULT_DATE_FORMATS, parse_transaction_date
from ..core.models import UNCATEGORIZED, MalformedReason, Transaction, TransactionType
from ..core.money import Money

IdFactory = Callable[[int], str]


class MalformedRowError(ValueError):
    """Raised when a CSV row fails validation."""

    def __init__(self, reason: MalformedReason, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = reason.value if not detail else f"{reason.value}: {detail}"
        super().__init__(message)


@dataclass(frozen=True)
class ColumnIndices:
    """Resolved positions of the five logical columns in a CSV header."""

    date: int
    description: int
    category: int
    amount: int
    type: int


def split_line(line: str) -> list[str]:
    """Split a CSV line on commas without any quote handling."""
    return line.split(",")


def batch_id_factory(timestamp_ms: int | None = None) -> IdFactory:
    """
    Build an id factory bound to one ingestion timestamp.

    Ids take the form ``"<millis>-<row_index>"`` and are unique within the batch.
    """
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000

    def make_id(row_index: int) -> str:
        return f"{timestamp_ms}-{row_index}"

    return make_id


def _field(values: Sequence[str], index: int) -> str:
    # Short rows read as empty fields
    if index < len(values):
        return values[index]
    return ""


def parse_row(
    values: Sequence[str],
    columns: ColumnIndices,
    transaction_id: str,
    date_formats: tuple[str, ...] = DEFAULT_DATE_FORMATS,
) -> Transaction:
    """
    Validate one CSV row and build a Transaction from it.

    Args:
        values: Raw field values of the row, in file order
        columns: Resolved column positions
        transaction_id: Id to assign to the transaction
        date_formats: Fallback date formats after ISO-8601

    Returns:
        Transaction with a non-negative amount

    Raises:
        MalformedRowError: With the first failing reason
    """
    raw_date = _field(values, columns.date)
    try:
        when = parse_transaction_date(raw_date, date_formats)
    except ValueError as e:
        raise MalformedRowError(MalformedReason.INVALID_DATE, str(e)) from e

    raw_amount = _field(values, columns.amount)
    try:
        amount = Money.from_cents(parse_decimal_to_cents(raw_amount))
    except ValueError as e:
        raise MalformedRowError(MalformedReason.INVALID_AMOUNT, str(e)) from e

    raw_type = _field(values, columns.type).strip().lower()
    try:
        transaction_type = TransactionType(raw_type)
    except ValueError as e:
        raise MalformedRowError(
            MalformedReason.INVALID_TYPE, f"expected 'income' or 'expense', got {raw_type!r}"
        ) from e

    description = _field(values, columns.description).strip()
    if not description:
        raise MalformedRowError(MalformedReason.MISSING_DESCRIPTION)

    category = _field(values, columns.category).strip() or UNCATEGORIZED

    return Transaction(
        id=transaction_id,
        date=when,
        description=description,
        category=category,
        amount=amount.abs(),
        type=transaction_type,
    )
