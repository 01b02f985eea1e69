#!/usr/bin/env python3
"""
Month Keys and Transaction Dates

Date parsing for CSV rows plus the canonical ``YYYY-MM`` month key used for
grouping, filtering and sorting. Month keys are zero-padded, so lexicographic
order is chronological order.
"""

import re
from datetime import date, datetime

MONTH_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

# Tried in order after ISO-8601 parsing fails.
DEFAULT_DATE_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d-%b-%Y",
    "%b %d %Y",
)


def month_key(value: date | datetime) -> str:
    """
    Derive the canonical month key from a calendar date.

    Example:
        month_key(date(2024, 3, 9)) -> "2024-03"
    """
    return f"{value.year:04d}-{value.month:02d}"


def parse_month_key(key: str) -> tuple[int, int]:
    """
    Validate a month key and split it into (year, month).

    Raises:
        ValueError: If the key is not a valid YYYY-MM month
    """
    match = MONTH_KEY_PATTERN.match(key)
    if not match:
        raise ValueError(f"Invalid month key (expected YYYY-MM): {key!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in month key: {key!r}")
    return year, month


def previous_month_key(key: str) -> str:
    """
    Month key of the calendar month before ``key``.

    Example:
        previous_month_key("2024-01") -> "2023-12"
    """
    year, month = parse_month_key(key)
    if month == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{month - 1:02d}"


def parse_transaction_date(text: str, formats: tuple[str, ...] = DEFAULT_DATE_FORMATS) -> datetime:
    """
    Parse a CSV date field into a naive local datetime.

    ISO dates and datetimes are tried first, so time-of-day survives when
    present. Timezone-aware values are converted to local time and made naive.

    Args:
        text: Raw date field
        formats: Fallback strptime formats

    Returns:
        Naive datetime

    Raises:
        ValueError: If the field is empty or no format yields a real date
    """
    clean = text.strip()
    if not clean:
        raise ValueError("date is empty")

    try:
        parsed = datetime.fromisoformat(clean)
    except ValueError:
        parsed = None

    if parsed is None:
        for fmt in formats:
            try:
                parsed = datetime.strptime(clean, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        raise ValueError(f"unrecognized date: {text!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
