#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

Currency handling for the finance dashboard.
All financial calculations use integer cents to avoid floating-point errors.

Currency Systems:
- CSV input carries plain decimal numbers: "12.34", "-50", "1e2"
- Internal calculations use cents: 100 cents = $1.00
- Display uses dollar strings: "$12.34"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Parse with Decimal, round once to the cent, then stay in integers
- Percentages are derived from integer cents with a single division
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def decimal_to_cents(amount: Decimal) -> int:
    """
    Round a Decimal dollar amount to integer cents.

    Args:
        amount: Finite Decimal dollar amount

    Returns:
        Amount in cents, rounded half up

    Example:
        decimal_to_cents(Decimal("12.345")) -> 1235
    """
    return int((amount.quantize(CENT, rounding=ROUND_HALF_UP) * 100).to_integral_value())


def parse_decimal_to_cents(text: str) -> int:
    """
    Strictly parse a plain decimal number into integer cents.

    Unlike a lenient currency parser, this rejects anything that is not a
    complete decimal literal, so that malformed CSV amounts can be reported.

    Args:
        text: Decimal literal such as "12.34", " -50 " or "5"

    Returns:
        Signed amount in cents

    Raises:
        ValueError: If the text is empty, not numeric, NaN or infinite

    Examples:
        parse_decimal_to_cents("12.34") -> 1234
        parse_decimal_to_cents("-50") -> -5000
        parse_decimal_to_cents("abc") -> ValueError
    """
    clean = text.strip()
    if not clean:
        raise ValueError("amount is empty")
    if "_" in clean:
        # Decimal() accepts digit separators; CSV amounts must be plain literals
        raise ValueError(f"amount is not a decimal number: {text!r}")

    try:
        amount = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"amount is not a decimal number: {text!r}") from e

    if not amount.is_finite():
        raise ValueError(f"amount is not a finite number: {text!r}")

    try:
        return decimal_to_cents(amount)
    except InvalidOperation as e:
        raise ValueError(f"amount is out of range: {text!r}") from e


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted dollar string

    Example:
        cents_to_dollars_str(4599) -> "45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def cents_to_decimal(cents: int) -> Decimal:
    """Convert integer cents to an exact two-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def format_cents(cents: int) -> str:
    """Format cents as dollar string with $ prefix."""
    return f"${cents_to_dollars_str(cents)}"


def percentage(numerator: int, denominator: int) -> float:
    """
    Express numerator as a percentage of denominator.

    Both operands are integers (usually cents), so the only rounding happens
    in the final division and identical inputs always give identical output.

    Returns:
        numerator / denominator * 100, or 0.0 when denominator is zero
    """
    if denominator == 0:
        return 0.0
    return numerator * 100 / denominator


def percent_change(current: int, baseline: int) -> float:
    """
    Percentage change from baseline to current.

    Returns:
        (current - baseline) / baseline * 100, or 0.0 without a baseline
    """
    if baseline == 0:
        return 0.0
    return (current - baseline) * 100 / baseline
