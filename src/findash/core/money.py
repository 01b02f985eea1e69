#!/usr/bin/env python3
"""
Money

Dollar amounts as whole cents. Every total on the dashboard is a sum of
Money values, so repeated aggregation of the same ledger gives identical
results.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    cents_to_decimal,
    cents_to_dollars_str,
    decimal_to_cents,
    parse_decimal_to_cents,
)


@dataclass(frozen=True, order=True)
class Money:
    """
    A dollar amount held as integer cents.

    Transaction amounts are stored non-negative, with direction carried by the
    transaction type. Differences such as net savings may still be negative.

    Examples:
        >>> income = Money.from_cents(1234)
        >>> str(income)
        '$12.34'

        >>> expense = Money.from_dollars("-45.99")
        >>> expense.abs()
        Money(cents=4599)

        >>> str(income - expense.abs())
        '$-33.65'
    """

    cents: int

    @classmethod
    def zero(cls) -> "Money":
        """Zero dollars."""
        return cls(cents=0)

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_dollars(cls, dollars: str | int) -> "Money":
        """
        Parse from a decimal dollar string like '123.45' or integer dollars.

        Raises:
            ValueError: If the string is not a finite decimal number
        """
        if isinstance(dollars, int):
            return cls(cents=dollars * 100)
        return cls(cents=parse_decimal_to_cents(dollars.replace("$", "")))

    @classmethod
    def from_decimal(cls, amount: Decimal) -> "Money":
        """Create Money from a Decimal dollar amount, rounding to the cent."""
        return cls(cents=decimal_to_cents(amount))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value as an exact two-place Decimal."""
        return cents_to_decimal(self.cents)

    def to_float(self) -> float:
        """Get value as float dollars. For presentation only."""
        return self.cents / 100

    def to_dollars(self) -> str:
        """Get formatted dollar string."""
        return str(self)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def is_zero(self) -> bool:
        """True when the value is exactly zero."""
        return self.cents == 0

    def __add__(self, other: "Money") -> "Money":
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        return Money(cents=self.cents * scalar)

    def __str__(self) -> str:
        """Format as dollar string."""
        return f"${cents_to_dollars_str(self.cents)}"

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"


def sum_money(amounts) -> Money:
    """Sum an iterable of Money values, starting from zero."""
    total = 0
    for amount in amounts:
        total += amount.cents
    return Money(cents=total)
