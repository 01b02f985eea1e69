#!/usr/bin/env python3
"""
Upcoming Bill and Reminder Alerts

Items due within a window starting today, for the dashboard's alert panel.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from ..core.models import Bill, Reminder
from ..core.money import Money


class AlertKind(Enum):
    BILL = "bill"
    REMINDER = "reminder"


@dataclass(frozen=True)
class UpcomingItem:
    kind: AlertKind
    title: str
    due: date
    amount: Money | None = None

    def days_until(self, today: date) -> int:
        return (self.due - today).days


def upcoming_items(
    bills: Iterable[Bill],
    reminders: Iterable[Reminder],
    today: date,
    window_days: int = 7,
) -> list[UpcomingItem]:
    """
    Unpaid bills and reminders due between today and today + window_days.

    Both ends of the window are inclusive. Overdue items are not included.

    Returns:
        Items sorted by due date, bills before reminders on the same day
    """
    if window_days < 0:
        raise ValueError(f"window_days must be non-negative, got {window_days}")

    horizon = today + timedelta(days=window_days)
    items = [
        UpcomingItem(kind=AlertKind.BILL, title=bill.name, due=bill.due_date, amount=bill.amount)
        for bill in bills
        if not bill.is_paid and today <= bill.due_date <= horizon
    ]
    items.extend(
        UpcomingItem(kind=AlertKind.REMINDER, title=reminder.title, due=reminder.date)
        for reminder in reminders
        if today <= reminder.date <= horizon
    )
    # stable sort keeps input order within a day
    items.sort(key=lambda item: (item.due, item.kind is AlertKind.REMINDER))
    return items
