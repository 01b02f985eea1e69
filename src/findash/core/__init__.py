"""
Core Utilities Package

Shared primitives and data models used across ingestion and analysis.

This package provides:
- Currency handling with integer cents for precision
- Canonical YYYY-MM month keys and CSV date parsing
- Domain models for transactions, debts, assets, budgets and goals
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    get_output_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import (
    cents_to_dollars_str,
    format_cents,
    parse_decimal_to_cents,
    percent_change,
    percentage,
)
from .dates import month_key, parse_month_key, parse_transaction_date, previous_month_key
from .models import (
    DEFAULT_CATEGORIES,
    INCOME_CATEGORY,
    SAVINGS_GOAL_CATEGORY,
    UNCATEGORIZED,
    Asset,
    AssetType,
    Bill,
    Budget,
    Confidence,
    Debt,
    DebtType,
    Goal,
    Liability,
    LiabilityType,
    MalformedReason,
    MalformedRow,
    Reminder,
    Transaction,
    TransactionType,
)
from .money import Money, sum_money

__all__ = [
    "DEFAULT_CATEGORIES",
    "INCOME_CATEGORY",
    "SAVINGS_GOAL_CATEGORY",
    "UNCATEGORIZED",
    "Asset",
    "AssetType",
    "Bill",
    "Budget",
    "Confidence",
    "Config",
    "Debt",
    "DebtType",
    "Environment",
    "Goal",
    "Liability",
    "LiabilityType",
    "MalformedReason",
    "MalformedRow",
    "Money",
    "Reminder",
    "Transaction",
    "TransactionType",
    "cents_to_dollars_str",
    "format_cents",
    "get_config",
    "get_data_dir",
    "get_output_dir",
    "is_development",
    "is_production",
    "is_test",
    "month_key",
    "parse_decimal_to_cents",
    "parse_month_key",
    "parse_transaction_date",
    "percent_change",
    "percentage",
    "previous_month_key",
    "reload_config",
    "sum_money",
]
