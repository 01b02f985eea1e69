"""
Finance Dashboard - Personal Finance Analysis Core

Turns bank transaction CSV exports into the figures behind a personal
finance dashboard.

Key Features:
- CSV ingestion with a row-level data-quality report
- Income, expense, category and net-worth aggregation in integer cents
- Month-over-month spending trends
- Budget tracking with under/near/over thresholds
- Composable month, category, type and drill-down filters

Domain Packages:
- core: Money, dates, data models, configuration
- ingest: CSV parsing and validation
- analysis: summary, trends, budgets, filters, alerts and reports
- cli: Command-line interface

Example Usage:
    from findash.ingest import ingest_csv_text
    from findash.analysis import summarize

    result = ingest_csv_text(content)
    summary = summarize(result.valid_transactions)
"""

__version__ = "0.1.0"
__author__ = "Finance Dashboard Contributors"

from .analysis import analyze_trends, evaluate_budgets, summarize
from .core.config import Environment, get_config
from .core.models import Transaction, TransactionType
from .core.money import Money
from .ingest import ingest_csv_text, load_csv_file

__all__ = [
    "Environment",
    "Money",
    "Transaction",
    "TransactionType",
    "analyze_trends",
    "evaluate_budgets",
    "get_config",
    "ingest_csv_text",
    "load_csv_file",
    "summarize",
]
