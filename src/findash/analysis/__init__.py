"""
Financial Analysis Package

Pure engines that turn a transaction collection into dashboard figures.

Key Components:
- summary: totals, category breakdown, monthly series and net worth
- trends: month-over-month spending trends
- budgets: spent-versus-budget with under/near/over levels
- filters: month, category, type and drill-down predicates
- alerts: bills and reminders due soon
- report: pandas tables and JSON/CSV report export
"""

from .alerts import AlertKind, UpcomingItem, upcoming_items
from .budgets import BudgetLevel, BudgetStatus, classify_percentage, evaluate_budgets
from .filters import (
    ALL,
    DrillDown,
    DrillDownDimension,
    TransactionFilter,
    available_months,
    filter_by_categories,
    filter_by_drill_down,
    filter_by_month,
    filter_by_type,
    most_recent,
)
from .report import export_summary, summary_frames
from .summary import CategoryTotal, FinancialSummary, MonthlyTotals, summarize
from .trends import CategoryGrowth, SpendingDay, SpendingTrends, analyze_trends

__all__ = [
    "ALL",
    "AlertKind",
    "BudgetLevel",
    "BudgetStatus",
    "CategoryGrowth",
    "CategoryTotal",
    "DrillDown",
    "DrillDownDimension",
    "FinancialSummary",
    "MonthlyTotals",
    "SpendingDay",
    "SpendingTrends",
    "TransactionFilter",
    "UpcomingItem",
    "analyze_trends",
    "available_months",
    "classify_percentage",
    "evaluate_budgets",
    "export_summary",
    "filter_by_categories",
    "filter_by_drill_down",
    "filter_by_month",
    "filter_by_type",
    "most_recent",
    "summarize",
    "summary_frames",
    "upcoming_items",
]
