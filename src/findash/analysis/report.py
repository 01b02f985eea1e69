#!/usr/bin/env python3
"""
Summary Report Export

Tabular views of a FinancialSummary as pandas DataFrames, and a timestamped
JSON or CSV report file built from them. Money columns are integer cents;
formatting to dollars happens only in the JSON payload.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.json_utils import write_json
from .summary import FinancialSummary
from .trends import SpendingTrends

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("json", "csv")


def monthly_frame(summary: FinancialSummary) -> pd.DataFrame:
    """Monthly income/expense/net series, ascending by month."""
    df = pd.DataFrame(
        [
            {
                "month": m.month,
                "income_cents": m.income.to_cents(),
                "expenses_cents": m.expenses.to_cents(),
                "net_cents": m.net.to_cents(),
            }
            for m in summary.monthly_data
        ],
        columns=["month", "income_cents", "expenses_cents", "net_cents"],
    )
    return df


def category_frame(summary: FinancialSummary) -> pd.DataFrame:
    """Expense breakdown with each category's share of total expenses."""
    df = pd.DataFrame(
        [{"category": c.name, "expenses_cents": c.value.to_cents()} for c in summary.expenses_by_category],
        columns=["category", "expenses_cents"],
    )
    total = summary.total_expenses.to_cents()
    if total:
        df["share_pct"] = (df["expenses_cents"] * 100 / total).round(2)
    else:
        df["share_pct"] = 0.0
    return df


def summary_frames(summary: FinancialSummary) -> dict[str, pd.DataFrame]:
    """
    Build the report tables for a summary.

    Returns:
        Dict with "monthly" and "categories" DataFrames
    """
    return {"monthly": monthly_frame(summary), "categories": category_frame(summary)}


def export_summary(
    summary: FinancialSummary,
    output_dir: Path,
    fmt: str = "json",
    period: str = "all",
    trends: SpendingTrends | None = None,
) -> Path:
    """
    Write a summary report to output_dir.

    JSON reports hold the metadata, totals, both tables and trends (when
    given). CSV reports hold the monthly table only.

    Args:
        summary: Summary to export
        output_dir: Directory to write into (created if missing)
        fmt: "json" or "csv"
        period: Month key or "all", recorded in the file name and metadata
        trends: Optional trends for the same period

    Returns:
        Path of the written report
    """
    if fmt not in REPORT_FORMATS:
        raise ValueError(f"Unsupported report format: {fmt}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    output_file = output_dir / f"{timestamp}_{period}_summary_report.{fmt}"
    frames = summary_frames(summary)

    if fmt == "csv":
        frames["monthly"].to_csv(output_file, index=False)
    else:
        report: dict[str, Any] = {
            "metadata": {"generated_at": timestamp, "period": period},
            "summary": summary.to_dict(),
            "tables": {name: json.loads(df.to_json(orient="records")) for name, df in frames.items()},
            "trends": trends.to_dict() if trends else None,
        }
        write_json(output_file, report)

    logger.info("Wrote %s report to %s", fmt, output_file)
    return output_file
