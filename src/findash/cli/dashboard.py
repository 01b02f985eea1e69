#!/usr/bin/env python3
"""
Dashboard CLI - Import and Analysis Commands

Commands operate on a named workspace saved under the configured workspace
directory. ``import`` replaces the workspace's transactions; the other
commands read it.
"""

from datetime import date
from pathlib import Path

import click

from ..analysis import (
    ALL,
    BudgetLevel,
    analyze_trends,
    evaluate_budgets,
    export_summary,
    filter_by_month,
    most_recent,
    summarize,
    upcoming_items,
)
from ..core.config import Config
from ..core.dates import parse_month_key
from ..core.json_utils import format_json
from ..core.models import Budget
from ..core.money import Money
from ..ingest import CsvIngestionError, IngestionResult, load_csv_file
from ..workspace import Workspace, WorkspaceStore

LEVEL_MARKERS = {
    BudgetLevel.UNDER: "OK",
    BudgetLevel.NEAR: "NEAR",
    BudgetLevel.OVER: "OVER",
}


def _validate_month(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None or value == ALL:
        return value
    try:
        parse_month_key(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    return value


workspace_option = click.option("--workspace", "-w", help="Workspace name (default from configuration)")
month_option = click.option(
    "--month", default=ALL, show_default=True, callback=_validate_month, help="Month to show (YYYY-MM) or 'all'"
)


def _config(ctx: click.Context) -> Config:
    return ctx.obj["config"]


def _store(ctx: click.Context) -> WorkspaceStore:
    return WorkspaceStore(_config(ctx).storage.workspace_dir)


def _workspace_name(ctx: click.Context, workspace: str | None) -> str:
    return workspace or _config(ctx).storage.default_workspace


def _load_workspace(ctx: click.Context, workspace: str | None) -> tuple[str, Workspace]:
    name = _workspace_name(ctx, workspace)
    try:
        return name, _store(ctx).load(name)
    except FileNotFoundError as e:
        raise click.ClickException(f"No data in workspace '{name}'. Run 'findash import FILE' first.") from e
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def _echo_quality_report(result: IngestionResult) -> None:
    click.echo(f"Rows processed: {result.total_rows}")
    click.echo(f"  Valid transactions: {len(result.valid_transactions)}")
    click.echo(f"  Malformed rows: {len(result.malformed_rows)}")

    if result.has_issues:
        for reason, count in result.malformed_by_reason().items():
            click.echo(f"    {reason}: {count}")
        click.echo("\nRows that will be discarded:")
        for row in result.malformed_rows:
            click.echo(f"  line {row.line_number}: [{row.reason.value}] {row.raw_line}")


@click.command("import")
@click.argument("csv_file", type=click.Path(dir_okay=False, path_type=Path))
@workspace_option
@click.option("--yes", "-y", is_flag=True, help="Accept valid rows without asking when some rows are malformed")
@click.option("--abort-on-issues", is_flag=True, help="Fail instead of importing when any row is malformed")
@click.pass_context
def import_csv(ctx: click.Context, csv_file: Path, workspace: str | None, yes: bool, abort_on_issues: bool) -> None:
    """
    Import a transaction CSV into a workspace.

    The CSV needs date, description, category, amount and type columns.
    Accepting an import replaces the workspace's existing transactions.

    Examples:
      findash import statement.csv
      findash import statement.csv --workspace joint --yes
    """
    config = _config(ctx)
    name = _workspace_name(ctx, workspace)

    try:
        result = load_csv_file(csv_file, encoding=config.ingest.encoding, date_formats=config.ingest.date_formats)
    except (FileNotFoundError, CsvIngestionError) as e:
        raise click.ClickException(str(e)) from e

    _echo_quality_report(result)

    if not result.valid_transactions:
        click.echo("No transactions to import.")
        return

    if result.has_issues:
        if abort_on_issues:
            raise click.ClickException(f"{len(result.malformed_rows)} malformed rows found; import aborted")
        if not yes and not click.confirm(
            f"Import {len(result.valid_transactions)} valid transactions and discard the rest?"
        ):
            click.echo("Import cancelled.")
            return

    store = _store(ctx)
    try:
        ws = store.load_or_create(name)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    ws.accept_import(result.valid_transactions)
    path = store.save(name, ws)

    click.echo(f"\n✅ Imported {len(result.valid_transactions)} transactions into '{name}'")
    if ctx.obj.get("verbose"):
        click.echo(f"Workspace saved to: {path}")


@click.command()
@workspace_option
@month_option
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def summary(ctx: click.Context, workspace: str | None, month: str, as_json: bool) -> None:
    """Show income, expenses, net savings and category breakdown."""
    _, ws = _load_workspace(ctx, workspace)
    period = filter_by_month(ws.ledger, month)
    result = summarize(period, ws.debts, ws.assets, ws.liabilities)

    if as_json:
        click.echo(format_json(result.to_dict()))
        return

    click.echo(f"Financial Summary ({month})")
    click.echo(f"  Total Income:   {result.total_income}")
    click.echo(f"  Total Expenses: {result.total_expenses}")
    click.echo(f"  Net Savings:    {result.net_savings}")
    if ws.debts:
        click.echo(f"  Total Debt:     {result.total_debt}")
        click.echo(f"  Receivables:    {result.total_receivables}")
    if ws.assets or ws.liabilities:
        click.echo(f"  Net Worth:      {result.net_worth}")

    if result.expenses_by_category:
        click.echo("\nExpenses by Category:")
        for category in result.expenses_by_category:
            click.echo(f"  {category.name}: {category.value}")

    if month == ALL and result.monthly_data:
        click.echo("\nMonthly:")
        for totals in result.monthly_data:
            click.echo(f"  {totals.month}  income {totals.income}  expenses {totals.expenses}  net {totals.net}")

    recent = most_recent(period, _config(ctx).analysis.recent_transactions)
    if recent:
        click.echo("\nRecent Transactions:")
        for t in recent:
            click.echo(f"  {t.day.isoformat()}  {t.type.value:<7}  {t.amount}  {t.category}  {t.description}")


@click.command()
@workspace_option
@click.option("--month", required=True, callback=_validate_month, help="Month to analyze (YYYY-MM)")
@click.pass_context
def trends(ctx: click.Context, workspace: str | None, month: str) -> None:
    """Compare a month's spending with the previous month and the average."""
    _, ws = _load_workspace(ctx, workspace)
    result = analyze_trends(filter_by_month(ws.ledger, month), ws.ledger, month)

    if result is None:
        click.echo("Insufficient data for trend analysis. Select a single month with transactions.")
        return

    click.echo(f"Spending Trends ({month})")
    click.echo(f"  Expenses: {result.current_expenses}")
    click.echo(f"  vs. previous month: {result.vs_prev_month:+.1f}%")
    click.echo(f"  vs. monthly average: {result.vs_average:+.1f}%")

    growth = result.top_growing_category
    if growth.is_new:
        click.echo(f"  Top growing category: {growth.name} (new)")
    elif growth.name == "N/A":
        click.echo("  Top growing category: N/A")
    else:
        click.echo(f"  Top growing category: {growth.name} ({growth.growth:+.1f}%)")

    day = result.largest_spending_day
    if day.day is not None:
        click.echo(f"  Largest spending day: {day.day.isoformat()} ({day.amount})")


@click.command()
@workspace_option
@month_option
@click.pass_context
def budgets(ctx: click.Context, workspace: str | None, month: str) -> None:
    """Show spending against each budget."""
    _, ws = _load_workspace(ctx, workspace)
    if not ws.budgets:
        click.echo("No budgets set. Use 'findash budget-set CATEGORY AMOUNT'.")
        return

    click.echo(f"Budgets ({month})")
    for status in evaluate_budgets(filter_by_month(ws.ledger, month), ws.budgets):
        click.echo(
            f"  [{LEVEL_MARKERS[status.level]:<4}] {status.category}: "
            f"{status.spent} of {status.budget} ({status.percentage:.1f}%), remaining {status.remaining}"
        )


@click.command("budget-set")
@click.argument("category")
@click.argument("amount")
@workspace_option
@click.pass_context
def budget_set(ctx: click.Context, category: str, amount: str, workspace: str | None) -> None:
    """
    Create or replace the budget for a category.

    Examples:
      findash budget-set Food 400
      findash budget-set "Eating Out" 125.50
    """
    try:
        budget_amount = Money.from_dollars(amount)
    except ValueError as e:
        raise click.BadParameter(f"Invalid amount: {amount}", param_hint="AMOUNT") from e
    if budget_amount.cents <= 0:
        raise click.BadParameter("Budget amount must be positive", param_hint="AMOUNT")

    name = _workspace_name(ctx, workspace)
    store = _store(ctx)
    try:
        ws = store.load_or_create(name)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    budget = Budget(category=category, amount=budget_amount)
    if ws.add_budget(budget):
        click.echo(f"Added budget {category}: {budget_amount}")
    else:
        ws.update_budget(budget)
        click.echo(f"Updated budget {category}: {budget_amount}")
    store.save(name, ws)


@click.command()
@workspace_option
@click.option("--days", type=int, help="Look-ahead window in days (default from configuration)")
@click.option("--today", "today_str", help="Reference date (YYYY-MM-DD), defaults to today")
@click.pass_context
def alerts(ctx: click.Context, workspace: str | None, days: int | None, today_str: str | None) -> None:
    """List unpaid bills and reminders due soon."""
    _, ws = _load_workspace(ctx, workspace)
    window = days if days is not None else _config(ctx).analysis.alert_window_days

    try:
        today = date.fromisoformat(today_str) if today_str else date.today()
        items = upcoming_items(ws.bills, ws.reminders, today, window)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if not items:
        click.echo(f"Nothing due in the next {window} days.")
        return

    click.echo(f"Due in the next {window} days:")
    for item in items:
        amount = f" {item.amount}" if item.amount is not None else ""
        click.echo(f"  {item.due.isoformat()}  {item.kind.value:<8}  {item.title}{amount}")


@click.command()
@workspace_option
@month_option
@click.option(
    "--format", "fmt", type=click.Choice(["json", "csv"]), default="json", help="Output format (default: json)"
)
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Override output directory")
@click.pass_context
def report(ctx: click.Context, workspace: str | None, month: str, fmt: str, output_dir: Path | None) -> None:
    """
    Export a summary report.

    Examples:
      findash report
      findash report --month 2024-03 --format csv
    """
    _, ws = _load_workspace(ctx, workspace)
    period = filter_by_month(ws.ledger, month)
    result = summarize(period, ws.debts, ws.assets, ws.liabilities)
    trend = analyze_trends(period, ws.ledger, month)

    output_path = output_dir or _config(ctx).output_dir
    try:
        output_file = export_summary(result, output_path, fmt=fmt, period=month, trends=trend)
    except (OSError, ValueError) as e:
        click.echo(f"❌ Error generating report: {e}", err=True)
        raise click.ClickException(str(e)) from e

    click.echo(f"✅ Report saved to: {output_file}")
