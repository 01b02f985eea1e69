#!/usr/bin/env python3
"""
Integration tests for the dashboard CLI commands

Runs the import-then-analyze workflow against a workspace in the per-test
data directory.
"""

import pytest
from click.testing import CliRunner

from findash.cli.main import main
from findash.core.config import get_config
from findash.core.json_utils import read_json
from findash.workspace import WorkspaceStore

MIXED_CSV = """date,description,category,amount,type
2024-01-05,Paycheck,Income,3000.00,income
2024-01-06,Grocery Store,Food,82.50,expense
2024-01-07,Broken Row,Food,abc,expense
"""


def saved_workspace(name: str = "default"):
    return WorkspaceStore(get_config().storage.workspace_dir).load(name)


@pytest.mark.integration
class TestImportCommand:
    """Test importing CSV files."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_clean_import(self, sample_csv_file):
        """Test a clean file is imported without prompting."""
        result = self.runner.invoke(main, ["import", str(sample_csv_file)])

        assert result.exit_code == 0, result.output
        assert "Valid transactions: 8" in result.output
        assert "Malformed rows: 0" in result.output
        assert len(saved_workspace().ledger) == 8

    def test_import_with_issues_confirmed(self, tmp_path):
        """Test malformed rows are listed and the user can accept the rest."""
        csv_file = tmp_path / "mixed.csv"
        csv_file.write_text(MIXED_CSV, encoding="utf-8")

        result = self.runner.invoke(main, ["import", str(csv_file)], input="y\n")

        assert result.exit_code == 0, result.output
        assert "InvalidAmount: 1" in result.output
        assert "line 4" in result.output
        assert len(saved_workspace().ledger) == 2

    def test_import_with_issues_declined(self, tmp_path):
        """Test declining the prompt saves nothing."""
        csv_file = tmp_path / "mixed.csv"
        csv_file.write_text(MIXED_CSV, encoding="utf-8")

        result = self.runner.invoke(main, ["import", str(csv_file)], input="n\n")

        assert result.exit_code == 0
        assert "Import cancelled." in result.output
        assert not WorkspaceStore(get_config().storage.workspace_dir).exists("default")

    def test_import_abort_on_issues(self, tmp_path):
        """Test --abort-on-issues fails the command."""
        csv_file = tmp_path / "mixed.csv"
        csv_file.write_text(MIXED_CSV, encoding="utf-8")

        result = self.runner.invoke(main, ["import", str(csv_file), "--abort-on-issues"])

        assert result.exit_code != 0
        assert "import aborted" in result.output

    def test_import_missing_columns(self, tmp_path):
        """Test a header error is reported to the user."""
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("date,description,category,type\n2024-01-01,Coffee,Food,expense\n", encoding="utf-8")

        result = self.runner.invoke(main, ["import", str(csv_file)])

        assert result.exit_code != 0
        assert "Missing: amount" in result.output

    def test_import_missing_file(self, tmp_path):
        """Test a missing file is reported."""
        result = self.runner.invoke(main, ["import", str(tmp_path / "nope.csv")])

        assert result.exit_code != 0
        assert "not found" in result.output

    def test_import_into_named_workspace(self, sample_csv_file):
        """Test --workspace selects the target workspace."""
        result = self.runner.invoke(main, ["import", str(sample_csv_file), "--workspace", "joint"])

        assert result.exit_code == 0
        assert len(saved_workspace("joint").ledger) == 8


@pytest.mark.integration
class TestAnalysisCommands:
    """Test summary, trends, budgets, alerts and report."""

    @pytest.fixture(autouse=True)
    def imported(self, sample_csv_file):
        self.runner = CliRunner()
        result = self.runner.invoke(main, ["import", str(sample_csv_file)])
        assert result.exit_code == 0, result.output

    def test_summary_all(self):
        """Test the overall summary."""
        result = self.runner.invoke(main, ["summary"])

        assert result.exit_code == 0, result.output
        assert "Total Income:   $6000.00" in result.output
        assert "Total Expenses: $532.75" in result.output
        assert "Food: $337.75" in result.output
        assert "2024-02" in result.output
        assert "Recent Transactions:" in result.output

    def test_summary_month_json(self):
        """Test a single-month summary as JSON."""
        result = self.runner.invoke(main, ["summary", "--month", "2024-01", "--json"])

        assert result.exit_code == 0, result.output
        assert '"total_expenses": "187.50"' in result.output

    def test_summary_invalid_month(self):
        """Test an invalid month is rejected by option validation."""
        result = self.runner.invoke(main, ["summary", "--month", "2024-13"])

        assert result.exit_code != 0
        assert "Invalid" in result.output

    def test_trends(self):
        """Test month-over-month trends."""
        result = self.runner.invoke(main, ["trends", "--month", "2024-02"])

        assert result.exit_code == 0, result.output
        assert "vs. previous month: +84.1%" in result.output
        assert "Top growing category: Entertainment (new)" in result.output
        assert "Largest spending day: 2024-02-14 ($225.25)" in result.output

    def test_trends_insufficient_data(self):
        """Test a month without data."""
        result = self.runner.invoke(main, ["trends", "--month", "2023-06"])

        assert result.exit_code == 0
        assert "Insufficient data" in result.output

    def test_budgets_workflow(self):
        """Test setting and evaluating budgets."""
        result = self.runner.invoke(main, ["budgets"])
        assert "No budgets set" in result.output

        result = self.runner.invoke(main, ["budget-set", "Food", "200"])
        assert result.exit_code == 0, result.output
        assert "Added budget Food: $200.00" in result.output

        result = self.runner.invoke(main, ["budget-set", "Food", "210"])
        assert "Updated budget Food: $210.00" in result.output

        result = self.runner.invoke(main, ["budgets", "--month", "2024-02"])
        assert result.exit_code == 0, result.output
        assert "[NEAR] Food: $195.25 of $210.00" in result.output

    def test_budget_set_invalid_amount(self):
        """Test a non-numeric budget amount."""
        result = self.runner.invoke(main, ["budget-set", "Food", "lots"])

        assert result.exit_code != 0
        assert "Invalid amount" in result.output

    @pytest.mark.parametrize("amount", ["0", "0.00", "0.004"])
    def test_budget_set_rejects_zero(self, amount):
        """Test a budget must be a positive amount."""
        result = self.runner.invoke(main, ["budget-set", "Food", amount])

        assert result.exit_code != 0
        assert "must be positive" in result.output
        assert saved_workspace().budgets == []

    def test_alerts_empty(self):
        """Test alerts with no bills or reminders."""
        result = self.runner.invoke(main, ["alerts", "--today", "2024-02-01"])

        assert result.exit_code == 0, result.output
        assert "Nothing due in the next 7 days." in result.output

    def test_report_json(self):
        """Test exporting a JSON report to the configured output directory."""
        result = self.runner.invoke(main, ["report", "--month", "2024-02"])

        assert result.exit_code == 0, result.output
        [report_file] = list(get_config().output_dir.glob("*_2024-02_summary_report.json"))
        report = read_json(report_file)
        assert report["summary"]["total_expenses"] == "345.25"
        assert report["trends"]["month"] == "2024-02"

    def test_report_csv(self, tmp_path):
        """Test exporting a CSV report to a chosen directory."""
        result = self.runner.invoke(main, ["report", "--format", "csv", "--output-dir", str(tmp_path / "out")])

        assert result.exit_code == 0, result.output
        assert len(list((tmp_path / "out").glob("*.csv"))) == 1


@pytest.mark.integration
class TestMissingWorkspace:
    """Test commands before any import."""

    def test_summary_without_import(self):
        """Test a helpful error when nothing has been imported."""
        result = CliRunner().invoke(main, ["summary"])

        assert result.exit_code != 0
        assert "Run 'findash import FILE' first" in result.output
