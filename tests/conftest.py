"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from datetime import datetime

import pytest

from findash.core import config as config_module
from findash.core.models import Transaction, TransactionType
from findash.core.money import Money


SAMPLE_CSV = """Date,Description,Category,Amount,Type
2024-01-05,Paycheck,Income,3000.00,income
2024-01-06,Grocery Store,Food,82.50,expense
2024-01-06,Bus Pass,Transport,45.00,expense
2024-01-20,Restaurant,Food,60.00,expense
2024-02-01,Paycheck,Income,3000.00,income
2024-02-03,Grocery Store,Food,120.00,expense
2024-02-14,Concert,Entertainment,150.00,expense
2024-02-14,Dinner,Food,75.25,expense
"""


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Point configuration at a per-test data directory."""
    # Ensure tests don't use real data
    monkeypatch.setenv("FINDASH_ENV", "test")
    monkeypatch.setenv("FINDASH_DATA_DIR", str(tmp_path / "findash_data"))
    for name in (
        "FINDASH_WORKSPACE",
        "FINDASH_ALERT_WINDOW_DAYS",
        "FINDASH_RECENT_TRANSACTIONS",
        "FINDASH_CSV_ENCODING",
        "FINDASH_DATE_FORMATS",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "INFO")

    # Drop any configuration cached by a previous test
    monkeypatch.setattr(config_module, "_config", None)


@pytest.fixture
def sample_csv_text() -> str:
    """Two months of well-formed transactions."""
    return SAMPLE_CSV


@pytest.fixture
def sample_csv_file(tmp_path, sample_csv_text):
    """Sample CSV written to disk."""
    path = tmp_path / "statement.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        when: str = "2024-01-15",
        amount: int = 1000,
        category: str = "Food",
        transaction_type: TransactionType = TransactionType.EXPENSE,
        description: str = "Test transaction",
        transaction_id: str | None = None,
    ) -> Transaction:
        return Transaction(
            id=transaction_id or f"test-{next(counter)}",
            date=datetime.fromisoformat(when),
            description=description,
            category=category,
            amount=Money.from_cents(amount),
            type=transaction_type,
        )

    return _make


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "ingest: Tests for CSV parsing and validation")
    config.addinivalue_line("markers", "analysis: Tests for aggregation, trends, budgets and filters")
