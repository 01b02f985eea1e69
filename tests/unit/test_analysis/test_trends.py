#!/usr/bin/env python3
"""Tests for month-over-month spending trends."""

import math
from datetime import date

import pytest

from findash.analysis.filters import filter_by_month
from findash.analysis.trends import CategoryGrowth, analyze_trends, largest_spending_day, top_growing_category
from findash.core.models import TransactionType
from findash.core.money import Money


def trends_for(transactions, month):
    return analyze_trends(filter_by_month(transactions, month), transactions, month)


@pytest.mark.analysis
class TestInsufficientData:
    """Test when no trends are produced."""

    def test_all_period(self, make_transaction):
        """Test the 'all' period has no trends."""
        transactions = [make_transaction()]
        assert analyze_trends(transactions, transactions, "all") is None

    def test_empty_period(self, make_transaction):
        """Test a month without transactions has no trends."""
        assert trends_for([make_transaction(when="2024-01-10")], "2024-03") is None

    def test_invalid_month_key(self, make_transaction):
        """Test an invalid month key is rejected."""
        transactions = [make_transaction()]
        with pytest.raises(ValueError):
            analyze_trends(transactions, transactions, "January")


@pytest.mark.analysis
class TestPercentChanges:
    """Test change versus previous month and versus average."""

    def test_vs_previous_month(self, make_transaction):
        """Test growth against the previous calendar month."""
        transactions = [
            make_transaction(when="2024-01-10", amount=10000),
            make_transaction(when="2024-02-10", amount=15000),
        ]
        trends = trends_for(transactions, "2024-02")
        assert trends.vs_prev_month == 50.0
        assert trends.current_expenses == Money.from_cents(15000)
        assert trends.previous_expenses == Money.from_cents(10000)

    def test_previous_month_without_spend(self, make_transaction):
        """Test zero previous spend gives 0% rather than an error."""
        transactions = [make_transaction(when="2024-02-10", amount=20000)]
        trends = trends_for(transactions, "2024-02")
        assert trends.vs_prev_month == 0.0

    def test_previous_month_across_year_boundary(self, make_transaction):
        """Test January compares against December of the prior year."""
        transactions = [
            make_transaction(when="2023-12-20", amount=20000),
            make_transaction(when="2024-01-05", amount=10000),
        ]
        assert trends_for(transactions, "2024-01").vs_prev_month == -50.0

    def test_vs_average(self, make_transaction):
        """Test growth against the average month of the full history."""
        transactions = [
            make_transaction(when="2024-01-10", amount=10000),
            make_transaction(when="2024-02-10", amount=20000),
            make_transaction(when="2024-03-10", amount=30000),
        ]
        trends = trends_for(transactions, "2024-03")
        assert trends.average_monthly_expenses == Money.from_cents(20000)
        assert trends.vs_average == 50.0

    def test_income_ignored(self, make_transaction):
        """Test income does not count as spending."""
        transactions = [
            make_transaction(when="2024-01-10", amount=10000),
            make_transaction(when="2024-02-01", amount=999999, transaction_type=TransactionType.INCOME),
            make_transaction(when="2024-02-10", amount=10000),
        ]
        trends = trends_for(transactions, "2024-02")
        assert trends.vs_prev_month == 0.0
        assert trends.current_expenses == Money.from_cents(10000)

    def test_income_only_period(self, make_transaction):
        """Test a period with income but no expenses still yields trends."""
        transactions = [make_transaction(when="2024-02-01", amount=5000, transaction_type=TransactionType.INCOME)]
        trends = trends_for(transactions, "2024-02")
        assert trends is not None
        assert trends.vs_average == 0.0
        assert trends.top_growing_category.name == "N/A"
        assert trends.largest_spending_day.day is None

    def test_deterministic(self, make_transaction):
        """Test repeated runs give identical results."""
        transactions = [
            make_transaction(when="2024-01-10", amount=3333),
            make_transaction(when="2024-02-10", amount=7777),
        ]
        assert trends_for(transactions, "2024-02") == trends_for(transactions, "2024-02")


@pytest.mark.analysis
class TestTopGrowingCategory:
    """Test selection of the fastest-growing category."""

    def test_largest_finite_growth_wins(self):
        """Test the highest percentage growth is chosen."""
        growth = top_growing_category({"Food": 15000, "Transport": 4000}, {"Food": 10000, "Transport": 1000})
        assert growth == CategoryGrowth(name="Transport", growth=300.0)

    def test_new_category_beats_finite_growth(self):
        """Test a category with no previous spend outranks any growth rate."""
        growth = top_growing_category({"Food": 15000, "Travel": 100}, {"Food": 10000})
        assert growth.name == "Travel"
        assert growth.is_new
        assert math.isinf(growth.growth)

    def test_new_category_sorting_first_still_wins(self):
        """Test order of visiting does not let finite growth displace a new category."""
        growth = top_growing_category({"Art": 100, "Food": 30000}, {"Food": 10000})
        assert growth.name == "Art"
        assert growth.is_new

    def test_first_new_category_keeps_slot(self):
        """Test ties between new categories go to the first name."""
        growth = top_growing_category({"Zoo": 100, "Books": 100}, {})
        assert growth.name == "Books"

    def test_ties_go_to_first_name(self):
        """Test equal growth rates resolve alphabetically."""
        growth = top_growing_category({"B": 200, "A": 400}, {"B": 100, "A": 200})
        assert growth.name == "A"

    def test_not_available(self):
        """Test N/A when nothing is comparable or new."""
        assert top_growing_category({}, {"Food": 100}) == CategoryGrowth.not_available()

    def test_trends_report_new_category(self, make_transaction):
        """Test the full analysis surfaces a new category."""
        transactions = [
            make_transaction(when="2024-01-10", amount=10000, category="Food"),
            make_transaction(when="2024-02-10", amount=15000, category="Food"),
            make_transaction(when="2024-02-11", amount=5000, category="Travel"),
        ]
        trends = trends_for(transactions, "2024-02")
        assert trends.top_growing_category.name == "Travel"
        assert trends.to_dict()["top_growing_category"] == {"name": "Travel", "growth": None, "is_new": True}


@pytest.mark.analysis
class TestLargestSpendingDay:
    """Test the biggest spending day."""

    def test_sums_per_day(self, make_transaction):
        """Test expenses on the same day are added together."""
        transactions = [
            make_transaction(when="2024-02-03T09:00:00", amount=3000),
            make_transaction(when="2024-02-03T19:30:00", amount=3000),
            make_transaction(when="2024-02-10", amount=5000),
        ]
        day = largest_spending_day(transactions)
        assert day.day == date(2024, 2, 3)
        assert day.amount == Money.from_cents(6000)

    def test_tie_goes_to_earliest_day(self, make_transaction):
        """Test equal totals resolve to the earlier date."""
        transactions = [
            make_transaction(when="2024-02-20", amount=5000),
            make_transaction(when="2024-02-05", amount=5000),
        ]
        assert largest_spending_day(transactions).day == date(2024, 2, 5)
