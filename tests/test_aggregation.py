"""
Tests for the aggregation engine.

Covers the month filter, the income/expense summary and the category
breakdown, including their ordering rules.
"""

import pytest
from decimal import Decimal

from pocket_ledger.models import MonthPeriod, TransactionType
from pocket_ledger.reports import (
    build_monthly_report,
    category_breakdown,
    filter_by_month,
    summarize,
)

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


class TestFilterByMonth:
    """Tests for filter_by_month()."""

    def test_march_example(self, example_transactions):
        """Test only March 2024 records are returned, newest first."""
        result = filter_by_month(example_transactions, month=2, year=2024)

        assert [t.date.isoformat() for t in result] == ["2024-03-02", "2024-03-01"]
        assert [t.category for t in result] == ["Salary", "Food"]

    def test_no_matches(self, example_transactions):
        """Test an empty result for a month with nothing recorded."""
        assert filter_by_month(example_transactions, month=0, year=2024) == []
        assert filter_by_month(example_transactions, month=2, year=2023) == []

    def test_empty_input(self):
        """Test empty input gives empty output."""
        assert filter_by_month([], month=5, year=2024) == []

    def test_equal_dates_keep_input_order(self, make_transaction):
        """Test ties on date keep their original relative order."""
        first = make_transaction("2024-03-10", EXPENSE, "Food", "1")
        second = make_transaction("2024-03-10", EXPENSE, "Bills", "2")
        older = make_transaction("2024-03-01", EXPENSE, "Food", "3")

        result = filter_by_month([first, older, second], month=2, year=2024)

        assert [t.id for t in result] == [first.id, second.id, older.id]

    def test_is_idempotent(self, example_transactions):
        """Test filtering the filtered set changes nothing."""
        once = filter_by_month(example_transactions, month=2, year=2024)
        twice = filter_by_month(once, month=2, year=2024)
        assert once == twice

    def test_does_not_mutate_input(self, example_transactions):
        """Test the source collection is left alone."""
        before = list(example_transactions)
        filter_by_month(example_transactions, month=2, year=2024)
        assert example_transactions == before

    @pytest.mark.parametrize("month", [-1, 12, 99])
    def test_rejects_out_of_range_month(self, example_transactions, month):
        """Test months outside 0-11 are refused."""
        with pytest.raises(ValueError):
            filter_by_month(example_transactions, month=month, year=2024)


class TestSummarize:
    """Tests for summarize()."""

    def test_march_example(self, example_transactions):
        """Test totals for the March 2024 example."""
        march = filter_by_month(example_transactions, month=2, year=2024)
        summary = summarize(march)

        assert summary.total_income == Decimal("1000")
        assert summary.total_expense == Decimal("50")
        assert summary.balance == Decimal("950")

    def test_empty_is_all_zero(self):
        """Test an empty month sums to zero."""
        summary = summarize([])
        assert summary.total_income == 0
        assert summary.total_expense == 0
        assert summary.balance == 0

    def test_negative_balance_not_clamped(self, make_transaction):
        """Test spending more than earned gives a negative balance."""
        summary = summarize([
            make_transaction("2024-03-01", INCOME, "Salary", "100"),
            make_transaction("2024-03-02", EXPENSE, "Bills", "250.75"),
        ])
        assert summary.balance == Decimal("-150.75")
        assert summary.is_negative is True

    def test_balance_identity_and_order_independence(self, make_transaction):
        """Test balance is income minus expense whatever the order."""
        records = [
            make_transaction("2024-03-01", INCOME, "Salary", "0.1"),
            make_transaction("2024-03-02", EXPENSE, "Food", "0.2"),
            make_transaction("2024-03-03", INCOME, "Bonus", "0.3"),
            make_transaction("2024-03-04", EXPENSE, "Transport", "0.05"),
        ]
        forward = summarize(records)
        backward = summarize(list(reversed(records)))

        assert forward.balance == forward.total_income - forward.total_expense
        assert forward.total_income == Decimal("0.4")
        assert forward.total_expense == Decimal("0.25")
        assert forward == backward


class TestCategoryBreakdown:
    """Tests for category_breakdown()."""

    def test_march_example(self, example_transactions):
        """Test one Food entry holding the whole expense total."""
        march = filter_by_month(example_transactions, month=2, year=2024)
        breakdown = category_breakdown(march, summarize(march).total_expense)

        assert len(breakdown) == 1
        assert breakdown[0].category == "Food"
        assert breakdown[0].amount == Decimal("50")
        assert breakdown[0].percentage == Decimal("100")

    def test_groups_and_sorts_by_amount(self, make_transaction):
        """Test grouping per category, highest amount first."""
        records = [
            make_transaction("2024-03-01", EXPENSE, "Food", "30"),
            make_transaction("2024-03-02", EXPENSE, "Bills", "100"),
            make_transaction("2024-03-03", EXPENSE, "Food", "20"),
            make_transaction("2024-03-04", INCOME, "Salary", "5000"),
        ]
        total = summarize(records).total_expense
        breakdown = category_breakdown(records, total)

        assert [(b.category, b.amount) for b in breakdown] == [
            ("Bills", Decimal("100")),
            ("Food", Decimal("50")),
        ]

    def test_amounts_sum_to_total_expense(self, make_transaction):
        """Test breakdown amounts add up exactly to total expense."""
        records = [
            make_transaction("2024-03-01", EXPENSE, "Food", "10.10"),
            make_transaction("2024-03-02", EXPENSE, "Bills", "20.20"),
            make_transaction("2024-03-03", EXPENSE, "Health", "30.30"),
            make_transaction("2024-03-04", EXPENSE, "Food", "0.01"),
        ]
        total = summarize(records).total_expense
        breakdown = category_breakdown(records, total)

        assert sum(b.amount for b in breakdown) == total
        assert abs(sum(b.percentage for b in breakdown) - Decimal("100")) < Decimal("0.0001")

    def test_ties_keep_first_seen_order(self, make_transaction):
        """Test equal amounts stay in first-seen category order."""
        records = [
            make_transaction("2024-03-01", EXPENSE, "Transport", "25"),
            make_transaction("2024-03-02", EXPENSE, "Food", "25"),
            make_transaction("2024-03-03", EXPENSE, "Bills", "25"),
        ]
        breakdown = category_breakdown(records, summarize(records).total_expense)
        assert [b.category for b in breakdown] == ["Transport", "Food", "Bills"]

    def test_no_expenses_gives_empty_breakdown(self, make_transaction):
        """Test an income-only month has no breakdown entries."""
        records = [make_transaction("2024-03-01", INCOME, "Salary", "1000")]
        assert category_breakdown(records, Decimal("0")) == []

    def test_zero_total_gives_zero_percentages(self, make_transaction):
        """Test no division by zero when the total passed in is 0."""
        records = [make_transaction("2024-03-01", EXPENSE, "Food", "10")]
        breakdown = category_breakdown(records, Decimal("0"))
        assert breakdown[0].percentage == 0


class TestBuildMonthlyReport:
    """Tests for the one-shot monthly report."""

    def test_march_example(self, example_transactions):
        """Test the report bundles filter, summary and breakdown."""
        report = build_monthly_report(example_transactions, MonthPeriod(month=2, year=2024))

        assert len(report.transactions) == 2
        assert report.summary.balance == Decimal("950")
        assert report.breakdown[0].category == "Food"
        assert report.is_empty is False

    def test_empty_month(self, example_transactions):
        """Test an empty month produces an empty report."""
        report = build_monthly_report(example_transactions, MonthPeriod(month=6, year=2024))

        assert report.is_empty is True
        assert report.breakdown == []
        assert report.summary.balance == 0
