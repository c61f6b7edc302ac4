"""
Tests for CSV report rendering.
"""

import csv
import io
from decimal import Decimal

from pocket_ledger.models import MonthPeriod, TransactionType
from pocket_ledger.reports import (
    CSV_HEADERS,
    filter_by_month,
    format_amount,
    render_csv,
    report_filename,
)
from pocket_ledger.reports.formatting import format_currency, format_percentage

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


class TestRenderCsv:
    """Tests for render_csv()."""

    def test_march_example(self, example_transactions):
        """Test the exact text for the March 2024 example."""
        march = filter_by_month(example_transactions, month=2, year=2024)
        content = render_csv(march)

        assert content == (
            'Date,Type,Category,Amount,Note\n'
            '2024-03-02,Income,Salary,1000,""\n'
            '2024-03-01,Expense,Food,50,""'
        )

    def test_header_only_when_empty(self):
        """Test an empty month still gets a header row."""
        assert render_csv([]) == ",".join(CSV_HEADERS)

    def test_row_count(self, make_transaction):
        """Test one line per transaction plus the header."""
        records = [
            make_transaction(f"2024-03-{day:02d}", EXPENSE, "Food", str(day))
            for day in range(1, 8)
        ]
        assert len(render_csv(records).split("\n")) == len(records) + 1

    def test_keeps_input_order(self, make_transaction):
        """Test rows are not re-sorted."""
        older = make_transaction("2024-03-01", EXPENSE, "Food", "1")
        newer = make_transaction("2024-03-20", EXPENSE, "Bills", "2")

        lines = render_csv([older, newer]).split("\n")

        assert lines[1].startswith("2024-03-01")
        assert lines[2].startswith("2024-03-20")

    def test_amounts_read_back_equal(self, make_transaction):
        """Test a CSV reader recovers the original amounts and notes."""
        records = [
            make_transaction("2024-03-01", EXPENSE, "Food", "12.50", note="lunch, with team"),
            make_transaction("2024-03-02", INCOME, "Salary", "1500000"),
            make_transaction("2024-03-03", EXPENSE, "Bills", "0.01"),
        ]
        rows = list(csv.reader(io.StringIO(render_csv(records))))

        assert rows[0] == CSV_HEADERS
        assert [Decimal(row[3]) for row in rows[1:]] == [t.amount for t in records]
        assert rows[1][4] == "lunch, with team"
        assert rows[2][4] == ""

    def test_quotes_in_note_are_not_escaped(self, make_transaction):
        """Test embedded quotes are written as-is."""
        record = make_transaction("2024-03-01", EXPENSE, "Food", "5", note='the "good" one')
        line = render_csv([record]).split("\n")[1]
        assert line.endswith('"the "good" one"')


class TestFormatAmount:
    """Tests for format_amount()."""

    def test_plain_decimal_text(self):
        """Test no symbol, no grouping and no trailing zeros."""
        assert format_amount(Decimal("1000")) == "1000"
        assert format_amount(Decimal("1000.00")) == "1000"
        assert format_amount(Decimal("12.50")) == "12.5"
        assert format_amount(Decimal("0.05")) == "0.05"

    def test_no_exponent_notation(self):
        """Test large round amounts stay positional."""
        assert format_amount(Decimal("1E+6")) == "1000000"

    def test_many_digits_not_rounded(self):
        """Test amounts longer than the default decimal precision stay exact."""
        assert format_amount(Decimal("12345678901234567890123456789.5")) == (
            "12345678901234567890123456789.5"
        )
        assert format_amount(Decimal("1234567890123456789012345678900.000")) == (
            "1234567890123456789012345678900"
        )

    def test_zero(self):
        """Test zero renders as 0."""
        assert format_amount(Decimal("0.00")) == "0"


class TestReportFilename:
    """Tests for report_filename()."""

    def test_default_name(self):
        """Test month name and year in the file name."""
        assert report_filename(MonthPeriod(month=2, year=2024)) == "financial_report_March_2024.csv"

    def test_custom_prefix_and_extension(self):
        """Test prefix and extension are configurable."""
        name = report_filename(MonthPeriod(month=11, year=2023), prefix="ledger", extension="txt")
        assert name == "ledger_December_2023.txt"


class TestDisplayFormatting:
    """Tests for the dashboard formatting helpers."""

    def test_currency_grouping(self):
        """Test '.' as thousands separator on whole units."""
        assert format_currency(Decimal("1500000")) == "Rp 1.500.000"
        assert format_currency(Decimal("999")) == "Rp 999"

    def test_currency_rounds_half_up(self):
        """Test fractions round half up."""
        assert format_currency(Decimal("2500.5")) == "Rp 2.501"

    def test_currency_many_digits(self):
        """Test very long amounts format without a precision error."""
        assert format_currency(Decimal("12345678901234567890123456789.5")) == (
            "Rp 12.345.678.901.234.567.890.123.456.790"
        )
        assert format_currency(Decimal("1E+6")) == "Rp 1.000.000"

    def test_negative_currency(self):
        """Test negative balances keep their sign."""
        assert format_currency(Decimal("-2500.6"), symbol="$") == "-$ 2.501"

    def test_percentage(self):
        """Test one decimal place."""
        assert format_percentage(Decimal("33.3333")) == "33.3%"
        assert format_percentage(Decimal("100")) == "100.0%"
