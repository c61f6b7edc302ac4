"""
Tests for the entry validation gate.

These tests protect the ledger from bad input.
"""

import pytest
from datetime import date
from decimal import Decimal

from pocket_ledger.models import TransactionDraft, TransactionType
from pocket_ledger.validation import (
    TransactionValidationError,
    TransactionValidator,
    parse_amount,
    parse_date,
)


def make_draft(**overrides) -> TransactionDraft:
    values = {
        "date": "2024-03-01",
        "type": TransactionType.EXPENSE,
        "category": "Food",
        "amount": "12.50",
        "note": "lunch",
    }
    values.update(overrides)
    return TransactionDraft(**values)


@pytest.fixture
def validator():
    return TransactionValidator(today=date(2024, 3, 15))


class TestParsing:
    """Tests for the parsing helpers."""

    def test_parse_amount(self):
        """Test finite numbers parse, everything else is None."""
        assert parse_amount("12.50") == Decimal("12.50")
        assert parse_amount(" 7 ") == Decimal("7")
        assert parse_amount("-5") == Decimal("-5")
        assert parse_amount("abc") is None
        assert parse_amount("") is None
        assert parse_amount(None) is None
        assert parse_amount("NaN") is None
        assert parse_amount("Infinity") is None

    def test_parse_date(self):
        """Test only real calendar dates parse."""
        assert parse_date("2024-02-29") == date(2024, 2, 29)
        assert parse_date("2023-02-29") is None
        assert parse_date("03/01/2024") is None
        assert parse_date("") is None
        assert parse_date(None) is None


class TestRequiredRules:
    """Tests for stage 1 (blocking) rules."""

    def test_valid_draft_accepted(self, validator):
        """Test a complete draft passes."""
        result = validator.validate(make_draft())
        assert result.is_valid is True
        assert result.has_errors is False

    @pytest.mark.parametrize("amount", ["0", "-5", "0.00", "abc", "", None, "NaN"])
    def test_bad_amount_rejected(self, validator, amount):
        """Test zero, negative and non-numeric amounts are rejected."""
        result = validator.validate(make_draft(amount=amount))
        assert result.is_valid is False
        assert result.error_message == "Amount must be a number greater than 0."

    def test_missing_date_rejected(self, validator):
        """Test a draft without date is rejected."""
        result = validator.validate(make_draft(date=None))
        assert result.is_valid is False
        assert result.error_message == "Date is required."

    def test_invalid_date_rejected(self, validator):
        """Test an impossible date is rejected."""
        result = validator.validate(make_draft(date="2024-02-30"))
        assert result.is_valid is False
        assert "2024-02-30" in result.error_message

    @pytest.mark.parametrize("category", [None, "", "   "])
    def test_missing_category_rejected(self, validator, category):
        """Test a blank category is rejected."""
        result = validator.validate(make_draft(category=category))
        assert result.is_valid is False
        assert result.error_message == "Category is required."

    def test_first_error_is_reported(self, validator):
        """Test the first failing rule is the message, all are collected."""
        result = validator.validate(make_draft(date=None, category=None, amount="0"))

        assert result.error_message == "Date is required."
        assert [i.field for i in result.issues] == ["date", "category", "amount"]
        assert result.error_count == 3

    def test_any_category_accepted(self, validator):
        """Test categories outside the suggestions are fine."""
        assert validator.validate(make_draft(category="Birthday gifts")).is_valid


class TestSanityChecks:
    """Tests for stage 2 (warning) checks."""

    def test_far_future_date_warns(self, validator):
        """Test a far future date warns but does not block."""
        result = validator.validate(make_draft(date="2024-12-31"))
        assert result.is_valid is True
        assert result.has_errors is False
        assert len(result.warnings) == 1
        assert "future" in result.warnings[0]

    def test_near_future_date_is_quiet(self, validator):
        """Test a date within tolerance gives no warning."""
        result = validator.validate(make_draft(date="2024-03-20"))
        assert result.warnings == []

    def test_huge_amount_warns(self, validator):
        """Test unusually large amounts warn."""
        result = validator.validate(make_draft(amount="2000000000"))
        assert result.is_valid is True
        assert any("unusually high" in w for w in result.warnings)

    def test_no_warnings_when_rejected(self, validator):
        """Test stage 2 is skipped once stage 1 fails."""
        result = validator.validate(make_draft(date="2030-01-01", amount="0"))
        assert result.is_valid is False
        assert result.warnings == []


class TestBuildTransaction:
    """Tests for build_transaction()."""

    def test_builds_transaction(self, validator):
        """Test a valid draft becomes a Transaction with parsed values."""
        transaction, result = validator.build_transaction(make_draft())

        assert result.is_valid is True
        assert transaction.date == date(2024, 3, 1)
        assert transaction.amount == Decimal("12.50")
        assert transaction.category == "Food"
        assert transaction.note == "lunch"
        assert transaction.type == TransactionType.EXPENSE

    def test_fresh_id_per_transaction(self, validator):
        """Test the same draft twice gives two distinct ids."""
        first, _ = validator.build_transaction(make_draft())
        second, _ = validator.build_transaction(make_draft())
        assert first.id != second.id

    def test_missing_note_becomes_empty(self, validator):
        """Test an absent note is stored as empty text."""
        transaction, _ = validator.build_transaction(make_draft(note=None))
        assert transaction.note == ""

    def test_rejected_draft_raises(self, validator):
        """Test a rejected draft raises with the user-facing message."""
        with pytest.raises(TransactionValidationError) as exc_info:
            validator.build_transaction(make_draft(amount="-5"))

        assert str(exc_info.value) == "Amount must be a number greater than 0."
        assert exc_info.value.result.is_valid is False

    def test_numeric_form_values(self, validator):
        """Test date objects and numeric amounts from form widgets."""
        draft = TransactionDraft(
            date=date(2024, 3, 2),
            type=TransactionType.INCOME,
            category="Salary",
            amount=1000,
        )
        transaction, _ = validator.build_transaction(draft)
        assert transaction.date == date(2024, 3, 2)
        assert transaction.amount == Decimal("1000")
        assert transaction.is_income
