"""
Entry Validation Gate

DESIGN DECISION: Validation happens in two stages:

STAGE 1 - REQUIRED RULES (errors, block insertion):
- Date present and a real YYYY-MM-DD date
- Category present
- Amount parses as a finite number and is greater than zero

STAGE 2 - SANITY CHECKS (warnings, never block):
- Date far in the future
- Unusually large amount

Rules run in that order and the FIRST error is what the user sees.
All issues are still collected on the result.

IMPORTANT: Validation NEVER silently fixes issues.
A rejected draft leaves the ledger unchanged.
"""

from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from pocket_ledger.config import get_settings
from pocket_ledger.models.transaction import (
    Transaction,
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
)


class TransactionValidationError(Exception):
    """A draft was rejected at the entry gate."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.error_message or "Invalid transaction")


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    """Amount text to Decimal, or None when it is not a finite number."""
    if raw is None or not raw.strip():
        return None
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def parse_date(raw: Optional[str]) -> Optional[date]:
    """YYYY-MM-DD text to date, or None when it is not a real date."""
    if raw is None or not raw.strip():
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        return None


class TransactionValidator:
    """
    Validates a TransactionDraft before it may enter the ledger.
    """

    def __init__(self, today: Optional[date] = None):
        """
        Initialize validator.

        Args:
            today: Fixed "today" for the future-date check.
                   Defaults to the real date at validation time.
        """
        self._today = today
        self._settings = get_settings().app

    def _validate_required(
        self,
        draft: TransactionDraft,
    ) -> list[ValidationIssue]:
        """Stage 1: rules whose failure rejects the draft."""
        issues = []

        if not draft.date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required.",
                severity="error",
            ))
        elif parse_date(draft.date) is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date '{draft.date}' is not a valid YYYY-MM-DD date.",
                severity="error",
            ))

        if not draft.category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required.",
                severity="error",
            ))

        amount = parse_amount(draft.amount)
        if amount is None or amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be a number greater than 0.",
                severity="error",
            ))

        return issues

    def _validate_sanity(
        self,
        draft: TransactionDraft,
    ) -> list[ValidationIssue]:
        """Stage 2: suspicious but acceptable values."""
        issues = []
        today = self._today or date.today()

        entry_date = parse_date(draft.date)
        max_future_date = today + timedelta(days=self._settings.future_date_tolerance_days)
        if entry_date and entry_date > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({entry_date}) is far in the future.",
                severity="warning",
            ))

        amount = parse_amount(draft.amount)
        max_amount = Decimal(str(self._settings.max_transaction_amount))
        if amount is not None and amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount}) seems unusually high.",
                severity="warning",
            ))

        return issues

    def validate(self, draft: TransactionDraft) -> ValidationResult:
        """
        Run both stages.

        Stage 2 only runs when stage 1 found no errors.
        """
        issues = self._validate_required(draft)
        is_valid = not issues

        if is_valid:
            issues.extend(self._validate_sanity(draft))

        return ValidationResult(is_valid=is_valid, issues=issues)

    def build_transaction(
        self,
        draft: TransactionDraft,
    ) -> tuple[Transaction, ValidationResult]:
        """
        Validate a draft and turn it into a new Transaction.

        The transaction gets a fresh id and creation timestamp.

        Raises:
            TransactionValidationError: If any required rule fails
        """
        result = self.validate(draft)
        if not result.is_valid:
            raise TransactionValidationError(result)

        transaction = Transaction(
            date=parse_date(draft.date),
            type=draft.type,
            category=draft.category,
            amount=parse_amount(draft.amount),
            note=draft.note or "",
        )
        return transaction, result
