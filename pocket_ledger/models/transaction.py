"""
Core Data Models for Pocket Ledger

These models define the schemas for all ledger data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for local storage
4. Stay immutable once created

DESIGN DECISION: A Transaction does NOT enforce amount > 0 itself.
Positivity is checked at the entry gate (see pocket_ledger.validation),
so whatever was stored earlier can always be loaded back.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS & CONSTANTS
# =============================================================================

class TransactionType(str, Enum):
    """Closed two-variant tag for a transaction."""
    INCOME = "Income"
    EXPENSE = "Expense"


INCOME_CATEGORIES = [
    "Salary",
    "Bonus",
    "Sales",
    "Investment",
    "Other",
]

EXPENSE_CATEGORIES = [
    "Food & Drinks",
    "Transportation",
    "Shopping",
    "Bills & Utilities",
    "Entertainment",
    "Health",
    "Education",
    "Other",
]

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def suggested_categories(transaction_type: TransactionType) -> list[str]:
    """
    Categories offered in the entry form for a transaction type.

    These are suggestions only; any non-empty category is accepted.
    """
    if transaction_type == TransactionType.INCOME:
        return list(INCOME_CATEGORIES)
    return list(EXPENSE_CATEGORIES)


# Models below have a field called "date"; annotate with this alias instead.
CalendarDate = date


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    Records are never mutated after creation; deletion removes a record by id.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    date: CalendarDate = Field(
        ...,
        description="Calendar date of the transaction"
    )
    type: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category label (free form)"
    )
    amount: Decimal = Field(
        ...,
        description="Amount; positivity is enforced at entry"
    )
    note: str = Field(
        default="",
        description="Optional note"
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the record was created"
    )

    @field_validator('note', mode='before')
    @classmethod
    def none_note_to_empty(cls, v: Optional[str]) -> str:
        return v or ""

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class TransactionDraft(BaseModel):
    """
    A proposed transaction exactly as entered by the user.

    CRITICAL: This is UNVERIFIED input. Every field is optional because
    the form might be submitted half-filled. Only the validator turns a
    draft into a Transaction.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    date: Optional[str] = Field(
        default=None,
        description="Date as typed, expected YYYY-MM-DD"
    )
    type: TransactionType = Field(
        default=TransactionType.EXPENSE,
        description="Selected transaction type"
    )
    category: Optional[str] = None
    amount: Optional[str] = Field(
        default=None,
        description="Amount as typed"
    )
    note: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def date_to_text(cls, v: Union[str, CalendarDate, None]) -> Optional[str]:
        """Date pickers hand over date objects; keep everything as text."""
        if isinstance(v, CalendarDate):
            return v.isoformat()
        return v

    @field_validator('amount', mode='before')
    @classmethod
    def amount_to_text(cls, v: Union[str, int, float, Decimal, None]) -> Optional[str]:
        """Number inputs hand over numbers; keep everything as text."""
        if isinstance(v, bool):
            raise ValueError("Amount must be a number, not a boolean")
        if isinstance(v, (int, float, Decimal)):
            return str(v)
        return v


class MonthPeriod(BaseModel):
    """
    A calendar month selection.

    Months are zero-based (0 = January) to match the month selector.
    """
    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=0, le=11)
    year: int = Field(..., ge=1, le=9999)

    @classmethod
    def containing(cls, day: date) -> "MonthPeriod":
        """The period a given day falls in."""
        return cls(month=day.month - 1, year=day.year)

    @property
    def month_name(self) -> str:
        return MONTHS[self.month]

    @property
    def label(self) -> str:
        """e.g. 'March 2024'."""
        return f"{self.month_name} {self.year}"

    def contains(self, day: date) -> bool:
        return day.month - 1 == self.month and day.year == self.year


def year_options(today: Optional[date] = None, window: int = 5) -> list[int]:
    """Years offered by the year selector: current year +/- window."""
    current = (today or date.today()).year
    return list(range(current - window, current + window + 1))


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a TransactionDraft.

    Errors block insertion; warnings are shown but never block.
    """

    validated_at: datetime = Field(
        default_factory=_utcnow
    )
    is_valid: bool = Field(
        ...,
        description="Can the draft be inserted?"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All issues found, in rule order"
    )

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def error_message(self) -> Optional[str]:
        """The message shown to the user: first failing rule wins."""
        errors = self.errors
        return errors[0].message if errors else None


# =============================================================================
# REPORT MODELS (derived, never stored)
# =============================================================================

class SummaryData(BaseModel):
    """Income, expense and balance of one filtered set."""
    model_config = ConfigDict(frozen=True)

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")

    @property
    def is_negative(self) -> bool:
        """Display layers flag negative balances."""
        return self.balance < 0


class CategoryBreakdown(BaseModel):
    """Summed expense for one category and its share of total expense."""
    model_config = ConfigDict(frozen=True)

    category: str
    amount: Decimal
    percentage: Decimal = Field(
        ...,
        description="amount / total_expense * 100, 0 when there is no expense"
    )


class MonthlyReport(BaseModel):
    """Everything the dashboard shows for one month."""

    period: MonthPeriod
    transactions: list[Transaction] = Field(default_factory=list)
    summary: SummaryData = Field(default_factory=SummaryData)
    breakdown: list[CategoryBreakdown] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.transactions


class CsvExport(BaseModel):
    """A rendered CSV report offered for download."""

    filename: str
    content: str
    media_type: str = "text/csv;charset=utf-8"
    row_count: int = Field(
        ...,
        ge=0,
        description="Number of data rows (header excluded)"
    )

    @property
    def data(self) -> bytes:
        return self.content.encode("utf-8")


class SyncResult(BaseModel):
    """Outcome of a (simulated) cloud sync."""

    synced_at: datetime = Field(default_factory=_utcnow)
    transaction_count: int = Field(ge=0)
    message: str
