"""
Data Models Package

This package contains all Pydantic models used in Pocket Ledger.
All data flowing through the system must conform to these schemas.
"""

from pocket_ledger.models.transaction import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    MONTHS,
    CategoryBreakdown,
    CsvExport,
    MonthlyReport,
    MonthPeriod,
    SummaryData,
    SyncResult,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    suggested_categories,
    year_options,
)
from pocket_ledger.models.session import (
    Allowed,
    Denied,
    GateResult,
    PremiumFeature,
    User,
)
from pocket_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "MONTHS",
    "CategoryBreakdown",
    "CsvExport",
    "MonthlyReport",
    "MonthPeriod",
    "SummaryData",
    "SyncResult",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    "suggested_categories",
    "year_options",
    # Session models
    "Allowed",
    "Denied",
    "GateResult",
    "PremiumFeature",
    "User",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
