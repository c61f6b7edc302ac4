"""Entry validation package."""

from pocket_ledger.validation.validator import (
    TransactionValidationError,
    TransactionValidator,
    parse_amount,
    parse_date,
)

__all__ = [
    "TransactionValidationError",
    "TransactionValidator",
    "parse_amount",
    "parse_date",
]
