"""
CSV Report Rendering

The exporter trusts its caller: rows come out in exactly the order they
go in, nothing is re-sorted or re-filtered.

KNOWN LIMITATION: the note column is wrapped in double quotes, but quotes
inside a note are NOT escaped. Exports stay byte-for-byte compatible with
files produced by earlier versions of the app; a note containing '"' will
confuse strict CSV readers.
"""

from decimal import Context, Decimal
from typing import Iterable

from pocket_ledger.models.transaction import MonthPeriod, Transaction

CSV_HEADERS = ["Date", "Type", "Category", "Amount", "Note"]


def format_amount(amount: Decimal) -> str:
    """
    Plain decimal text, no currency symbol or grouping.

    Trailing zeros are dropped, so 1000.00 becomes '1000' and 12.50 becomes '12.5'.
    Digits are never rounded away, however many there are.
    """
    exact = Context(prec=max(len(amount.as_tuple().digits), 1))
    text = format(amount.normalize(exact), "f")
    return "0" if text in ("-0", "") else text


def transaction_to_row(transaction: Transaction) -> list[str]:
    """The five CSV columns of one transaction."""
    return [
        transaction.date.isoformat(),
        transaction.type.value,
        transaction.category,
        format_amount(transaction.amount),
        f'"{transaction.note or ""}"',
    ]


def render_csv(transactions: Iterable[Transaction]) -> str:
    """Header line plus one line per transaction, joined with newlines."""
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(transaction_to_row(t)) for t in transactions)
    return "\n".join(lines)


def report_filename(
    period: MonthPeriod,
    prefix: str = "financial_report",
    extension: str = "csv",
) -> str:
    """e.g. 'financial_report_March_2024.csv'."""
    return f"{prefix}_{period.month_name}_{period.year}.{extension}"
