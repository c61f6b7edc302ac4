"""
Aggregation Engine

DESIGN DECISION: Every function here is PURE.
They take a sequence of transactions and return new values; the
source collection is never touched, so calling them twice on the same
input gives the same output.

Ordering rules:
- The month filter sorts newest date first. Equal dates keep input order.
- The category breakdown sorts by amount, highest first. Equal amounts
  keep the order in which the category was first seen.
Both rely on Python's sort being stable.

Sums are exact: they are never rounded to the decimal context precision.
"""

from decimal import MAX_PREC, Decimal, localcontext
from typing import Iterable, Sequence

from pocket_ledger.models.transaction import (
    CategoryBreakdown,
    MonthlyReport,
    MonthPeriod,
    SummaryData,
    Transaction,
    TransactionType,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def filter_by_month(
    transactions: Iterable[Transaction],
    month: int,
    year: int,
) -> list[Transaction]:
    """
    Records whose date falls in the given month (0-11) and year,
    most recent date first.
    """
    if not 0 <= month <= 11:
        raise ValueError(f"Month must be between 0 and 11, got {month}")

    matching = [
        t for t in transactions
        if t.date.month - 1 == month and t.date.year == year
    ]
    matching.sort(key=lambda t: t.date, reverse=True)
    return matching


def summarize(transactions: Iterable[Transaction]) -> SummaryData:
    """
    Total income, total expense and balance of a filtered set.

    The balance may be negative; it is never clamped.
    """
    total_income = ZERO
    total_expense = ZERO

    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        for t in transactions:
            if t.type == TransactionType.INCOME:
                total_income += t.amount
            else:
                total_expense += t.amount
        balance = total_income - total_expense

    return SummaryData(
        total_income=total_income,
        total_expense=total_expense,
        balance=balance,
    )


def category_breakdown(
    transactions: Iterable[Transaction],
    total_expense: Decimal,
) -> list[CategoryBreakdown]:
    """
    Per-category expense totals with their share of total_expense.

    Income records are ignored. Percentages are 0 when total_expense is 0.
    """
    # dicts keep insertion order, i.e. first-seen category order
    groups: dict[str, Decimal] = {}
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        for t in transactions:
            if t.type != TransactionType.EXPENSE:
                continue
            groups[t.category] = groups.get(t.category, ZERO) + t.amount

    breakdown = [
        CategoryBreakdown(
            category=category,
            amount=amount,
            percentage=(amount / total_expense * HUNDRED) if total_expense else ZERO,
        )
        for category, amount in groups.items()
    ]
    breakdown.sort(key=lambda item: item.amount, reverse=True)
    return breakdown


def build_monthly_report(
    transactions: Sequence[Transaction],
    period: MonthPeriod,
) -> MonthlyReport:
    """Filter, summarize and break down one month in one go."""
    filtered = filter_by_month(transactions, period.month, period.year)
    summary = summarize(filtered)
    return MonthlyReport(
        period=period,
        transactions=filtered,
        summary=summary,
        breakdown=category_breakdown(filtered, summary.total_expense),
    )
