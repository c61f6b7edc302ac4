"""Aggregation and report rendering package."""

from pocket_ledger.reports.aggregation import (
    build_monthly_report,
    category_breakdown,
    filter_by_month,
    summarize,
)
from pocket_ledger.reports.csv_export import (
    CSV_HEADERS,
    format_amount,
    render_csv,
    report_filename,
)
from pocket_ledger.reports.formatting import format_currency, format_percentage

__all__ = [
    "CSV_HEADERS",
    "build_monthly_report",
    "category_breakdown",
    "filter_by_month",
    "format_amount",
    "format_currency",
    "format_percentage",
    "render_csv",
    "report_filename",
    "summarize",
]
