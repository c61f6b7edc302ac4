"""Display helpers for the dashboard. Not used by the CSV exporter."""

from decimal import ROUND_HALF_UP, Context, Decimal


def format_currency(amount: Decimal, symbol: str = "Rp") -> str:
    """
    Whole currency units with '.' as thousands separator.

    >>> format_currency(Decimal("1500000"))
    'Rp 1.500.000'
    >>> format_currency(Decimal("-2500.6"))
    '-Rp 2.501'
    """
    parts = amount.as_tuple()
    exact = Context(prec=len(parts.digits) + max(parts.exponent, 0) + 1)
    rounded = amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP, context=exact)
    sign = "-" if rounded < 0 else ""
    grouped = f"{rounded.copy_abs():,}".replace(",", ".")
    return f"{sign}{symbol} {grouped}"


def format_percentage(percentage: Decimal) -> str:
    """One decimal place, e.g. '33.3%'."""
    return f"{percentage:.1f}%"
