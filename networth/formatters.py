"""
Display formatting for amounts, percentages, ratios and dates.

Amounts are shown with thousands separators (en-CA style). The currency
symbol comes from the configured currency (NETWORTH_CURRENCY, default CAD)
unless one is passed explicitly.
"""

import math
from datetime import datetime
from typing import Optional

from networth.config import get_settings
from networth.models.types import as_utc, utc_now


CURRENCY_SYMBOLS = {
    "CAD": "$",
    "USD": "$",
    "AUD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
}


def currency_symbol(currency: Optional[str] = None) -> str:
    """Symbol for an ISO currency code. Unknown codes render as the code, e.g. 'CHF 10.00'."""
    code = (currency or get_settings().currency).upper()
    return CURRENCY_SYMBOLS.get(code, f"{code} ")


def format_currency(amount: float, currency: Optional[str] = None) -> str:
    """1234.56 -> '$1,234.56'; -50 -> '-$50.00'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol(currency)}{abs(amount):,.2f}"


def format_compact_currency(amount: float, currency: Optional[str] = None) -> str:
    """1200 -> '$1.2K', 3500000 -> '$3.5M'."""
    sign = "-" if amount < 0 else ""
    symbol = currency_symbol(currency)
    magnitude = abs(amount)
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if magnitude >= threshold:
            scaled = f"{magnitude / threshold:.1f}".rstrip("0").rstrip(".")
            return f"{sign}{symbol}{scaled}{suffix}"
    return f"{sign}{symbol}{magnitude:.0f}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """25.567 -> '25.6%'."""
    return f"{value:.{decimals}f}%"


def format_number(value: float) -> str:
    """1234567 -> '1,234,567'."""
    return f"{value:,}"


def format_ratio(value: float, decimals: int = 2) -> str:
    """Render a ratio; the infinite liquidity sentinel shows as '∞'."""
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    return f"{value:.{decimals}f}"


def percentage_change(old_value: float, new_value: float) -> float:
    """
    Percent change between two values.

    From zero, any change counts as 100% and no change as 0%.
    """
    if old_value == 0:
        return 0.0 if new_value == 0 else 100.0
    return (new_value - old_value) / abs(old_value) * 100


def format_date(moment: datetime) -> str:
    """'Jan 15, 2024'."""
    return f"{moment:%b} {moment.day}, {moment.year}"


def format_date_long(moment: datetime) -> str:
    """'January 15, 2024'."""
    return f"{moment:%B} {moment.day}, {moment.year}"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _relative(count: int, unit: str) -> str:
    if count == 0:
        return "today" if unit == "day" else f"this {unit}"
    if count == -1:
        return "yesterday" if unit == "day" else f"last {unit}"
    if count == 1:
        return "tomorrow" if unit == "day" else f"next {unit}"
    span = f"{abs(count)} {unit}s"
    return f"{span} ago" if count < 0 else f"in {span}"


def format_relative_time(moment: datetime, now: Optional[datetime] = None) -> str:
    """
    Coarse relative time: 'yesterday', '2 days ago', 'in 3 months'.

    Days under a week, weeks under a month (30 days), months under a
    year (365 days), then years. Naive datetimes are read as UTC.
    """
    now = as_utc(now) if now is not None else utc_now()
    days = _round_half_up((as_utc(moment) - now).total_seconds() / 86400)

    if abs(days) < 7:
        return _relative(days, "day")
    if abs(days) < 30:
        return _relative(_round_half_up(days / 7), "week")
    if abs(days) < 365:
        return _relative(_round_half_up(days / 30), "month")
    return _relative(_round_half_up(days / 365), "year")
