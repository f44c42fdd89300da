"""Formatting helpers for prices and dates shown to travellers."""
import re
import logging
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def format_price(amount: Optional[Union[Decimal, int, float, str]], symbol: str = "$") -> str:
    """
    Format an amount for display, e.g. ``$1,234.50``.

    Rounding only happens here; stored amounts keep full precision.
    """
    if amount is None or amount == "":
        return ""
    value = Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_amount(amount: Optional[Decimal]) -> Optional[str]:
    """Two-decimal string for JSON payloads (no currency symbol)."""
    if amount is None:
        return None
    return str(Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP))


def format_date(value: Optional[Union[str, date, datetime]]) -> Optional[str]:
    """
    Format a travel date to YYYY-MM-DD.

    Handles multiple input formats:
    - date / datetime objects
    - YYYY-MM-DD (already correct)
    - DD-MM-YYYY, DD/MM/YYYY, YYYY/MM/DD
    - ISO datetimes

    Returns:
        Date string in YYYY-MM-DD format or None if it cannot be parsed
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    if re.match(r'^\d{4}-\d{2}-\d{2}$', text):
        try:
            datetime.strptime(text, '%Y-%m-%d')
        except ValueError:
            return None
        return text

    for fmt in ['%d-%m-%Y', '%d/%m/%Y', '%Y/%m/%d']:
        try:
            return datetime.strptime(text, fmt).strftime('%Y-%m-%d')
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).strftime('%Y-%m-%d')
    except ValueError:
        logger.debug(f"Unparseable travel date: {text}")
        return None


def format_time(value: Optional[datetime]) -> str:
    """Clock time of a departure or arrival, e.g. ``07:05``."""
    if value is None:
        return ""
    return value.strftime('%H:%M')


def format_datetime(value: Optional[datetime]) -> str:
    """Readable timestamp, e.g. ``12 Mar 2025, 07:05``."""
    if value is None:
        return ""
    return value.strftime('%d %b %Y, %H:%M')
