"""
Display formatting for money, odds, percentages and dates.

Computation never rounds; these helpers are the only place values are cut
to cents or one decimal, just before they reach a person.

Usage:
    from backend.utils.formatters import format_currency, format_odds
    format_currency(-12.5)   # "-$12.50"
    format_odds(150)         # "+150"
"""

from datetime import date, datetime
from typing import Optional, Union

DEFAULT_DATE_FORMAT = "%b %d, %Y"
INPUT_DATE_FORMAT = "%Y-%m-%d"


def format_currency(amount: float, signed: bool = False) -> str:
    """Dollars with cents; ``signed`` adds a leading + to gains."""
    sign = "-" if amount < 0 else ("+" if signed and amount > 0 else "")
    return f"{sign}${abs(amount):,.2f}"


def format_odds(odds: Union[int, float]) -> str:
    """American odds with an explicit sign on underdog prices."""
    return f"{odds:+.0f}"


def format_percent(value: float, digits: int = 1) -> str:
    """``value`` is already a percentage (60.0 -> "60.0%")."""
    return f"{value:.{digits}f}%"


def format_probability(prob: Optional[float], digits: int = 1) -> str:
    """Probability in [0, 1] as a percentage; "-" when missing."""
    if prob is None:
        return "-"
    return format_percent(prob * 100, digits)


def format_date(value: Union[date, datetime], fmt: str = DEFAULT_DATE_FORMAT) -> str:
    return value.strftime(fmt)


def format_date_for_input(value: Union[date, datetime]) -> str:
    return value.strftime(INPUT_DATE_FORMAT)


def parse_date_from_input(text: str) -> datetime:
    """Inverse of :func:`format_date_for_input`.  Raises ValueError on junk."""
    return datetime.strptime(text.strip(), INPUT_DATE_FORMAT)
