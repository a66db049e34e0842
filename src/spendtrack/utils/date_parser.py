"""Parsing of filter and statement dates.

Dates are either ISO calendar dates (``YYYY-MM-DD``) or one of a handful of
relative phrases anchored on today. Anything else is rejected rather than
guessed, so a filter never silently depends on the day it runs.
"""

import re
from datetime import date, timedelta
from typing import Callable, Optional

from dateutil.relativedelta import relativedelta

ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

RELATIVE_DATES: dict[str, Callable[[date], date]] = {
    "today": lambda today: today,
    "yesterday": lambda today: today - timedelta(days=1),
    "this month": lambda today: today.replace(day=1),
    "last month": lambda today: today.replace(day=1) - relativedelta(months=1),
    "this year": lambda today: today.replace(month=1, day=1),
    "last year": lambda today: today.replace(month=1, day=1) - relativedelta(years=1),
}


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse an ISO date or a relative phrase.

    Args:
        date_str: "YYYY-MM-DD", or one of "today", "yesterday", "this month",
            "last month", "this year", "last year" (case-insensitive)
        today: Anchor for relative phrases; the current date when omitted

    Returns:
        Date object

    Raises:
        ValueError: If the string is neither a valid ISO date nor a known phrase
    """
    value = date_str.strip()
    phrase = " ".join(value.lower().split())
    if phrase in RELATIVE_DATES:
        return RELATIVE_DATES[phrase](today or date.today())

    if not ISO_DATE.match(value):
        raise ValueError(f"Could not parse date '{date_str}': expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e
