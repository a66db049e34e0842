"""Calendar period helpers shared by the analytics operations.

A period key is ``YYYY-MM`` for months and the ISO date of the Monday for
weeks. Keys sort chronologically as plain strings.
"""

from datetime import date, timedelta
from typing import Iterator

from dateutil.relativedelta import relativedelta


def month_key(value: date) -> str:
    """Return the month period key for a date."""
    return value.strftime("%Y-%m")


def month_start(key: str) -> date:
    """Return the first day of the month named by a period key.

    Raises:
        ValueError: If the key is not ``YYYY-MM``
    """
    parts = key.split("-")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Period key '{key}' is not in YYYY-MM form")
    year, month = int(parts[0]), int(parts[1])
    return date(year, month, 1)


def previous_month_key(key: str) -> str:
    return month_key(month_start(key) - relativedelta(months=1))


def iter_month_keys(first: str, last: str) -> Iterator[str]:
    """Yield every month key from first to last inclusive."""
    current = month_start(first)
    end = month_start(last)
    while current <= end:
        yield month_key(current)
        current += relativedelta(months=1)


def month_grid(dates: list[date]) -> list[str]:
    """Contiguous month keys spanning the earliest to the latest date."""
    if not dates:
        return []
    return list(iter_month_keys(month_key(min(dates)), month_key(max(dates))))


def week_start(value: date) -> date:
    """Monday of the week containing the date."""
    return value - timedelta(days=value.weekday())


def quarter_bounds(value: date) -> tuple[date, date]:
    """First and last day of the calendar quarter containing the date."""
    first_month = 3 * ((value.month - 1) // 3) + 1
    start = date(value.year, first_month, 1)
    end = start + relativedelta(months=3) - timedelta(days=1)
    return start, end


def quarter_label(value: date) -> str:
    return f"{value.year}-Q{(value.month - 1) // 3 + 1}"


def week_starts(start: date, end: date) -> list[date]:
    """Mondays of every week overlapping the inclusive date range."""
    weeks = []
    current = week_start(start)
    while current <= end:
        weeks.append(current)
        current += timedelta(days=7)
    return weeks
