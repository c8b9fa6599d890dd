"""Calendar date helpers.

Entry dates are plain calendar dates. They are always parsed with
``date.fromisoformat`` and never through a datetime, so a date never shifts
by a day because of a timezone offset.
"""

import datetime as dt
import re
from calendar import monthrange
from typing import Optional, Union

# A calendar date, optionally followed by the time part of an ISO timestamp
DATE_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2})(?:T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)


def parse_entry_date(value: Union[str, dt.date, None]) -> Optional[dt.date]:
    """Parse a ``YYYY-MM-DD`` value into a calendar date.

    Args:
        value: ISO date string, date object or None

    Returns:
        The date, or None if the value is missing or malformed

    Example:
        >>> parse_entry_date("2025-06-01")
        datetime.date(2025, 6, 1)
        >>> parse_entry_date("06/01/2025") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value

    text = str(value).strip()
    if not text:
        return None

    match = DATE_PATTERN.match(text)
    if not match:
        return None

    try:
        return dt.date.fromisoformat(match.group(1))
    except ValueError:
        return None


def subtract_months(day: dt.date, months: int) -> dt.date:
    """Move a date back by whole calendar months.

    The day of month is kept where possible and clamped to the last day of
    the target month otherwise (March 31 minus one month is February 28,
    or February 29 in a leap year).

    Args:
        day: Starting date
        months: Number of months to go back (must be >= 0)

    Returns:
        The shifted date

    Example:
        >>> subtract_months(dt.date(2025, 3, 31), 1)
        datetime.date(2025, 2, 28)
        >>> subtract_months(dt.date(2025, 1, 15), 1)
        datetime.date(2024, 12, 15)
    """
    if months < 0:
        raise ValueError(f"months must be >= 0, got {months}")

    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    _, last_day = monthrange(year, month)
    return dt.date(year, month, min(day.day, last_day))
