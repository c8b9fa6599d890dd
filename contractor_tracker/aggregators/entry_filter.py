"""Entry filtering by date range and project.

This module reduces the full entry list to the visible subset for a date
selector (all, today, week, month, custom range) and an optional project.
Filtering is pure: the input list is never modified and the relative order
of entries is preserved.
"""

import datetime as dt
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

from contractor_tracker.models.entry import Entry
from contractor_tracker.utils.date_utils import parse_entry_date, subtract_months

logger = logging.getLogger(__name__)

WEEK_DAYS = 7


class DateFilter(str, Enum):
    """Date selectors offered for the entry list, reports and invoices."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DateRange:
    """Inclusive custom date range; either bound may be missing.

    Example:
        >>> DateRange.from_strings("2025-06-01", "2025-06-30").is_complete
        True
        >>> DateRange.from_strings("2025-06-01", "").is_complete
        False
    """

    start: Optional[dt.date] = None
    end: Optional[dt.date] = None

    @classmethod
    def from_strings(
        cls, start: Optional[str], end: Optional[str]
    ) -> "DateRange":
        """Build a range from ISO strings; malformed bounds count as missing."""
        return cls(start=parse_entry_date(start), end=parse_entry_date(end))

    @property
    def is_complete(self) -> bool:
        """Whether both bounds are set."""
        return self.start is not None and self.end is not None

    def contains(self, day: dt.date) -> bool:
        """Inclusive containment check; only meaningful when complete."""
        return self.start <= day <= self.end


def date_lower_bound(
    date_filter: DateFilter, today: dt.date
) -> Optional[dt.date]:
    """Earliest date admitted by a relative date selector.

    Args:
        date_filter: One of TODAY, WEEK or MONTH (others have no lower bound)
        today: The current local calendar date

    Returns:
        The earliest admitted date, or None when the selector has no bound

    Example:
        >>> date_lower_bound(DateFilter.WEEK, dt.date(2025, 6, 10))
        datetime.date(2025, 6, 3)
        >>> date_lower_bound(DateFilter.MONTH, dt.date(2025, 3, 31))
        datetime.date(2025, 2, 28)
    """
    if date_filter == DateFilter.TODAY:
        return today
    if date_filter == DateFilter.WEEK:
        return today - dt.timedelta(days=WEEK_DAYS)
    if date_filter == DateFilter.MONTH:
        return subtract_months(today, 1)
    return None


def filter_entries(
    entries: Iterable[Entry],
    date_filter: Union[DateFilter, str] = DateFilter.ALL,
    custom_range: Optional[DateRange] = None,
    project_name: Optional[str] = None,
    today: Optional[dt.date] = None,
) -> List[Entry]:
    """Reduce entries to those matching a date selector and project.

    Rules:
    - ``today``/``week``/``month``: entry date >= the selector's lower bound
    - ``custom``: start <= entry date <= end (inclusive); when either bound is
      missing the selector behaves as ``all``
    - ``all``: no date constraint
    - ``project_name`` (when not None): exact, case-sensitive match

    Args:
        entries: Entries to filter
        date_filter: Date selector (enum member or its string value)
        custom_range: Bounds used by the ``custom`` selector
        project_name: Project to keep, or None for every project
        today: Current local date (defaults to ``date.today()``)

    Returns:
        New list with the matching entries in their original order

    Raises:
        ValueError: If ``date_filter`` is not a known selector

    Example:
        >>> visible = filter_entries(entries, "week", today=dt.date(2025, 6, 10))
        >>> visible = filter_entries(entries, DateFilter.ALL, project_name="Acme")
    """
    date_filter = DateFilter(date_filter)
    today = today or dt.date.today()
    entries = list(entries)

    if date_filter == DateFilter.CUSTOM:
        if custom_range is not None and custom_range.is_complete:
            filtered = [e for e in entries if custom_range.contains(e.date)]
        else:
            logger.debug("Custom date range incomplete, showing all dates")
            filtered = entries
    else:
        lower_bound = date_lower_bound(date_filter, today)
        if lower_bound is None:
            filtered = entries
        else:
            filtered = [e for e in entries if e.date >= lower_bound]

    if project_name is not None:
        filtered = [e for e in filtered if e.project_name == project_name]

    logger.debug(
        f"Filtered {len(entries)} entries to {len(filtered)} "
        f"(date_filter={date_filter.value}, project={project_name!r})"
    )

    return filtered


def project_names(entries: Iterable[Entry]) -> List[str]:
    """Distinct non-empty project names in first-seen order."""
    names: List[str] = []
    for entry in entries:
        if entry.project_name and entry.project_name not in names:
            names.append(entry.project_name)
    return names
