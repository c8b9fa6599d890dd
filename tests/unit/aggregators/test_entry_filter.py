"""Unit tests for entry filtering."""

import datetime as dt

import pytest

from contractor_tracker.aggregators.entry_filter import (
    DateFilter,
    DateRange,
    date_lower_bound,
    filter_entries,
    project_names,
)
from contractor_tracker.models.entry import Entry


def _entry(day: str, project: str = None) -> Entry:
    return Entry.create(date=day, project_name=project, standard_hours="1")


@pytest.fixture
def entries():
    """Entries spread over two months and two projects."""
    return [
        _entry("2025-04-30", "Acme"),
        _entry("2025-05-15", "Globex"),
        _entry("2025-06-07", "Acme"),
        _entry("2025-06-08"),
        _entry("2025-06-15", "acme"),
    ]


def _dates(entries):
    return [e.date.isoformat() for e in entries]


class TestDateLowerBound:
    """Test date_lower_bound."""

    def test_today(self, today):
        """Test the today selector starts today."""
        assert date_lower_bound(DateFilter.TODAY, today) == today

    def test_week(self, today):
        """Test the week selector reaches back seven days."""
        assert date_lower_bound(DateFilter.WEEK, today) == dt.date(2025, 6, 8)

    def test_month(self, today):
        """Test the month selector reaches back one calendar month."""
        assert date_lower_bound(DateFilter.MONTH, today) == dt.date(2025, 5, 15)

    def test_month_clamped(self):
        """Test the month bound clamps to the end of a shorter month."""
        assert date_lower_bound(DateFilter.MONTH, dt.date(2024, 3, 31)) == dt.date(
            2024, 2, 29
        )

    @pytest.mark.parametrize("selector", [DateFilter.ALL, DateFilter.CUSTOM])
    def test_no_bound(self, selector, today):
        """Test selectors without a relative bound."""
        assert date_lower_bound(selector, today) is None


class TestFilterEntries:
    """Test filter_entries."""

    def test_all(self, entries, today):
        """Test the all selector keeps everything in order."""
        assert filter_entries(entries, "all", today=today) == entries

    def test_today(self, entries, today):
        """Test the today selector."""
        result = filter_entries(entries, DateFilter.TODAY, today=today)
        assert _dates(result) == ["2025-06-15"]

    def test_week_inclusive(self, entries, today):
        """Test the week lower bound is inclusive."""
        result = filter_entries(entries, "week", today=today)
        assert _dates(result) == ["2025-06-08", "2025-06-15"]

    def test_month(self, entries, today):
        """Test the month selector."""
        result = filter_entries(entries, "month", today=today)
        assert _dates(result) == [
            "2025-05-15",
            "2025-06-07",
            "2025-06-08",
            "2025-06-15",
        ]

    def test_custom_inclusive(self, entries, today):
        """Test both custom bounds are inclusive."""
        result = filter_entries(
            entries,
            "custom",
            custom_range=DateRange.from_strings("2025-05-15", "2025-06-07"),
            today=today,
        )
        assert _dates(result) == ["2025-05-15", "2025-06-07"]

    def test_custom_incomplete_shows_all(self, entries, today):
        """Test a custom range with a missing bound admits every date."""
        result = filter_entries(
            entries,
            "custom",
            custom_range=DateRange.from_strings("2025-06-01", ""),
            today=today,
        )
        assert result == entries

    def test_custom_without_range(self, entries, today):
        """Test the custom selector without a range admits every date."""
        assert filter_entries(entries, "custom", today=today) == entries

    def test_project_exact_match(self, entries, today):
        """Test the project filter is exact and case-sensitive."""
        result = filter_entries(entries, project_name="Acme", today=today)
        assert _dates(result) == ["2025-04-30", "2025-06-07"]

    def test_date_and_project_combined(self, entries, today):
        """Test date and project constraints apply together."""
        result = filter_entries(entries, "month", project_name="Acme", today=today)
        assert _dates(result) == ["2025-06-07"]

    def test_input_not_modified(self, entries, today):
        """Test filtering returns a new list."""
        original = list(entries)
        result = filter_entries(entries, "today", today=today)
        assert entries == original
        assert result is not entries

    def test_unknown_selector(self, entries):
        """Test an unknown selector raises ValueError."""
        with pytest.raises(ValueError):
            filter_entries(entries, "fortnight")


class TestDateRange:
    """Test DateRange."""

    def test_malformed_bound_missing(self):
        """Test a malformed bound counts as missing."""
        date_range = DateRange.from_strings("2025-13-01", "2025-06-30")
        assert date_range.start is None
        assert not date_range.is_complete


class TestProjectNames:
    """Test project_names."""

    def test_first_seen_order(self, entries):
        """Test distinct project names in first-seen order."""
        assert project_names(entries) == ["Acme", "Globex", "acme"]
