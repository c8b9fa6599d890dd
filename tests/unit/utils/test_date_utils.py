"""Unit tests for calendar date helpers."""

import datetime as dt

import pytest

from contractor_tracker.utils.date_utils import parse_entry_date, subtract_months


class TestParseEntryDate:
    """Test calendar date parsing."""

    def test_iso_string(self):
        """Test a YYYY-MM-DD string is parsed as that calendar day."""
        assert parse_entry_date("2025-06-01") == dt.date(2025, 6, 1)

    def test_date_and_datetime(self):
        """Test date objects pass through and datetimes lose their time."""
        assert parse_entry_date(dt.date(2025, 6, 1)) == dt.date(2025, 6, 1)
        assert parse_entry_date(dt.datetime(2025, 6, 1, 23, 59)) == dt.date(
            2025, 6, 1
        )

    def test_iso_timestamp_keeps_calendar_day(self):
        """Test a full timestamp is not shifted by its offset."""
        assert parse_entry_date("2025-06-01T23:30:00-07:00") == dt.date(2025, 6, 1)

    @pytest.mark.parametrize(
        "value",
        [None, "", "06/01/2025", "2025-13-01", "soon", "2025-06-01junk", "20250601"],
    )
    def test_malformed_is_none(self, value):
        """Test missing or malformed values return None."""
        assert parse_entry_date(value) is None


class TestSubtractMonths:
    """Test calendar month subtraction."""

    def test_same_day_previous_month(self):
        """Test the day of month is kept when it exists."""
        assert subtract_months(dt.date(2025, 6, 15), 1) == dt.date(2025, 5, 15)

    def test_crosses_year_boundary(self):
        """Test January minus one month is December of the previous year."""
        assert subtract_months(dt.date(2025, 1, 15), 1) == dt.date(2024, 12, 15)

    def test_clamps_to_shorter_month(self):
        """Test March 31 minus one month is the last day of February."""
        assert subtract_months(dt.date(2025, 3, 31), 1) == dt.date(2025, 2, 28)
        assert subtract_months(dt.date(2024, 3, 31), 1) == dt.date(2024, 2, 29)

    def test_zero_months(self):
        """Test subtracting zero months is the identity."""
        assert subtract_months(dt.date(2025, 3, 31), 0) == dt.date(2025, 3, 31)

    def test_negative_months_rejected(self):
        """Test negative month counts raise ValueError."""
        with pytest.raises(ValueError):
            subtract_months(dt.date(2025, 3, 31), -1)
