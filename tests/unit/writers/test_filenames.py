"""Tests for export file names."""

import datetime as dt

from contractor_tracker.writers.filenames import (
    csv_filename,
    invoice_filename,
    report_filename,
    sanitize_filename_part,
)


class TestFilenames:
    """Test default file names."""

    def test_sanitize(self):
        """Test runs of unsafe characters collapse to one underscore."""
        assert sanitize_filename_part("Main St. / Phase 2") == "Main_St_Phase_2"
        assert sanitize_filename_part("INV-0042_a") == "INV-0042_a"

    def test_report_filename(self):
        """Test report names with and without a project."""
        day = dt.date(2025, 6, 15)
        assert report_filename(day) == "contractor_report_2025-06-15.pdf"
        assert (
            report_filename(day, "Acme Corp")
            == "contractor_report_2025-06-15_Acme_Corp.pdf"
        )

    def test_invoice_filename(self):
        """Test invoice names are sanitized."""
        assert invoice_filename("INV/0042") == "invoice_INV_0042.pdf"

    def test_csv_filename(self):
        """Test CSV export name."""
        assert csv_filename(dt.date(2025, 6, 15)) == "contractor_entries_2025-06-15.csv"
