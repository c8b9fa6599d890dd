"""Tests for the PDF report writer."""

import datetime as dt

from contractor_tracker.aggregators.entry_aggregator import aggregate
from contractor_tracker.models.entry import Entry
from contractor_tracker.models.invoice import RateTable
from contractor_tracker.writers.pdf_report_writer import (
    REPORT_TITLE,
    PdfReportWriter,
    render_report,
)


class TestPdfReportWriter:
    """Test PdfReportWriter."""

    def test_renders_pdf(self, sample_entries, sample_profile):
        """Test the output is a one-page PDF."""
        writer = PdfReportWriter(
            sample_entries, sample_profile, aggregate(sample_entries)
        )
        data = writer.render()

        assert data.startswith(b"%PDF")
        assert writer.page_count == 1

    def test_render_report_helper(self, sample_entries):
        """Test the module-level helper renders without a profile."""
        data = render_report(sample_entries, None, aggregate(sample_entries))
        assert data.startswith(b"%PDF")

    def test_content(self, drawn_text, sample_entries, sample_profile):
        """Test header, contractor, summary and entry blocks."""
        sample_entries[1].notes = "Crew delayed by weather"
        writer = PdfReportWriter(
            sample_entries,
            sample_profile,
            aggregate(sample_entries),
            generated_on=dt.date(2025, 6, 15),
            subtitle="Project: Acme",
        )
        writer.render()
        text = drawn_text()

        assert REPORT_TITLE in text
        assert "Generated: 2025-06-15" in text
        assert "Project: Acme" in text
        assert "Name: John Doe" in text
        assert "Business: Doe Field Services LLC" in text
        assert "Total Hours" in text
        assert "10.00" in text
        assert "Mileage Payment (@ $0.725/mi)" in text
        assert "$21.75" in text
        assert "TOTAL REIMBURSEMENT" in text
        assert "TOTAL EARNINGS" not in text
        assert "2025-06-01  |  Acme" in text
        assert "Hours: Standard 8.00" in text
        assert "Mileage: 20.0 mi" in text
        assert "Notes: Crew delayed by weather" in text

    def test_entries_sorted_by_date(self, drawn_text, sample_entries):
        """Test entry blocks are ordered by date."""
        PdfReportWriter(
            list(reversed(sample_entries)), None, aggregate(sample_entries)
        ).render()
        headings = [t for t in drawn_text() if "  |  " in t]

        assert headings == ["2025-06-01  |  Acme", "2025-06-02  |  Globex"]

    def test_earnings_shown_with_rates(self, drawn_text, sample_entries):
        """Test total earnings appear when totals carry them."""
        totals = aggregate(sample_entries, rate_table=RateTable(standard_rate="50"))
        PdfReportWriter(sample_entries, None, totals).render()
        text = drawn_text()

        assert "TOTAL EARNINGS" in text
        assert "$400.00" in text

    def test_expense_details(self, drawn_text):
        """Test expense, receipt and long notes are summarized."""
        entry = Entry.create(
            date="2025-06-03",
            other_expense="12.50",
            expense_category="Fuel",
            expense_description="Diesel",
            per_diem="45",
            notes="x" * 100,
            receipt_image="data:image/png;base64,AAAA",
        )
        PdfReportWriter([entry], None, aggregate([entry])).render()
        text = drawn_text()

        assert "Per Diem: $45.00" in text
        assert "Other Expense: $12.50 (Fuel) - Diesel" in text
        assert "Notes: " + "x" * 60 + "..." in text
        assert "Receipt attached" in text

    def test_no_entries(self, drawn_text):
        """Test an empty report says so."""
        PdfReportWriter([], None, aggregate([])).render()
        assert "No entries for the selected period." in drawn_text()

    def test_many_entries_span_pages(self):
        """Test long reports continue on further pages."""
        entries = [
            Entry.create(
                date=(dt.date(2025, 1, 1) + dt.timedelta(days=i)).isoformat(),
                project_name="Acme",
                standard_hours="8",
                mileage="12",
                notes="Routine inspection",
            )
            for i in range(60)
        ]
        writer = PdfReportWriter(entries, None, aggregate(entries))
        data = writer.render()

        assert data.startswith(b"%PDF")
        assert writer.page_count > 1
