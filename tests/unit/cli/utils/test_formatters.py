"""Unit tests for CLI output formatters."""

from decimal import Decimal

import click

from contractor_tracker.aggregators.entry_aggregator import aggregate
from contractor_tracker.calculators.invoice_calculator import build_invoice
from contractor_tracker.cli.utils.formatters import (
    format_entries,
    format_entry_detail,
    format_error,
    format_info,
    format_invoice,
    format_report_issues,
    format_success,
    format_table,
    format_totals,
    format_warning,
)
from contractor_tracker.models.entry import Entry
from contractor_tracker.models.invoice import RateTable
from contractor_tracker.validators.validation_report import ValidationReport


class TestFormatters:
    """Test suite for CLI output formatters."""

    def test_message_formatters(self):
        """Test that each formatter keeps the message behind its symbol."""
        assert click.unstyle(format_success("Saved")) == "✓ Saved"
        assert click.unstyle(format_error("Failed")) == "✗ Failed"
        assert click.unstyle(format_warning("Careful")) == "⚠ Careful"
        assert click.unstyle(format_info("Note")) == "ℹ Note"

    def test_format_table_with_headers_and_rows(self):
        """Test table formatting with headers and data."""
        result = format_table(["Name", "Hours"], [["Alice", "8.00"], ["Bob", "10.50"]])
        lines = result.splitlines()

        assert lines[0] == "+-------+-------+"
        assert lines[1] == "| Name  | Hours |"
        assert lines[3] == "| Alice | 8.00  |"
        assert len(lines) == 6

    def test_format_table_truncates(self):
        """Test long cells are cut to the maximum width."""
        result = format_table(["Notes"], [["x" * 50]], max_width=10)
        assert "| xxxxxxxxxx |" in result

    def test_format_table_empty(self):
        """Test empty input."""
        assert format_table([], []) == ""
        assert len(format_table(["A"], []).splitlines()) == 3


class TestDomainFormatters:
    """Test formatters for entries, totals and invoices."""

    def test_format_entries(self, sample_entries):
        """Test one table row per entry."""
        result = format_entries(sample_entries)

        assert str(sample_entries[0].id) in result
        assert "Sta 8.00" in result
        assert "Ove 2.00" in result
        assert "20.0 mi" in result

    def test_format_entry_detail(self):
        """Test every set field is listed."""
        entry = Entry.create(
            date="2025-06-01",
            project_name="Acme",
            weekend_hours="3",
            per_diem="45",
            other_expense="12.5",
            expense_category="Fuel",
            expense_description="Diesel",
            notes="Long day",
        )
        lines = format_entry_detail(entry).splitlines()

        assert lines[0] == f"Entry {entry.id}"
        assert "  Date: 2025-06-01" in lines
        assert "  Weekend Hours: 3.00" in lines
        assert "  Per Diem: $45.00" in lines
        assert "  Other Expense: $12.50" in lines
        assert "  Expense Category: Fuel" in lines
        assert "  Notes: Long day" in lines
        assert lines[-1].startswith("  Added ")

    def test_format_totals(self, sample_entries):
        """Test totals table rows."""
        totals = aggregate(sample_entries, rate_table=RateTable(standard_rate="50"))
        result = format_totals(totals)

        assert "Mileage Payment (@ $0.725/mi)" in result
        assert "$21.75" in result
        assert "Total Earnings" in result
        assert "$400.00" in result

    def test_format_invoice(self, sample_entries):
        """Test invoice lines and totals."""
        result = build_invoice(sample_entries, RateTable(standard_rate="50"))
        text = format_invoice(result)

        assert "Standard Labor" in text
        assert "$50.00/hr" in text
        assert "Labor Subtotal" in text
        assert "TOTAL DUE" in text
        assert result.grand_total == Decimal("421.75")
        assert "$421.75" in text

    def test_format_report_issues(self):
        """Test one line per issue, in order."""
        report = ValidationReport()
        report.add_error("date", "Date is required", None)
        report.add_warning("due_date", "Due date is before the invoice date", None)
        report.add_info("notes", "Empty", None)

        lines = [click.unstyle(line) for line in format_report_issues(report)]

        assert lines == [
            "✗ [ERROR] date: Date is required",
            "⚠ [WARNING] due_date: Due date is before the invoice date",
            "ℹ [INFO] notes: Empty",
        ]
