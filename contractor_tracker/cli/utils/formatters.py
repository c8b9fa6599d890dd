"""Output formatting utilities for CLI."""

from typing import List, Sequence

import click

from contractor_tracker.aggregators.entry_aggregator import Totals
from contractor_tracker.calculators.invoice_calculator import InvoiceResult
from contractor_tracker.models.entry import Entry, HourCategory
from contractor_tracker.utils.number_utils import (
    format_currency,
    format_hours,
    format_miles,
    round_money,
)
from contractor_tracker.validators.validation_report import (
    ValidationReport,
    ValidationSeverity,
)


def format_success(message: str) -> str:
    """Format a success message with green color.

    Args:
        message: The success message to format

    Returns:
        Formatted success message with color
    """
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return click.style(f"ℹ {message}", fg="blue")


def format_table(headers: List[str], rows: List[List[str]], max_width: int = 40) -> str:
    """Format data as an ASCII table.

    Args:
        headers: Column headers
        rows: Data rows (each row is a list of cell values)
        max_width: Maximum width of a column; longer cells are truncated

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(col_widths)]):
            col_widths[i] = max(col_widths[i], len(str(cell)))
    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    def render_row(cells: Sequence) -> str:
        formatted = [
            f" {str(cell)[: col_widths[i]]:<{col_widths[i]}} "
            for i, cell in enumerate(cells[: len(col_widths)])
        ]
        return "|" + "|".join(formatted) + "|"

    lines = [separator, render_row(headers), separator]
    if rows:
        lines.extend(render_row(row) for row in rows)
        lines.append(separator)

    return "\n".join(lines)


def _hours_summary(entry: Entry) -> str:
    parts = [
        f"{category.label[:3]} {format_hours(entry.hours(category))}"
        for category in HourCategory
        if entry.hours(category) > 0
    ]
    return ", ".join(parts)


def format_entries(entries: Sequence[Entry]) -> str:
    """Entry list as a table with one row per entry."""
    headers = ["ID", "Date", "Project", "Hours", "Miles", "Expenses", "Added"]
    rows = []
    for entry in entries:
        expenses = entry.amount("per_diem") + entry.amount("other_expense")
        rows.append(
            [
                str(entry.id),
                entry.date.isoformat(),
                entry.project_name or "",
                _hours_summary(entry),
                format_miles(entry.amount("mileage")),
                format_currency(expenses),
                entry.timestamp.astimezone().strftime("%Y-%m-%d %H:%M"),
            ]
        )
    return format_table(headers, rows)


def format_entry_detail(entry: Entry) -> str:
    """All set fields of one entry, one per line."""
    lines = [f"Entry {entry.id}", f"  Date: {entry.date.isoformat()}"]
    if entry.project_name:
        lines.append(f"  Project: {entry.project_name}")
    for category in HourCategory:
        hours = entry.hours(category)
        if hours > 0:
            lines.append(f"  {category.label} Hours: {format_hours(hours)}")
    if entry.mileage is not None:
        lines.append(f"  Mileage: {format_miles(entry.mileage)}")
    if entry.per_diem is not None:
        lines.append(f"  Per Diem: {format_currency(entry.per_diem)}")
    if entry.other_expense is not None:
        lines.append(f"  Other Expense: {format_currency(entry.other_expense)}")
    if entry.expense_category:
        lines.append(f"  Expense Category: {entry.expense_category}")
    if entry.expense_description:
        lines.append(f"  Expense Description: {entry.expense_description}")
    if entry.notes:
        lines.append(f"  Notes: {entry.notes}")
    if entry.receipt_image:
        lines.append("  Receipt: attached")
    added = entry.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    lines.append(f"  Added {added}")
    return "\n".join(lines)


def format_totals(totals: Totals) -> str:
    """Aggregated totals as a two-column table."""
    rows = [["Entries", str(totals.entry_count)]]
    rows.extend(
        [f"{category.label} Hours", format_hours(totals.hours_for(category))]
        for category in HourCategory
    )
    rows.extend(
        [
            ["Total Hours", format_hours(totals.total_hours)],
            ["Mileage", format_miles(totals.mileage)],
            [
                f"Mileage Payment (@ {format_currency(totals.mileage_rate, 3)}/mi)",
                format_currency(round_money(totals.mileage_payment)),
            ],
            ["Per Diem", format_currency(round_money(totals.per_diem))],
            ["Other Expenses", format_currency(round_money(totals.other_expense))],
            [
                "Total Reimbursement",
                format_currency(round_money(totals.total_reimbursement)),
            ],
        ]
    )
    if totals.total_earnings is not None:
        rows.append(
            ["Total Earnings", format_currency(round_money(totals.total_earnings))]
        )
    return format_table(["Item", "Total"], rows, max_width=60)


def format_invoice(result: InvoiceResult) -> str:
    """Invoice line items followed by the subtotals and grand total."""
    rows = [
        [
            item.description,
            item.quantity_display,
            item.rate_display,
            item.amount_display,
        ]
        for item in result.line_items
    ]
    rows.append(["Labor Subtotal", "", "", format_currency(result.labor_total)])
    rows.append(
        ["Reimbursements", "", "", format_currency(result.reimbursements_total)]
    )
    rows.append(["TOTAL DUE", "", "", format_currency(result.grand_total)])
    return format_table(["Description", "Qty", "Rate", "Amount"], rows)


def format_report_issues(report: ValidationReport) -> List[str]:
    """One colored line per validation issue."""
    lines = []
    for issue in report.issues:
        if issue.severity == ValidationSeverity.ERROR:
            lines.append(format_error(str(issue)))
        elif issue.severity == ValidationSeverity.WARNING:
            lines.append(format_warning(str(issue)))
        else:
            lines.append(format_info(str(issue)))
    return lines
