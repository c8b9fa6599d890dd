"""PDF report of entries and their totals.

The report has a header, a contractor block, a summary block taken from
precomputed Totals and one detail block per entry, sorted by date. The
writer only formats; it never recomputes totals.
"""

import datetime as dt
import logging
from typing import List, Optional, Sequence

from contractor_tracker.aggregators.entry_aggregator import Totals
from contractor_tracker.models.entry import Entry, HourCategory
from contractor_tracker.models.profile import ContractorProfile
from contractor_tracker.utils.logging_utils import LogContext, log_function_call
from contractor_tracker.utils.number_utils import (
    format_currency,
    format_hours,
    format_miles,
    round_money,
)
from contractor_tracker.writers.pdf_document import LINE_HEIGHT, PdfDocument

logger = logging.getLogger(__name__)

REPORT_TITLE = "CONTRACTOR REPORT"
MAX_NOTE_LENGTH = 60

# Height reserved before starting an entry block so a date heading is
# never left alone at the bottom of a page
ENTRY_HEADING_SPACE = LINE_HEIGHT * 3


def _hours_line(entry: Entry) -> Optional[str]:
    parts = [
        f"{category.label} {format_hours(entry.hours(category))}"
        for category in HourCategory
        if entry.hours(category) > 0
    ]
    if not parts:
        return None
    return "Hours: " + ", ".join(parts)


def _shorten(text: str, limit: int = MAX_NOTE_LENGTH) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class PdfReportWriter:
    """Render a contractor report as PDF bytes.

    Attributes:
        page_count: Number of pages in the last rendered document

    Example:
        >>> totals = aggregate(entries)
        >>> writer = PdfReportWriter(entries, profile, totals)
        >>> pdf = writer.render()
        >>> pdf[:4]
        b'%PDF'
    """

    def __init__(
        self,
        entries: Sequence[Entry],
        profile: Optional[ContractorProfile],
        totals: Totals,
        generated_on: Optional[dt.date] = None,
        subtitle: Optional[str] = None,
    ):
        """
        Initialize the writer.

        Args:
            entries: Filtered entries to list in the report
            profile: Contractor details (may be empty)
            totals: Totals of exactly these entries
            generated_on: Date printed in the header (default today)
            subtitle: Optional line under the title, e.g. the active filter
        """
        self.entries = sorted(entries, key=lambda e: e.date)
        self.profile = profile or ContractorProfile()
        self.totals = totals
        self.generated_on = generated_on or dt.date.today()
        self.subtitle = subtitle
        self.page_count = 0

    @log_function_call
    def render(self) -> bytes:
        """Draw the full report and return the PDF bytes."""
        with LogContext(document="report", entry_count=len(self.entries)):
            doc = PdfDocument(title="Contractor Report")

            self._draw_header(doc)
            self._draw_contractor(doc)
            self._draw_summary(doc)
            self._draw_entries(doc)

            data = doc.finish()
            self.page_count = doc.page_count

            logger.info(
                f"Rendered report: {len(self.entries)} entries, "
                f"{self.page_count} page(s)"
            )
            return data

    def _draw_header(self, doc: PdfDocument) -> None:
        doc.set_font(20, bold=True)
        doc.text(REPORT_TITLE, line_height=26)
        doc.set_font(10)
        doc.text(f"Generated: {self.generated_on.isoformat()}")
        if self.subtitle:
            doc.text(self.subtitle)
        doc.rule()

    def _draw_contractor(self, doc: PdfDocument) -> None:
        lines = self._contractor_lines()
        if not lines:
            return

        doc.set_font(12, bold=True)
        doc.text("CONTRACTOR INFORMATION", line_height=18)
        doc.set_font(10)
        for line in lines:
            doc.text(line)
        doc.space()

    def _contractor_lines(self) -> List[str]:
        profile = self.profile
        lines = []
        if profile.name:
            lines.append(f"Name: {profile.name}")
        if profile.business:
            lines.append(f"Business: {profile.business}")
        if profile.address:
            lines.append(f"Address: {profile.address}")
        if profile.email:
            lines.append(f"Email: {profile.email}")
        if profile.phone:
            lines.append(f"Phone: {profile.phone}")
        return lines

    def _draw_summary(self, doc: PdfDocument) -> None:
        totals = self.totals

        doc.set_font(12, bold=True)
        doc.text("SUMMARY", line_height=18)
        doc.set_font(10)

        doc.text_pair("Entries", str(totals.entry_count))
        for category in HourCategory:
            doc.text_pair(
                f"{category.label} Hours", format_hours(totals.hours_for(category))
            )
        doc.text_pair("Total Hours", format_hours(totals.total_hours))
        doc.space(4)

        doc.text_pair("Total Mileage", format_miles(totals.mileage))
        doc.text_pair(
            f"Mileage Payment (@ {format_currency(totals.mileage_rate, 3)}/mi)",
            format_currency(round_money(totals.mileage_payment)),
        )
        doc.text_pair("Per Diem", format_currency(round_money(totals.per_diem)))
        doc.text_pair(
            "Other Expenses", format_currency(round_money(totals.other_expense))
        )

        doc.set_font(10, bold=True)
        doc.text_pair(
            "TOTAL REIMBURSEMENT",
            format_currency(round_money(totals.total_reimbursement)),
        )
        if totals.total_earnings is not None:
            doc.text_pair(
                "TOTAL EARNINGS", format_currency(round_money(totals.total_earnings))
            )
        doc.set_font(10)
        doc.rule()

    def _draw_entries(self, doc: PdfDocument) -> None:
        doc.set_font(12, bold=True)
        doc.text("DETAILED ENTRIES", line_height=18)

        if not self.entries:
            doc.set_font(10)
            doc.text("No entries for the selected period.")
            return

        for entry in self.entries:
            self._draw_entry(doc, entry)

    def _draw_entry(self, doc: PdfDocument, entry: Entry) -> None:
        doc.ensure_space(ENTRY_HEADING_SPACE)

        heading = entry.date.isoformat()
        if entry.project_name:
            heading += f"  |  {entry.project_name}"
        doc.set_font(11, bold=True)
        doc.text(heading)

        doc.set_font(9)
        indent = 10

        hours = _hours_line(entry)
        if hours:
            doc.text(hours, indent=indent)

        mileage = entry.amount("mileage")
        if mileage > 0:
            doc.text(f"Mileage: {format_miles(mileage)}", indent=indent)

        per_diem = entry.amount("per_diem")
        if per_diem > 0:
            doc.text(f"Per Diem: {format_currency(per_diem)}", indent=indent)

        other = entry.amount("other_expense")
        if other > 0:
            line = f"Other Expense: {format_currency(other)}"
            if entry.expense_category:
                line += f" ({entry.expense_category})"
            if entry.expense_description:
                line += f" - {entry.expense_description}"
            doc.text(_shorten(line, 100), indent=indent)

        if entry.notes:
            doc.text(f"Notes: {_shorten(entry.notes)}", indent=indent)

        if entry.receipt_image:
            doc.text("Receipt attached", indent=indent)

        doc.set_font(8)
        added = entry.timestamp.astimezone().strftime("%Y-%m-%d %H:%M")
        doc.text(f"Added {added}", indent=indent)
        doc.space(4)


def render_report(
    entries: Sequence[Entry],
    profile: Optional[ContractorProfile],
    totals: Totals,
) -> bytes:
    """Render a contractor report (see PdfReportWriter)."""
    return PdfReportWriter(entries, profile, totals).render()
