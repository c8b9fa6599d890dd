"""PDF invoice for a 1099 contractor.

Lays out the from / bill-to blocks, invoice meta data, the line-item table
in the order the invoice builder produced it, the subtotals and grand total
and the independent-contractor tax disclaimer.
"""

import datetime as dt
import logging
from typing import List, Optional, Sequence

from reportlab.lib.units import inch

from contractor_tracker.calculators.invoice_calculator import (
    TAX_DISCLAIMER,
    InvoiceResult,
)
from contractor_tracker.models.entry import Entry
from contractor_tracker.models.invoice import InvoiceDraft
from contractor_tracker.models.profile import ContractorProfile
from contractor_tracker.utils.logging_utils import LogContext, log_function_call
from contractor_tracker.utils.number_utils import format_currency
from contractor_tracker.writers.pdf_document import LINE_HEIGHT, PdfDocument

logger = logging.getLogger(__name__)

TABLE_HEADERS = ["Description", "Qty", "Rate", "Amount"]


class PdfInvoiceWriter:
    """Render an invoice as PDF bytes.

    The invoice number falls back to a timestamp number when the draft has
    none; the number actually printed is kept in ``invoice_number``.
    """

    def __init__(
        self,
        selected_entries: Sequence[Entry],
        profile: Optional[ContractorProfile],
        draft: InvoiceDraft,
        result: InvoiceResult,
        now: Optional[dt.datetime] = None,
    ):
        self.entries = list(selected_entries)
        self.profile = profile or ContractorProfile()
        self.draft = draft
        self.result = result
        self.invoice_number = draft.effective_invoice_number(now)
        self.page_count = 0

    @log_function_call
    def render(self) -> bytes:
        """Draw the invoice and return the PDF bytes."""
        with LogContext(invoice_number=self.invoice_number):
            doc = PdfDocument(title=f"Invoice {self.invoice_number}")

            doc.set_font(24, bold=True)
            doc.text("INVOICE", line_height=32)

            self._draw_parties(doc)
            self._draw_meta(doc)
            self._draw_line_items(doc)
            self._draw_totals(doc)
            self._draw_footer(doc)

            data = doc.finish()
            self.page_count = doc.page_count

            logger.info(
                f"Rendered invoice {self.invoice_number}: "
                f"{len(self.result.line_items)} line items, "
                f"total {self.result.grand_total}"
            )
            return data

    def _from_lines(self) -> List[str]:
        profile = self.profile
        lines = []
        if profile.business:
            lines.append(profile.business)
        if profile.name:
            lines.append(profile.name)
        if profile.address:
            lines.extend(part.strip() for part in profile.address.splitlines())
        if profile.email:
            lines.append(profile.email)
        if profile.phone:
            lines.append(profile.phone)
        return lines

    def _bill_to_lines(self) -> List[str]:
        draft = self.draft
        lines = [draft.client_name or ""]
        if draft.client_address:
            lines.extend(part.strip() for part in draft.client_address.splitlines())
        if draft.client_email:
            lines.append(draft.client_email)
        return lines

    def _draw_parties(self, doc: PdfDocument) -> None:
        from_lines = self._from_lines()
        bill_to_lines = self._bill_to_lines()
        bill_to_x = doc.left + doc.content_width / 2

        doc.set_font(11, bold=True)
        doc.ensure_space(LINE_HEIGHT * (1 + max(len(from_lines), len(bill_to_lines))))
        doc.canvas.drawString(doc.left, doc.y, "From:")
        doc.canvas.drawString(bill_to_x, doc.y, "Bill To:")
        doc.y -= LINE_HEIGHT

        doc.set_font(10)
        for index in range(max(len(from_lines), len(bill_to_lines))):
            if index < len(from_lines):
                doc.canvas.drawString(doc.left, doc.y, from_lines[index])
            if index < len(bill_to_lines):
                doc.canvas.drawString(bill_to_x, doc.y, bill_to_lines[index])
            doc.y -= LINE_HEIGHT
        doc.space()

    def _draw_meta(self, doc: PdfDocument) -> None:
        draft = self.draft
        result = self.result

        doc.text(f"Invoice #: {self.invoice_number}")
        doc.text(f"Invoice Date: {draft.invoice_date.isoformat()}")
        if draft.due_date:
            doc.text(f"Due Date: {draft.due_date.isoformat()}")
        if result.period_start and result.period_end:
            doc.text(
                f"Period: {result.period_start.isoformat()} to "
                f"{result.period_end.isoformat()}"
            )
        doc.text(f"Entries: {len(self.entries)}")
        doc.space()

    def _table_positions(self, doc: PdfDocument) -> List[float]:
        return [doc.left, doc.right - 3.2 * inch, doc.right - 1.6 * inch, doc.right]

    def _draw_line_items(self, doc: PdfDocument) -> None:
        positions = self._table_positions(doc)

        doc.set_font(10, bold=True)
        doc.columns(TABLE_HEADERS, positions)
        doc.rule(gap=4)

        doc.set_font(10)
        for item in self.result.line_items:
            doc.columns(
                [
                    item.description,
                    item.quantity_display,
                    item.rate_display,
                    item.amount_display,
                ],
                positions,
            )
        doc.rule(gap=4)

    def _draw_totals(self, doc: PdfDocument) -> None:
        result = self.result
        label_x = self._table_positions(doc)[2]

        doc.set_font(10)
        doc.columns(
            ["Labor Subtotal", format_currency(result.labor_total)],
            [label_x - 1.6 * inch, doc.right],
        )
        doc.columns(
            ["Reimbursements", format_currency(result.reimbursements_total)],
            [label_x - 1.6 * inch, doc.right],
        )
        doc.set_font(12, bold=True)
        doc.columns(
            ["TOTAL DUE", format_currency(result.grand_total)],
            [label_x - 1.6 * inch, doc.right],
        )
        doc.space(LINE_HEIGHT)

    def _draw_footer(self, doc: PdfDocument) -> None:
        doc.set_font(8, bold=True)
        doc.wrapped(TAX_DISCLAIMER)
        doc.space()

        doc.set_font(10)
        if self.draft.payment_terms:
            doc.text(f"Payment Terms: {self.draft.payment_terms}")
        if self.draft.notes:
            doc.set_font(10, bold=True)
            doc.text("Notes:")
            doc.set_font(10)
            doc.wrapped(self.draft.notes)


def render_invoice(
    selected_entries: Sequence[Entry],
    profile: Optional[ContractorProfile],
    draft: InvoiceDraft,
    result: InvoiceResult,
) -> bytes:
    """Render an invoice (see PdfInvoiceWriter)."""
    return PdfInvoiceWriter(selected_entries, profile, draft, result).render()
