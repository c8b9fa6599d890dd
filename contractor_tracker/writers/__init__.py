"""Document writers: CSV export, PDF report and PDF invoice."""

from contractor_tracker.writers.csv_writer import (
    CSV_COLUMNS,
    EntryCsvWriter,
    render_csv,
)
from contractor_tracker.writers.filenames import (
    csv_filename,
    invoice_filename,
    report_filename,
    sanitize_filename_part,
)
from contractor_tracker.writers.output import write_document
from contractor_tracker.writers.pdf_invoice_writer import (
    PdfInvoiceWriter,
    render_invoice,
)
from contractor_tracker.writers.pdf_report_writer import (
    PdfReportWriter,
    render_report,
)

__all__ = [
    "CSV_COLUMNS",
    "EntryCsvWriter",
    "PdfInvoiceWriter",
    "PdfReportWriter",
    "csv_filename",
    "invoice_filename",
    "render_csv",
    "render_invoice",
    "render_report",
    "report_filename",
    "sanitize_filename_part",
    "write_document",
]
