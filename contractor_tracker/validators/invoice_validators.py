"""Business rule validation for invoices.

An invoice may only be rendered when:
- At least one entry is selected, and every selected id exists
- A client name is set
- The grand total is greater than zero
"""

from typing import Iterable, Optional

from contractor_tracker.calculators.invoice_calculator import InvoiceResult
from contractor_tracker.models.entry import Entry
from contractor_tracker.models.invoice import InvoiceDraft
from contractor_tracker.utils.number_utils import ZERO
from contractor_tracker.validators.validation_report import ValidationReport


class InvoiceValidator:
    """Validates an invoice draft against the stored entries.

    Example:
        >>> validator = InvoiceValidator()
        >>> report = validator.validate(InvoiceDraft(), entries=[])
        >>> report.is_valid()
        False
    """

    def validate(
        self,
        draft: InvoiceDraft,
        entries: Iterable[Entry],
        result: Optional[InvoiceResult] = None,
    ) -> ValidationReport:
        """Validate a draft.

        Args:
            draft: Invoice draft to check
            entries: All stored entries (to resolve selected ids)
            result: Computed invoice, if already built; enables the total check

        Returns:
            ValidationReport with any issues found
        """
        report = ValidationReport()

        self._validate_selection(draft, entries, report)
        self._validate_client(draft, report)
        self._validate_dates(draft, report)

        if not draft.invoice_number:
            report.add_warning(
                "invoice_number",
                "No invoice number set; a timestamp number will be used",
                None,
            )

        if result is not None and result.grand_total <= ZERO:
            report.add_error(
                "grand_total",
                "Invoice total is zero; set rates or select billable entries",
                result.grand_total,
            )

        return report

    def _validate_selection(
        self, draft: InvoiceDraft, entries: Iterable[Entry], report: ValidationReport
    ) -> None:
        if not draft.selected_ids:
            report.add_error("selected_ids", "No entries selected", [])
            return

        known_ids = {entry.id for entry in entries}
        missing = [i for i in draft.selected_ids if i not in known_ids]
        if missing:
            report.add_error("selected_ids", "Unknown entry ids selected", missing)

    def _validate_client(self, draft: InvoiceDraft, report: ValidationReport) -> None:
        if not draft.client_name:
            report.add_error("client_name", "Client name is required", None)

    def _validate_dates(self, draft: InvoiceDraft, report: ValidationReport) -> None:
        if draft.due_date is not None and draft.due_date < draft.invoice_date:
            report.add_warning(
                "due_date", "Due date is before the invoice date", draft.due_date
            )
