"""Validation layer for entry input and invoice business rules."""

from contractor_tracker.validators.entry_validators import EntryValidator
from contractor_tracker.validators.invoice_validators import InvoiceValidator
from contractor_tracker.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "EntryValidator",
    "InvoiceValidator",
    "ValidationReport",
    "ValidationIssue",
    "ValidationSeverity",
]
