"""Calculator modules for invoicing."""

from contractor_tracker.calculators.invoice_calculator import (
    TAX_DISCLAIMER,
    InvoiceResult,
    LineItem,
    LineItemKind,
    build_invoice,
    build_labor_items,
    build_reimbursement_items,
    select_entries,
)

__all__ = [
    "TAX_DISCLAIMER",
    "InvoiceResult",
    "LineItem",
    "LineItemKind",
    "build_invoice",
    "build_labor_items",
    "build_reimbursement_items",
    "select_entries",
]
