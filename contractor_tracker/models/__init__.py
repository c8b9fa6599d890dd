"""Data models for the contractor tracker.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- Entry: One day's recorded time and expenses
- HourCategory: Billable hour categories
- ContractorProfile: The contractor's own details
- ExpenseCategorySet: Controlled vocabulary of expense categories
- RateTable: Hourly rate per hour category
- InvoiceDraft: Inputs of one invoice
- InvoiceSettings: Rates and terms reused across invoices
"""

from contractor_tracker.models.base import BaseDataModel
from contractor_tracker.models.entry import (
    AMOUNT_FIELDS,
    HOUR_FIELDS,
    Entry,
    HourCategory,
    next_entry_id,
)
from contractor_tracker.models.invoice import (
    DEFAULT_PAYMENT_TERMS,
    InvoiceDraft,
    InvoiceSettings,
    RateTable,
)
from contractor_tracker.models.profile import (
    DEFAULT_EXPENSE_CATEGORIES,
    ContractorProfile,
    ExpenseCategorySet,
)

__all__ = [
    "AMOUNT_FIELDS",
    "BaseDataModel",
    "ContractorProfile",
    "DEFAULT_EXPENSE_CATEGORIES",
    "DEFAULT_PAYMENT_TERMS",
    "Entry",
    "ExpenseCategorySet",
    "HOUR_FIELDS",
    "HourCategory",
    "InvoiceDraft",
    "InvoiceSettings",
    "RateTable",
    "next_entry_id",
]
