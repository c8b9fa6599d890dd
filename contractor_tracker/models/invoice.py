"""Invoice data models for the tracker.

This module defines the RateTable (hourly rate per hour category), the
InvoiceDraft assembled while building one invoice, and InvoiceSettings, the
part of a draft that is remembered between invoices.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import Field, field_validator

from contractor_tracker.models.base import BaseDataModel
from contractor_tracker.models.entry import HourCategory
from contractor_tracker.utils.number_utils import ZERO, parse_decimal

DEFAULT_PAYMENT_TERMS = "Net 30"


class RateTable(BaseDataModel):
    """Hourly rate per hour category.

    An unset rate is None and bills at zero. Stored records use the keys
    ``drivingRate``, ``standardRate``, ``overtimeRate`` and so on.

    Example:
        >>> rates = RateTable(standardRate="50")
        >>> rates.rate_for(HourCategory.STANDARD)
        Decimal('50')
        >>> rates.rate_for(HourCategory.OVERTIME)
        Decimal('0')
    """

    driving_rate: Optional[Decimal] = Field(None, ge=0)
    standard_rate: Optional[Decimal] = Field(None, ge=0)
    overtime_rate: Optional[Decimal] = Field(None, ge=0)
    night_rate: Optional[Decimal] = Field(None, ge=0)
    night_overtime_rate: Optional[Decimal] = Field(None, ge=0)
    weekend_rate: Optional[Decimal] = Field(None, ge=0)
    weekend_overtime_rate: Optional[Decimal] = Field(None, ge=0)

    @field_validator(
        *(category.rate_field_name for category in HourCategory), mode="before"
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[Decimal]:
        """Convert form values to Decimal; blank or unparseable becomes None."""
        return parse_decimal(v)

    def rate_for(self, category: HourCategory) -> Decimal:
        """Rate for a category, zero when unset."""
        rate = getattr(self, category.rate_field_name)
        return rate if rate is not None else ZERO

    def configured_categories(self) -> List[HourCategory]:
        """Categories that have a rate set, in category order."""
        return [
            category
            for category in HourCategory
            if getattr(self, category.rate_field_name) is not None
        ]

    def merged_over(self, defaults: "RateTable") -> "RateTable":
        """Return a table where rates set here override ``defaults``."""
        merged = defaults.model_dump()
        merged.update(self.model_dump(exclude_none=True))
        return RateTable.model_validate(merged)


class InvoiceSettings(BaseDataModel):
    """Rates and payment terms reused from one invoice to the next."""

    rates: RateTable = Field(default_factory=RateTable)
    payment_terms: str = Field(DEFAULT_PAYMENT_TERMS)


class InvoiceDraft(BaseDataModel):
    """Everything needed to build and render one invoice.

    Attributes:
        invoice_number: Invoice number; a timestamp number is used when unset
        client_name: Client billed by the invoice
        client_address: Client postal address
        client_email: Client email address
        invoice_date: Issue date
        due_date: Payment due date
        payment_terms: Payment terms text, e.g. "Net 30"
        notes: Free-text notes printed on the invoice
        rate_table: Hourly rates for the labor line items
        selected_ids: Identifiers of the entries being billed
    """

    invoice_number: Optional[str] = Field(None, description="Invoice number")
    client_name: Optional[str] = Field(None, description="Client name")
    client_address: Optional[str] = Field(None, description="Client address")
    client_email: Optional[str] = Field(None, description="Client email")
    invoice_date: dt.date = Field(default_factory=dt.date.today)
    due_date: Optional[dt.date] = Field(None, description="Payment due date")
    payment_terms: Optional[str] = Field(DEFAULT_PAYMENT_TERMS)
    notes: Optional[str] = Field(None, description="Notes printed on the invoice")
    rate_table: RateTable = Field(default_factory=RateTable)
    selected_ids: List[int] = Field(default_factory=list)

    @field_validator(
        "invoice_number",
        "client_name",
        "client_address",
        "client_email",
        "payment_terms",
        "notes",
        mode="before",
    )
    @classmethod
    def blank_text_to_none(cls, v: Any) -> Optional[str]:
        """Strip text fields; whitespace-only text becomes None."""
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    def effective_invoice_number(self, now: Optional[dt.datetime] = None) -> str:
        """The invoice number, or a timestamp-based number when unset."""
        if self.invoice_number:
            return self.invoice_number
        now = now or dt.datetime.now()
        return now.strftime("%Y%m%d%H%M%S")

    def to_settings(self) -> InvoiceSettings:
        """Extract the reusable part of this draft."""
        return InvoiceSettings(
            rates=self.rate_table.model_copy(),
            payment_terms=self.payment_terms or DEFAULT_PAYMENT_TERMS,
        )
