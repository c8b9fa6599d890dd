"""Entry data model for the tracker.

This module defines the Entry model which represents one day's recorded
time and expenses, and the HourCategory enumeration of billable hour types.
"""

import datetime as dt
import time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from contractor_tracker.models.base import BaseDataModel
from contractor_tracker.utils.date_utils import parse_entry_date
from contractor_tracker.utils.number_utils import parse_decimal, to_decimal


class HourCategory(str, Enum):
    """Independent categories of billable hours.

    Declaration order is the order used for summaries and invoice lines.
    """

    DRIVING = "driving"
    STANDARD = "standard"
    OVERTIME = "overtime"
    NIGHT = "night"
    NIGHT_OVERTIME = "night_overtime"
    WEEKEND = "weekend"
    WEEKEND_OVERTIME = "weekend_overtime"

    @property
    def field_name(self) -> str:
        """Entry attribute holding hours of this category."""
        return f"{self.value}_hours"

    @property
    def rate_field_name(self) -> str:
        """RateTable attribute holding the rate of this category."""
        return f"{self.value}_rate"

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``Night Overtime``."""
        return self.value.replace("_", " ").title()


HOUR_FIELDS = tuple(category.field_name for category in HourCategory)
AMOUNT_FIELDS = HOUR_FIELDS + ("mileage", "per_diem", "other_expense")

_last_issued_id = 0


def next_entry_id() -> int:
    """Issue a new entry identifier.

    Identifiers are creation timestamps in milliseconds, bumped when needed so
    they stay strictly increasing within the process.
    """
    global _last_issued_id
    candidate = time.time_ns() // 1_000_000
    if candidate <= _last_issued_id:
        candidate = _last_issued_id + 1
    _last_issued_id = candidate
    return candidate


class Entry(BaseDataModel):
    """Represents one day of recorded work and expenses.

    All numeric fields are optional. A missing value and zero are equivalent
    for every calculation; consumers read them through ``hours()`` and
    ``amount()`` which coerce to Decimal("0").

    Attributes:
        id: Unique identifier, assigned at creation
        date: Calendar date of the work
        project_name: Optional project label used for grouping and filtering
        driving_hours .. weekend_overtime_hours: Hours per category
        mileage: Miles driven
        per_diem: Per-diem allowance
        other_expense: Other reimbursable expense
        expense_category: Category of other_expense
        expense_description: Description of other_expense
        notes: Free-text notes
        receipt_image: Opaque receipt reference (e.g. a data URL)
        timestamp: Creation instant

    Example:
        >>> entry = Entry.create(date="2025-06-01", standard_hours="8", mileage=20)
        >>> entry.hours(HourCategory.STANDARD)
        Decimal('8')
        >>> entry.amount("per_diem")
        Decimal('0')
    """

    id: int = Field(..., ge=0, description="Unique entry identifier")
    date: dt.date = Field(..., description="Calendar date of the work")
    project_name: Optional[str] = Field(None, description="Project label")

    driving_hours: Optional[Decimal] = Field(None, ge=0)
    standard_hours: Optional[Decimal] = Field(None, ge=0)
    overtime_hours: Optional[Decimal] = Field(None, ge=0)
    night_hours: Optional[Decimal] = Field(None, ge=0)
    night_overtime_hours: Optional[Decimal] = Field(None, ge=0)
    weekend_hours: Optional[Decimal] = Field(None, ge=0)
    weekend_overtime_hours: Optional[Decimal] = Field(None, ge=0)

    mileage: Optional[Decimal] = Field(None, ge=0, description="Miles driven")
    per_diem: Optional[Decimal] = Field(None, ge=0, description="Per-diem amount")
    other_expense: Optional[Decimal] = Field(None, ge=0, description="Other expense")
    expense_category: Optional[str] = Field(None, description="Expense category")
    expense_description: Optional[str] = Field(None, description="Expense details")

    notes: Optional[str] = Field(None, description="Free-text notes")
    receipt_image: Optional[str] = Field(None, description="Receipt reference")
    timestamp: dt.datetime = Field(..., description="Creation instant")

    @field_validator("date", mode="before")
    @classmethod
    def parse_calendar_date(cls, v: Any) -> dt.date:
        """Parse the date as a calendar date, never as an instant.

        Raises:
            ValueError: If the date is missing or not a valid YYYY-MM-DD date
        """
        parsed = parse_entry_date(v)
        if parsed is None:
            raise ValueError(f"date must be a valid YYYY-MM-DD date, got {v!r}")
        return parsed

    @field_validator(*AMOUNT_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[Decimal]:
        """Convert form values to Decimal; blank or unparseable becomes None."""
        return parse_decimal(v)

    @field_validator(
        "project_name",
        "expense_category",
        "expense_description",
        "notes",
        "receipt_image",
        mode="before",
    )
    @classmethod
    def blank_text_to_none(cls, v: Any) -> Optional[str]:
        """Strip text fields; whitespace-only text becomes None."""
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @classmethod
    def create(cls, **fields: Any) -> "Entry":
        """Create a new entry with a fresh id and creation timestamp.

        Args:
            **fields: Entry fields (snake_case or camelCase keys)

        Returns:
            The new Entry
        """
        if fields.get("id") is None:
            fields["id"] = next_entry_id()
        if fields.get("timestamp") is None:
            fields["timestamp"] = dt.datetime.now(dt.timezone.utc)
        return cls.model_validate(fields)

    def hours(self, category: HourCategory) -> Decimal:
        """Hours recorded for a category, zero when absent."""
        return to_decimal(getattr(self, category.field_name))

    def amount(self, field_name: str) -> Decimal:
        """Value of a numeric field, zero when absent."""
        if field_name not in AMOUNT_FIELDS:
            raise KeyError(f"Unknown numeric field: {field_name}")
        return to_decimal(getattr(self, field_name))

    @property
    def total_hours(self) -> Decimal:
        """Sum of all hour categories for this entry."""
        return sum((self.hours(category) for category in HourCategory), Decimal("0"))
