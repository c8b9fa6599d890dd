"""Contractor profile and expense category models.

This module defines the ContractorProfile singleton record and the
ExpenseCategorySet, the controlled vocabulary for entry expense categories.
"""

from typing import Any, List, Optional

from pydantic import Field, field_validator

from contractor_tracker.models.base import BaseDataModel
from contractor_tracker.models.invoice import RateTable

DEFAULT_EXPENSE_CATEGORIES = (
    "Fuel",
    "Tools",
    "Materials",
    "Meals",
    "Lodging",
    "Parking/Tolls",
    "Equipment Rental",
    "Supplies",
    "Other",
)


class ContractorProfile(BaseDataModel):
    """The contractor's own details, printed on reports and invoices.

    Attributes:
        name: Contractor's name
        business: Business name
        client: Default client billed on new invoices
        address: Postal address
        email: Email address
        phone: Phone number
        default_rates: Default hourly rates used to seed invoices

    Example:
        >>> profile = ContractorProfile(name="John Doe", business="Doe LLC")
        >>> profile.display_name
        'Doe LLC'
    """

    name: Optional[str] = Field(None, description="Contractor's name")
    business: Optional[str] = Field(None, description="Business name")
    client: Optional[str] = Field(None, description="Default client")
    address: Optional[str] = Field(None, description="Postal address")
    email: Optional[str] = Field(None, description="Email address")
    phone: Optional[str] = Field(None, description="Phone number")
    default_rates: RateTable = Field(default_factory=RateTable)

    @field_validator(
        "name", "business", "client", "address", "email", "phone", mode="before"
    )
    @classmethod
    def blank_text_to_none(cls, v: Any) -> Optional[str]:
        """Strip text fields; whitespace-only text becomes None."""
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @property
    def display_name(self) -> str:
        """Business name if set, otherwise the contractor's name."""
        return self.business or self.name or ""


class ExpenseCategorySet(BaseDataModel):
    """Ordered set of distinct expense category labels.

    Labels can be appended but never removed. Duplicates are detected
    case-insensitively.

    Example:
        >>> categories = ExpenseCategorySet(categories=["Fuel"])
        >>> categories.add("Permits")
        True
        >>> categories.add("fuel")
        False
        >>> categories.categories
        ['Fuel', 'Permits']
    """

    categories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXPENSE_CATEGORIES)
    )

    @field_validator("categories", mode="after")
    @classmethod
    def deduplicate(cls, v: List[str]) -> List[str]:
        """Drop blank and duplicate labels, keeping first occurrences."""
        seen = set()
        result = []
        for label in v:
            cleaned = label.strip()
            if cleaned and cleaned.lower() not in seen:
                seen.add(cleaned.lower())
                result.append(cleaned)
        return result

    def __contains__(self, label: object) -> bool:
        if not isinstance(label, str):
            return False
        return label.strip().lower() in {c.lower() for c in self.categories}

    def add(self, label: str) -> bool:
        """Append a label.

        Args:
            label: Category label

        Returns:
            True if the label was added, False if it was blank or already present
        """
        cleaned = label.strip()
        if not cleaned or cleaned in self:
            return False
        self.categories = self.categories + [cleaned]
        return True
