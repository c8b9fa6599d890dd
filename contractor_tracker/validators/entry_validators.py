"""Validation of entry form input.

This module checks raw form values before an Entry is created or updated,
so that bad input is reported instead of silently coerced:
- The date is required and must be a valid calendar date
- Numeric fields must be numbers and must not be negative
- Expense categories should come from the category list
"""

import datetime as dt
from typing import Any, Iterable, Mapping, Optional

from contractor_tracker.models.entry import AMOUNT_FIELDS
from contractor_tracker.utils.date_utils import parse_entry_date
from contractor_tracker.utils.number_utils import parse_decimal
from contractor_tracker.validators.validation_report import ValidationReport


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class EntryValidator:
    """Validates entry form values.

    Example:
        >>> validator = EntryValidator(categories=["Fuel", "Tools"])
        >>> report = validator.validate({"date": "", "mileage": "-3"})
        >>> [issue.field for issue in report.get_errors()]
        ['date', 'mileage']
    """

    def __init__(self, categories: Optional[Iterable[str]] = None) -> None:
        """Initialize the validator.

        Args:
            categories: Known expense categories; None skips the category check
        """
        self.categories = (
            {c.lower() for c in categories} if categories is not None else None
        )

    def validate(
        self,
        values: Mapping[str, Any],
        require_date: bool = True,
        today: Optional[dt.date] = None,
    ) -> ValidationReport:
        """Validate entry form values (snake_case keys).

        Args:
            values: Field values; absent keys are not checked
            require_date: Whether a missing date is an error (False for edits)
            today: Current date for the future-date warning

        Returns:
            ValidationReport with any issues found
        """
        report = ValidationReport()
        context = {"entry_id": values["id"]} if values.get("id") is not None else None

        self._validate_date(values, report, require_date, today or dt.date.today())
        self._validate_amounts(values, report, context)
        self._validate_expense(values, report, context)

        return report

    def _validate_date(
        self,
        values: Mapping[str, Any],
        report: ValidationReport,
        require_date: bool,
        today: dt.date,
    ) -> None:
        raw = values.get("date")

        if _is_blank(raw):
            if require_date or "date" in values:
                report.add_error("date", "Date is required", raw)
            return

        parsed = parse_entry_date(raw)
        if parsed is None:
            report.add_error("date", "Date must be in YYYY-MM-DD format", raw)
        elif parsed > today:
            report.add_warning("date", "Date is in the future", parsed)

    def _validate_amounts(
        self,
        values: Mapping[str, Any],
        report: ValidationReport,
        context: Optional[dict],
    ) -> None:
        for field_name in AMOUNT_FIELDS:
            raw = values.get(field_name)
            if _is_blank(raw):
                continue

            parsed = parse_decimal(raw)
            if parsed is None:
                report.add_error(field_name, "Value must be a number", raw, context)
            elif parsed < 0:
                report.add_error(field_name, "Value cannot be negative", raw, context)

    def _validate_expense(
        self,
        values: Mapping[str, Any],
        report: ValidationReport,
        context: Optional[dict],
    ) -> None:
        category = values.get("expense_category")
        amount = parse_decimal(values.get("other_expense"))

        if not _is_blank(category) and self.categories is not None:
            if category.strip().lower() not in self.categories:
                report.add_warning(
                    "expense_category",
                    "Category is not in the expense category list",
                    category,
                    context,
                )

        if amount is not None and amount > 0 and _is_blank(
            values.get("expense_description")
        ):
            report.add_info(
                "expense_description",
                "Expense has no description",
                None,
                context,
            )
