"""Entry aggregation into category totals and reimbursement figures.

This module implements the reduction of a set of entries into:
- Hour totals per category and overall
- Mileage, per-diem and other-expense totals
- Mileage payment (miles x mileage rate) and total reimbursement
- Optional labor earnings from a rate table

Missing or unparseable values contribute zero. Aggregation never mutates its
input and an empty input yields all-zero totals.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from contractor_tracker.config.settings import MILEAGE_RATE
from contractor_tracker.models.entry import Entry, HourCategory
from contractor_tracker.models.invoice import RateTable
from contractor_tracker.utils.number_utils import ZERO

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
NO_PROJECT = "(no project)"


@dataclass(frozen=True)
class Totals:
    """Aggregated figures for a set of entries.

    Attributes:
        driving_hours .. weekend_overtime_hours: Summed hours per category
        total_hours: Sum of all seven hour categories
        mileage: Summed miles
        per_diem: Summed per-diem
        other_expense: Summed other expenses
        mileage_rate: Rate used for the mileage payment
        mileage_payment: mileage x mileage_rate (not rounded)
        total_reimbursement: mileage_payment + per_diem + other_expense
        total_earnings: Labor earnings from a rate table, None without one
        entry_count: Number of entries aggregated

    Example:
        >>> totals = aggregate([])
        >>> totals.total_hours
        Decimal('0')
    """

    driving_hours: Decimal
    standard_hours: Decimal
    overtime_hours: Decimal
    night_hours: Decimal
    night_overtime_hours: Decimal
    weekend_hours: Decimal
    weekend_overtime_hours: Decimal
    total_hours: Decimal
    mileage: Decimal
    per_diem: Decimal
    other_expense: Decimal
    mileage_rate: Decimal
    mileage_payment: Decimal
    total_reimbursement: Decimal
    total_earnings: Optional[Decimal]
    entry_count: int

    def hours_for(self, category: HourCategory) -> Decimal:
        """Summed hours for one category."""
        return getattr(self, category.field_name)


def _sum_field(entries: List[Entry], field_name: str) -> Decimal:
    return sum((entry.amount(field_name) for entry in entries), ZERO)


def calculate_earnings(
    totals_by_category: Dict[HourCategory, Decimal], rate_table: RateTable
) -> Decimal:
    """Labor earnings: hours x rate over the categories the table sets.

    Args:
        totals_by_category: Summed hours per category
        rate_table: Hourly rates

    Returns:
        Sum of hours x rate for every category with a configured rate
    """
    return sum(
        (
            totals_by_category[category] * rate_table.rate_for(category)
            for category in rate_table.configured_categories()
        ),
        ZERO,
    )


def aggregate(
    entries: Iterable[Entry],
    rate_table: Optional[RateTable] = None,
    mileage_rate: Decimal = MILEAGE_RATE,
) -> Totals:
    """Aggregate entries into category totals and reimbursement figures.

    Args:
        entries: Entries to aggregate
        rate_table: Optional rates; when given, ``total_earnings`` is computed
        mileage_rate: Currency per mile for the mileage payment

    Returns:
        Totals for the entries

    Example:
        >>> entries = [
        ...     Entry.create(date="2025-06-01", standard_hours=8, mileage=20),
        ...     Entry.create(date="2025-06-02", overtime_hours=2, mileage=10),
        ... ]
        >>> totals = aggregate(entries)
        >>> totals.total_hours, totals.mileage_payment
        (Decimal('10'), Decimal('21.750'))
    """
    entries = list(entries)

    hours = {
        category: _sum_field(entries, category.field_name)
        for category in HourCategory
    }
    total_hours = sum(hours.values(), ZERO)

    mileage = _sum_field(entries, "mileage")
    per_diem = _sum_field(entries, "per_diem")
    other_expense = _sum_field(entries, "other_expense")

    mileage_payment = mileage * mileage_rate
    total_reimbursement = mileage_payment + per_diem + other_expense

    total_earnings = (
        calculate_earnings(hours, rate_table) if rate_table is not None else None
    )

    logger.debug(
        f"Aggregated {len(entries)} entries: {total_hours} hours, "
        f"{mileage} miles, reimbursement {total_reimbursement}"
    )

    return Totals(
        **{category.field_name: hours[category] for category in HourCategory},
        total_hours=total_hours,
        mileage=mileage,
        per_diem=per_diem,
        other_expense=other_expense,
        mileage_rate=mileage_rate,
        mileage_payment=mileage_payment,
        total_reimbursement=total_reimbursement,
        total_earnings=total_earnings,
        entry_count=len(entries),
    )


def aggregate_by_project(
    entries: Iterable[Entry],
    rate_table: Optional[RateTable] = None,
    mileage_rate: Decimal = MILEAGE_RATE,
) -> Dict[str, Totals]:
    """Aggregate entries separately for each project.

    Entries without a project are grouped under ``(no project)``. Projects
    appear in first-seen order.
    """
    groups: Dict[str, List[Entry]] = {}
    for entry in entries:
        groups.setdefault(entry.project_name or NO_PROJECT, []).append(entry)

    return {
        project: aggregate(group, rate_table=rate_table, mileage_rate=mileage_rate)
        for project, group in groups.items()
    }


def expenses_by_category(entries: Iterable[Entry]) -> Dict[str, Decimal]:
    """Sum other expenses by expense category.

    Entries with no other expense are skipped; expenses without a category
    are reported under ``Uncategorized``.

    Example:
        >>> expenses_by_category([
        ...     Entry.create(
        ...         date="2025-06-01", other_expense="12.50", expense_category="Fuel"
        ...     ),
        ...     Entry.create(date="2025-06-02", other_expense="3"),
        ... ])
        {'Fuel': Decimal('12.50'), 'Uncategorized': Decimal('3')}
    """
    result: Dict[str, Decimal] = {}
    for entry in entries:
        amount = entry.amount("other_expense")
        if amount > 0:
            category = entry.expense_category or UNCATEGORIZED
            result[category] = result.get(category, ZERO) + amount
    return result
