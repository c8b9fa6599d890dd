"""Invoice calculator for 1099 contractor invoices.

This module turns a selection of entries and a rate table into invoice line
items:
- One labor line per hour category with hours in the selection
- One mileage line (miles x mileage rate) when miles were driven
- Lump-sum per-diem and other-expense lines when present
- Labor, reimbursement and grand totals

No tax is computed: on a 1099 engagement the client withholds nothing and
the contractor handles their own taxes.
"""

import datetime as dt
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from contractor_tracker.aggregators.entry_aggregator import Totals, aggregate
from contractor_tracker.config.settings import MILEAGE_RATE
from contractor_tracker.models.entry import Entry, HourCategory
from contractor_tracker.models.invoice import RateTable
from contractor_tracker.utils.number_utils import (
    ZERO,
    format_currency,
    format_hours,
    format_miles,
    round_money,
)

logger = logging.getLogger(__name__)

TAX_DISCLAIMER = (
    "1099 INDEPENDENT CONTRACTOR: No taxes have been withheld from this invoice. "
    "The client is responsible for any required 1099 reporting; the contractor "
    "is responsible for their own income and self-employment taxes."
)


class LineItemKind(str, Enum):
    """Whether a line bills labor or reimburses an expense."""

    LABOR = "labor"
    REIMBURSEMENT = "reimbursement"


@dataclass(frozen=True)
class LineItem:
    """One row of an invoice.

    Attributes:
        description: Row label, e.g. "Standard Labor" or "Mileage"
        amount: Row amount, rounded to cents
        kind: Labor or reimbursement
        quantity: Hours or miles; None for lump sums
        rate: Rate per unit; None for lump sums
        unit: "hr" or "mi"; None for lump sums

    Example:
        >>> item = LineItem(
        ...     description="Standard Labor",
        ...     amount=Decimal("400.00"),
        ...     kind=LineItemKind.LABOR,
        ...     quantity=Decimal("8"),
        ...     rate=Decimal("50"),
        ...     unit="hr",
        ... )
        >>> item.quantity_display, item.rate_display, item.amount_display
        ('8.00', '$50.00/hr', '$400.00')
    """

    description: str
    amount: Decimal
    kind: LineItemKind
    quantity: Optional[Decimal] = None
    rate: Optional[Decimal] = None
    unit: Optional[str] = None

    @property
    def quantity_display(self) -> str:
        """Quantity as printed: ``8.00`` hours or ``20.0 mi``."""
        if self.quantity is None:
            return ""
        if self.unit == "mi":
            return format_miles(self.quantity)
        return format_hours(self.quantity)

    @property
    def rate_display(self) -> str:
        """Rate as printed: ``$50.00/hr`` or ``$0.725/mi``."""
        if self.rate is None:
            return ""
        places = 3 if self.unit == "mi" else 2
        return f"{format_currency(self.rate, places)}/{self.unit}"

    @property
    def amount_display(self) -> str:
        """Amount as printed, e.g. ``$400.00``."""
        return format_currency(self.amount)


@dataclass
class InvoiceResult:
    """Computed content of an invoice.

    Attributes:
        line_items: Labor lines in category order, then reimbursement lines
        labor_total: Sum of labor line amounts
        reimbursements_total: Sum of reimbursement line amounts
        grand_total: labor_total + reimbursements_total
        totals: Aggregated totals of the selected entries
        period_start: Earliest selected entry date
        period_end: Latest selected entry date
    """

    line_items: List[LineItem]
    labor_total: Decimal
    reimbursements_total: Decimal
    grand_total: Decimal
    totals: Totals
    period_start: Optional[dt.date] = None
    period_end: Optional[dt.date] = None
    entry_ids: List[int] = field(default_factory=list)

    @property
    def labor_items(self) -> List[LineItem]:
        """Labor lines only."""
        return [i for i in self.line_items if i.kind == LineItemKind.LABOR]

    @property
    def reimbursement_items(self) -> List[LineItem]:
        """Reimbursement lines only."""
        return [i for i in self.line_items if i.kind == LineItemKind.REIMBURSEMENT]


def build_labor_items(totals: Totals, rate_table: RateTable) -> List[LineItem]:
    """Create labor lines for categories with hours.

    Categories whose summed hours are zero are omitted entirely.

    Args:
        totals: Aggregated totals of the selection
        rate_table: Hourly rates (unset rates bill at zero)

    Returns:
        Labor line items in category order
    """
    items = []

    for category in HourCategory:
        hours = totals.hours_for(category)
        if hours <= ZERO:
            continue

        rate = rate_table.rate_for(category)
        items.append(
            LineItem(
                description=f"{category.label} Labor",
                amount=round_money(hours * rate),
                kind=LineItemKind.LABOR,
                quantity=hours,
                rate=rate,
                unit="hr",
            )
        )

    return items


def build_reimbursement_items(totals: Totals) -> List[LineItem]:
    """Create mileage, per-diem and other-expense lines.

    Args:
        totals: Aggregated totals of the selection

    Returns:
        Reimbursement line items (mileage, per diem, other expenses)
    """
    items = []

    if totals.mileage > ZERO:
        items.append(
            LineItem(
                description="Mileage",
                amount=round_money(totals.mileage * totals.mileage_rate),
                kind=LineItemKind.REIMBURSEMENT,
                quantity=totals.mileage,
                rate=totals.mileage_rate,
                unit="mi",
            )
        )

    if totals.per_diem > ZERO:
        items.append(
            LineItem(
                description="Per Diem",
                amount=round_money(totals.per_diem),
                kind=LineItemKind.REIMBURSEMENT,
            )
        )

    if totals.other_expense > ZERO:
        items.append(
            LineItem(
                description="Other Expenses",
                amount=round_money(totals.other_expense),
                kind=LineItemKind.REIMBURSEMENT,
            )
        )

    return items


def build_invoice(
    selected_entries: Iterable[Entry],
    rate_table: RateTable,
    mileage_rate: Decimal = MILEAGE_RATE,
) -> InvoiceResult:
    """Build invoice line items and totals for a selection of entries.

    Args:
        selected_entries: Entries being billed
        rate_table: Hourly rates per category
        mileage_rate: Currency per mile

    Returns:
        InvoiceResult with ordered line items and totals

    Example:
        >>> entry = Entry.create(date="2025-06-01", standard_hours=8, mileage=20)
        >>> result = build_invoice([entry], RateTable(standardRate=50))
        >>> [i.description for i in result.line_items]
        ['Standard Labor', 'Mileage']
        >>> result.grand_total
        Decimal('414.50')
    """
    entries = list(selected_entries)
    totals = aggregate(entries, rate_table=rate_table, mileage_rate=mileage_rate)

    labor_items = build_labor_items(totals, rate_table)
    reimbursement_items = build_reimbursement_items(totals)

    labor_total = sum((i.amount for i in labor_items), ZERO)
    reimbursements_total = sum((i.amount for i in reimbursement_items), ZERO)
    grand_total = labor_total + reimbursements_total

    dates = [e.date for e in entries]

    logger.info(
        f"Built invoice for {len(entries)} entries: labor {labor_total}, "
        f"reimbursements {reimbursements_total}, total {grand_total}"
    )

    return InvoiceResult(
        line_items=labor_items + reimbursement_items,
        labor_total=round_money(labor_total),
        reimbursements_total=round_money(reimbursements_total),
        grand_total=round_money(grand_total),
        totals=totals,
        period_start=min(dates) if dates else None,
        period_end=max(dates) if dates else None,
        entry_ids=[e.id for e in entries],
    )


def select_entries(
    entries: Sequence[Entry], selected_ids: Iterable[int]
) -> List[Entry]:
    """Pick the entries whose ids are selected, keeping stored order.

    Unknown ids are ignored; validation reports them separately.
    """
    wanted = set(selected_ids)
    return [entry for entry in entries if entry.id in wanted]
