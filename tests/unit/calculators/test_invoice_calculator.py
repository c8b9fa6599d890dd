"""Unit tests for the invoice calculator."""

import datetime as dt
from decimal import Decimal

import pytest

from contractor_tracker.aggregators.entry_aggregator import aggregate
from contractor_tracker.calculators.invoice_calculator import (
    LineItem,
    LineItemKind,
    build_invoice,
    build_labor_items,
    build_reimbursement_items,
    select_entries,
)
from contractor_tracker.models.entry import Entry
from contractor_tracker.models.invoice import RateTable


@pytest.fixture
def single_day():
    """8 standard hours and 20 miles on one day."""
    return [
        Entry.create(date="2025-06-01", standard_hours="8", mileage="20"),
    ]


class TestBuildInvoice:
    """Test build_invoice."""

    def test_standard_day_with_mileage(self, single_day):
        """Test 8h at $50 plus 20 mi at $0.725 totals $414.50."""
        result = build_invoice(single_day, RateTable(standard_rate="50"))

        assert [i.description for i in result.line_items] == [
            "Standard Labor",
            "Mileage",
        ]
        labor, mileage = result.line_items
        assert labor.amount == Decimal("400.00")
        assert mileage.amount == Decimal("14.50")
        assert result.labor_total == Decimal("400.00")
        assert result.reimbursements_total == Decimal("14.50")
        assert result.grand_total == Decimal("414.50")

    def test_line_displays(self, single_day):
        """Test quantities and rates are printed in their units."""
        result = build_invoice(single_day, RateTable(standard_rate="50"))
        labor, mileage = result.line_items

        assert labor.quantity_display == "8.00"
        assert labor.rate_display == "$50.00/hr"
        assert labor.amount_display == "$400.00"
        assert mileage.quantity_display == "20.0 mi"
        assert mileage.rate_display == "$0.725/mi"
        assert mileage.amount_display == "$14.50"

    def test_zero_hour_categories_omitted(self, sample_entries):
        """Test only categories with hours produce labor lines."""
        rates = RateTable(standard_rate="50", overtime_rate="75", night_rate="60")
        result = build_invoice(sample_entries, rates)

        assert [i.description for i in result.labor_items] == [
            "Standard Labor",
            "Overtime Labor",
        ]
        assert result.labor_total == Decimal("550.00")

    def test_unset_rate_bills_zero(self, sample_entries):
        """Test hours without a rate still appear at zero."""
        result = build_invoice(sample_entries, RateTable(standard_rate="50"))
        overtime = result.labor_items[1]

        assert overtime.quantity == Decimal("2")
        assert overtime.amount == Decimal("0.00")

    def test_mileage_rounding_half_up(self):
        """Test a half cent on the mileage line rounds up."""
        entries = [Entry.create(date="2025-06-01", mileage="1")]
        result = build_invoice(entries, RateTable())

        assert result.reimbursement_items[0].amount == Decimal("0.73")
        assert result.grand_total == Decimal("0.73")

    def test_period_and_ids(self, sample_entries):
        """Test the billing period spans the selected dates."""
        result = build_invoice(reversed(sample_entries), RateTable())

        assert result.period_start == dt.date(2025, 6, 1)
        assert result.period_end == dt.date(2025, 6, 2)
        assert sorted(result.entry_ids) == sorted(e.id for e in sample_entries)

    def test_empty_selection(self):
        """Test an empty selection builds an empty, zero invoice."""
        result = build_invoice([], RateTable(standard_rate="50"))

        assert result.line_items == []
        assert result.grand_total == Decimal("0.00")
        assert result.period_start is None


class TestReimbursementItems:
    """Test build_reimbursement_items."""

    def test_lump_sums(self):
        """Test per diem and other expenses are lump-sum lines."""
        entries = [
            Entry.create(date="2025-06-01", per_diem="45", other_expense="12.345"),
        ]
        items = build_reimbursement_items(aggregate(entries))

        assert [i.description for i in items] == ["Per Diem", "Other Expenses"]
        assert all(i.kind == LineItemKind.REIMBURSEMENT for i in items)
        assert items[0].quantity_display == ""
        assert items[0].rate_display == ""
        assert items[1].amount == Decimal("12.35")

    def test_nothing_to_reimburse(self, single_day):
        """Test labor-only totals give no reimbursement lines."""
        entries = [Entry.create(date="2025-06-01", standard_hours="8")]
        assert build_reimbursement_items(aggregate(entries)) == []


class TestLaborItems:
    """Test build_labor_items."""

    def test_category_order(self):
        """Test labor lines follow category order."""
        entries = [
            Entry.create(
                date="2025-06-01",
                weekend_hours="4",
                driving_hours="1",
                night_overtime_hours="2",
            )
        ]
        items = build_labor_items(aggregate(entries), RateTable())

        assert [i.description for i in items] == [
            "Driving Labor",
            "Night Overtime Labor",
            "Weekend Labor",
        ]
        assert all(isinstance(i, LineItem) for i in items)


class TestSelectEntries:
    """Test select_entries."""

    def test_keeps_stored_order(self, sample_entries):
        """Test selection keeps stored order and ignores unknown ids."""
        ids = [sample_entries[1].id, 1, sample_entries[0].id]
        assert select_entries(sample_entries, ids) == sample_entries
