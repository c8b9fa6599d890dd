"""Unit tests for entry aggregation."""

from decimal import Decimal

from contractor_tracker.aggregators.entry_aggregator import (
    NO_PROJECT,
    UNCATEGORIZED,
    aggregate,
    aggregate_by_project,
    calculate_earnings,
    expenses_by_category,
)
from contractor_tracker.calculators.invoice_calculator import build_invoice
from contractor_tracker.models.entry import AMOUNT_FIELDS, Entry, HourCategory
from contractor_tracker.models.invoice import RateTable


class TestAggregate:
    """Test aggregate."""

    def test_empty_input(self):
        """Test no entries gives all-zero totals."""
        totals = aggregate([])

        assert totals.entry_count == 0
        assert totals.total_hours == Decimal("0")
        assert totals.mileage_payment == Decimal("0")
        assert totals.total_reimbursement == Decimal("0")
        assert totals.total_earnings is None

    def test_hours_and_mileage(self, sample_entries):
        """Test hour, mileage and reimbursement totals."""
        totals = aggregate(sample_entries)

        assert totals.standard_hours == Decimal("8")
        assert totals.overtime_hours == Decimal("2")
        assert totals.hours_for(HourCategory.DRIVING) == Decimal("0")
        assert totals.total_hours == Decimal("10")
        assert totals.mileage == Decimal("30")
        assert totals.mileage_payment == Decimal("21.750")
        assert totals.total_reimbursement == Decimal("21.750")
        assert totals.entry_count == 2

    def test_expenses_in_reimbursement(self):
        """Test per-diem and other expenses add to the reimbursement."""
        entries = [
            Entry.create(date="2025-06-01", per_diem="45", other_expense="12.50"),
            Entry.create(date="2025-06-02", mileage="10", per_diem="45"),
        ]
        totals = aggregate(entries)

        assert totals.per_diem == Decimal("90")
        assert totals.other_expense == Decimal("12.50")
        assert totals.total_reimbursement == Decimal("109.750")

    def test_custom_mileage_rate(self, sample_entries):
        """Test the mileage rate can be overridden."""
        totals = aggregate(sample_entries, mileage_rate=Decimal("0.5"))
        assert totals.mileage_rate == Decimal("0.5")
        assert totals.mileage_payment == Decimal("15.0")

    def test_earnings_with_rate_table(self, sample_entries):
        """Test earnings use only the categories with a rate."""
        totals = aggregate(sample_entries, rate_table=RateTable(standard_rate="50"))
        assert totals.total_earnings == Decimal("400")

    def test_does_not_mutate_input(self, sample_entries):
        """Test aggregation leaves entries untouched."""
        before = [e.model_copy() for e in sample_entries]
        aggregate(sample_entries)
        assert sample_entries == before

    def test_total_hours_sums_all_categories(self):
        """Test total_hours equals the sum of the seven category totals."""
        entries = [
            Entry.create(
                date="2025-06-01",
                **{
                    category.field_name: str(index + 1)
                    for index, category in enumerate(HourCategory)
                },
            ),
            Entry.create(
                date="2025-06-02",
                **{category.field_name: "0.25" for category in HourCategory},
            ),
        ]

        totals = aggregate(entries)

        assert totals.total_hours == sum(
            totals.hours_for(category) for category in HourCategory
        )
        assert totals.total_hours == Decimal("29.75")
        assert totals.hours_for(HourCategory.WEEKEND_OVERTIME) == Decimal("7.25")


class TestBlankEqualsZero:
    """Test blank fields and zeros give identical results."""

    def _entries(self, empty: str):
        values = {field: empty for field in AMOUNT_FIELDS}
        return [
            Entry.create(id=1, date="2025-06-01", project_name="Acme", **values),
            Entry.create(
                id=2,
                date="2025-06-02",
                project_name="Acme",
                **dict(values, standard_hours="8", mileage="20", per_diem="35"),
            ),
        ]

    def test_aggregate(self):
        """Test aggregate gives equal totals."""
        rates = RateTable(standard_rate=Decimal("50"), overtime_rate=Decimal("75"))

        assert aggregate(self._entries(""), rate_table=rates) == aggregate(
            self._entries("0"), rate_table=rates
        )

    def test_build_invoice(self):
        """Test build_invoice gives equal line items and totals."""
        rates = RateTable(
            **{category.rate_field_name: Decimal("40") for category in HourCategory}
        )

        blank = build_invoice(self._entries(""), rates)
        zero = build_invoice(self._entries("0"), rates)

        assert blank == zero
        assert blank.grand_total == Decimal("369.50")

class TestCalculateEarnings:
    """Test calculate_earnings."""

    def test_sums_configured_categories(self):
        """Test hours x rate over configured categories."""
        hours = {category: Decimal("2") for category in HourCategory}
        rates = RateTable(standard_rate="50", night_rate="60")
        assert calculate_earnings(hours, rates) == Decimal("220")

    def test_empty_rate_table(self):
        """Test no configured rates earns nothing."""
        hours = {category: Decimal("8") for category in HourCategory}
        assert calculate_earnings(hours, RateTable()) == Decimal("0")


class TestAggregateByProject:
    """Test aggregate_by_project."""

    def test_groups_in_first_seen_order(self, sample_entries):
        """Test each project gets its own totals."""
        sample_entries.append(Entry.create(date="2025-06-03", standard_hours="1"))
        grouped = aggregate_by_project(sample_entries)

        assert list(grouped) == ["Acme", "Globex", NO_PROJECT]
        assert grouped["Acme"].standard_hours == Decimal("8")
        assert grouped["Globex"].overtime_hours == Decimal("2")
        assert grouped[NO_PROJECT].entry_count == 1


class TestExpensesByCategory:
    """Test expenses_by_category."""

    def test_groups_by_category(self):
        """Test expenses are summed by category."""
        entries = [
            Entry.create(
                date="2025-06-01", other_expense="12.50", expense_category="Fuel"
            ),
            Entry.create(
                date="2025-06-02", other_expense="7.50", expense_category="Fuel"
            ),
            Entry.create(date="2025-06-03", other_expense="3"),
            Entry.create(date="2025-06-04", expense_category="Meals"),
        ]

        assert expenses_by_category(entries) == {
            "Fuel": Decimal("20.00"),
            UNCATEGORIZED: Decimal("3"),
        }
