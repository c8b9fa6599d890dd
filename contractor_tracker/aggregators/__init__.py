"""Aggregators module for filtering and summarizing entries.

This module provides the pure functions that turn the stored entry list
into the visible subset and its totals.
"""

from contractor_tracker.aggregators.entry_aggregator import (
    Totals,
    aggregate,
    aggregate_by_project,
    calculate_earnings,
    expenses_by_category,
)
from contractor_tracker.aggregators.entry_filter import (
    DateFilter,
    DateRange,
    date_lower_bound,
    filter_entries,
    project_names,
)

__all__ = [
    # entry_aggregator
    "Totals",
    "aggregate",
    "aggregate_by_project",
    "calculate_earnings",
    "expenses_by_category",
    # entry_filter
    "DateFilter",
    "DateRange",
    "date_lower_bound",
    "filter_entries",
    "project_names",
]
