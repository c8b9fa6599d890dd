"""CLI utility functions."""

from contractor_tracker.cli.utils.formatters import (
    format_entries,
    format_entry_detail,
    format_error,
    format_info,
    format_invoice,
    format_report_issues,
    format_success,
    format_table,
    format_totals,
    format_warning,
)
from contractor_tracker.cli.utils.session import (
    apply_filters,
    describe_filters,
    echo_saved,
    filter_options,
    is_debug,
    open_tracker,
)

__all__ = [
    "apply_filters",
    "describe_filters",
    "echo_saved",
    "filter_options",
    "format_entries",
    "format_entry_detail",
    "format_error",
    "format_info",
    "format_invoice",
    "format_report_issues",
    "format_success",
    "format_table",
    "format_totals",
    "format_warning",
    "is_debug",
    "open_tracker",
]
