"""CLI commands."""

from contractor_tracker.cli.commands.entries import (
    add_entry,
    delete_entry,
    edit_entry,
    list_entries,
)
from contractor_tracker.cli.commands.invoice import create_invoice
from contractor_tracker.cli.commands.reports import (
    export_csv,
    export_report,
    summary,
)
from contractor_tracker.cli.commands.settings import categories, profile, theme

__all__ = [
    "add_entry",
    "categories",
    "create_invoice",
    "delete_entry",
    "edit_entry",
    "export_csv",
    "export_report",
    "list_entries",
    "profile",
    "summary",
    "theme",
]
