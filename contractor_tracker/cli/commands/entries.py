"""Entry commands: add, edit, delete and list."""

import datetime as dt
from typing import Any, Callable, Dict, Optional

import click

from contractor_tracker.cli.error_handlers import with_error_handling
from contractor_tracker.cli.utils.formatters import (
    format_entries,
    format_entry_detail,
    format_info,
    format_success,
    format_warning,
)
from contractor_tracker.cli.utils.session import (
    apply_filters,
    echo_saved,
    filter_options,
    is_debug,
    open_tracker,
)

# CLI option name -> entry field
ENTRY_OPTIONS = {
    "project": "project_name",
    "driving": "driving_hours",
    "standard": "standard_hours",
    "overtime": "overtime_hours",
    "night": "night_hours",
    "night_ot": "night_overtime_hours",
    "weekend": "weekend_hours",
    "weekend_ot": "weekend_overtime_hours",
    "mileage": "mileage",
    "per_diem": "per_diem",
    "other_expense": "other_expense",
    "category": "expense_category",
    "description": "expense_description",
    "notes": "notes",
}


def entry_field_options(func: Callable) -> Callable:
    """Add one option per optional entry field, plus --receipt."""
    options = [
        click.option("--project", help="Project name"),
        click.option("--driving", help="Driving hours"),
        click.option("--standard", help="Standard hours"),
        click.option("--overtime", help="Overtime hours"),
        click.option("--night", help="Night hours"),
        click.option("--night-ot", help="Night overtime hours"),
        click.option("--weekend", help="Weekend hours"),
        click.option("--weekend-ot", help="Weekend overtime hours"),
        click.option("--mileage", help="Miles driven"),
        click.option("--per-diem", help="Per-diem amount"),
        click.option("--other-expense", help="Other expense amount"),
        click.option("--category", help="Expense category"),
        click.option("--description", help="Expense description"),
        click.option("--notes", help="Free-text notes"),
        click.option(
            "--receipt",
            type=click.Path(dir_okay=False),
            default=None,
            help="Receipt image file to attach",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _collect_values(options: Dict[str, Any]) -> Dict[str, Any]:
    return {
        field: options[name]
        for name, field in ENTRY_OPTIONS.items()
        if options.get(name) is not None
    }


@click.command(name="add")
@click.option(
    "--date",
    "entry_date",
    default=lambda: dt.date.today().isoformat(),
    show_default="today",
    help="Entry date (YYYY-MM-DD)",
)
@entry_field_options
def add_entry(entry_date: str, receipt: Optional[str], **options):
    """Add a time and expense entry.

    Example:
        contractor-tracker add --date 2025-06-01 --standard 8 --mileage 20
        contractor-tracker add --other-expense 42.10 --category Fuel \\
            --receipt ~/receipts/fuel.jpg
    """
    with with_error_handling(is_debug()):
        service, _ = open_tracker()

        values = _collect_values(options)
        values["date"] = entry_date
        if receipt:
            values["receipt_image"] = service.attach_receipt(receipt)

        entry = service.add_entry(values)

        echo_saved(service, f"Added entry {entry.id} for {entry.date}")
        click.echo(format_entry_detail(entry))


@click.command(name="edit")
@click.argument("entry_id", type=int)
@click.option("--date", "entry_date", default=None, help="Entry date (YYYY-MM-DD)")
@entry_field_options
def edit_entry(
    entry_id: int, entry_date: Optional[str], receipt: Optional[str], **options
):
    """Update fields of an existing entry.

    Only the given options change. Pass an empty string to clear a field.

    Example:
        contractor-tracker edit 1717250000000 --overtime 2 --notes ""
    """
    with with_error_handling(is_debug()):
        service, _ = open_tracker()

        values = _collect_values(options)
        if entry_date is not None:
            values["date"] = entry_date
        if receipt:
            values["receipt_image"] = service.attach_receipt(receipt)

        if not values:
            click.echo(format_warning("Nothing to change"))
            return

        entry = service.update_entry(entry_id, values)

        echo_saved(service, f"Updated entry {entry.id}")
        click.echo(format_entry_detail(entry))


@click.command(name="delete")
@click.argument("entry_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def delete_entry(entry_id: int, yes: bool):
    """Delete an entry.

    Example:
        contractor-tracker delete 1717250000000 --yes
    """
    with with_error_handling(is_debug()):
        service, _ = open_tracker()
        entry = service.get_entry(entry_id)

        if not yes:
            click.confirm(f"Delete entry {entry.id} from {entry.date}?", abort=True)

        service.delete_entry(entry_id)
        echo_saved(service, f"Deleted entry {entry_id}")


@click.command(name="list")
@filter_options
@click.option(
    "--newest", is_flag=True, help="Most recently added first (default: stored order)"
)
@click.option("--details", is_flag=True, help="Show every field of each entry")
def list_entries(
    date_range: Optional[str],
    start: Optional[str],
    end: Optional[str],
    project: Optional[str],
    newest: bool,
    details: bool,
):
    """List entries.

    Example:
        contractor-tracker list --range week
        contractor-tracker list --start 2025-06-01 --end 2025-06-30 --project Acme
        contractor-tracker list --newest --details
    """
    with with_error_handling(is_debug()):
        service, _ = open_tracker()

        entries = apply_filters(
            service.list_entries(newest_first=newest), date_range, start, end, project
        )

        if not entries:
            click.echo(format_info("No entries found."))
            return

        if details:
            for entry in entries:
                click.echo(format_entry_detail(entry))
                click.echo()
        else:
            click.echo(format_entries(entries))
            click.echo()

        noun = "entry" if len(entries) == 1 else "entries"
        click.echo(format_success(f"Found {len(entries)} {noun}"))
