"""Shared plumbing for CLI commands: loading the tracker and entry filters."""

from typing import Callable, List, Optional, Tuple

import click
from pydantic import ValidationError

from contractor_tracker.aggregators.entry_filter import (
    DateFilter,
    DateRange,
    filter_entries,
    project_names,
)
from contractor_tracker.cli.utils.formatters import format_success, format_warning
from contractor_tracker.config.settings import TrackerConfig, get_config
from contractor_tracker.exceptions import ConfigurationError
from contractor_tracker.models.entry import Entry
from contractor_tracker.services.tracker_service import TrackerService


def open_tracker() -> Tuple[TrackerService, TrackerConfig]:
    """
    Load the configuration and the persisted tracker state.

    Returns:
        Tuple of (loaded service, configuration)

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    try:
        config = get_config()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)\n{e}",
            recovery_hint="Check DATA_FILE, EXPORT_DIR and MILEAGE_RATE in .env",
        ) from e

    service = TrackerService.from_config(config)
    service.load()
    return service, config


def is_debug() -> bool:
    """Whether the group was invoked with --debug."""
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return False
    return bool((ctx.find_root().obj or {}).get("debug"))


def filter_options(func: Callable) -> Callable:
    """Add the --range/--start/--end/--project entry filter options."""
    options = [
        click.option(
            "--range",
            "date_range",
            type=click.Choice([f.value for f in DateFilter], case_sensitive=False),
            default=None,
            help=(
                "Date range: all, today, week, month or custom "
                "(default: custom when --start/--end are given, else all)"
            ),
        ),
        click.option(
            "--start", type=str, default=None, help="Custom range start (YYYY-MM-DD)"
        ),
        click.option(
            "--end", type=str, default=None, help="Custom range end (YYYY-MM-DD)"
        ),
        click.option(
            "--project", type=str, default=None, help="Only entries of this project"
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def apply_filters(
    entries: List[Entry],
    date_range: Optional[str],
    start: Optional[str],
    end: Optional[str],
    project: Optional[str],
) -> List[Entry]:
    """Apply the filter options of a command to ``entries``."""
    if project and project not in project_names(entries):
        known = ", ".join(project_names(entries)) or "none"
        click.echo(
            format_warning(f"No entries for project '{project}'. Known projects: {known}")
        )

    if date_range is None:
        date_range = DateFilter.CUSTOM.value if (start or end) else DateFilter.ALL.value

    return filter_entries(
        entries,
        DateFilter(date_range.lower()),
        custom_range=DateRange.from_strings(start, end),
        project_name=project,
    )


def describe_filters(
    date_range: Optional[str],
    start: Optional[str],
    end: Optional[str],
    project: Optional[str],
) -> str:
    """Human readable description of the active filters."""
    if start or end:
        period = f"{start or '...'} to {end or '...'}"
    elif date_range and date_range.lower() != DateFilter.ALL.value:
        period = f"Range: {date_range.lower()}"
    else:
        period = "All dates"
    if project:
        period += f" | Project: {project}"
    return period


def echo_saved(service: TrackerService, message: str) -> None:
    """Report a change as done, or warn that it did not reach the data file."""
    if service.last_save_ok:
        click.echo(format_success(message))
    else:
        click.echo(
            format_warning(
                f"{message}, but the data file could not be written; "
                "the change is lost when this command exits"
            )
        )
