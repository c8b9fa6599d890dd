"""Contractor Tracker CLI.

This module provides the command-line interface of the tracker: entry
management, summaries, CSV and PDF exports and invoices.
"""

import click

from contractor_tracker import __version__
from contractor_tracker.cli.commands.entries import (
    add_entry,
    delete_entry,
    edit_entry,
    list_entries,
)
from contractor_tracker.cli.commands.invoice import create_invoice
from contractor_tracker.cli.commands.reports import export_csv, export_report, summary
from contractor_tracker.cli.commands.settings import categories, profile, theme
from contractor_tracker.config.logging_config import (
    LoggingConfig,
    configure_logging,
)


@click.group(
    help="Contractor Tracker CLI - Log time and expenses, export reports and invoices"
)
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Verbose logging and full stack traces")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """Contractor Tracker CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    if debug:
        configure_logging(LoggingConfig(log_level="DEBUG"))


# Register commands
cli.add_command(add_entry)
cli.add_command(edit_entry)
cli.add_command(delete_entry)
cli.add_command(list_entries)
cli.add_command(summary)
cli.add_command(export_csv)
cli.add_command(export_report)
cli.add_command(create_invoice)
cli.add_command(profile)
cli.add_command(categories)
cli.add_command(theme)


def main():
    """Main entry point for the CLI."""
    configure_logging(LoggingConfig.from_env())
    cli()


if __name__ == "__main__":
    main()
