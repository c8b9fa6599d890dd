"""Report commands: summary, export-csv and export-report."""

import datetime as dt
from typing import Optional

import click

from contractor_tracker.aggregators.entry_aggregator import (
    aggregate,
    aggregate_by_project,
    expenses_by_category,
)
from contractor_tracker.cli.error_handlers import with_error_handling
from contractor_tracker.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
    format_totals,
)
from contractor_tracker.cli.utils.session import (
    apply_filters,
    describe_filters,
    filter_options,
    is_debug,
    open_tracker,
)
from contractor_tracker.utils.number_utils import (
    format_currency,
    format_hours,
    round_money,
)
from contractor_tracker.writers.csv_writer import EntryCsvWriter
from contractor_tracker.writers.filenames import csv_filename, report_filename
from contractor_tracker.writers.output import write_document
from contractor_tracker.writers.pdf_report_writer import PdfReportWriter


@click.command(name="summary")
@filter_options
@click.option("--by-project", is_flag=True, help="Also show totals per project")
def summary(
    date_range: Optional[str],
    start: Optional[str],
    end: Optional[str],
    project: Optional[str],
    by_project: bool,
):
    """Show hour, mileage and expense totals.

    Labor earnings are included when default rates are set in the profile.

    Example:
        contractor-tracker summary --range month
        contractor-tracker summary --by-project
    """
    with with_error_handling(is_debug()):
        service, config = open_tracker()

        entries = apply_filters(service.list_entries(), date_range, start, end, project)
        rates = service.state.profile.default_rates
        rate_table = rates if rates.configured_categories() else None

        click.echo(format_info(describe_filters(date_range, start, end, project)))
        totals = aggregate(
            entries, rate_table=rate_table, mileage_rate=config.mileage_rate
        )
        click.echo(format_totals(totals))

        expenses = expenses_by_category(entries)
        if expenses:
            click.echo()
            rows = [
                [name, format_currency(amount)] for name, amount in expenses.items()
            ]
            click.echo(format_table(["Expense Category", "Amount"], rows))

        if by_project:
            per_project = aggregate_by_project(
                entries, rate_table=rate_table, mileage_rate=config.mileage_rate
            )
            rows = [
                [
                    name,
                    str(project_totals.entry_count),
                    format_hours(project_totals.total_hours),
                    format_currency(round_money(project_totals.total_reimbursement)),
                ]
                for name, project_totals in per_project.items()
            ]
            click.echo()
            click.echo(
                format_table(["Project", "Entries", "Hours", "Reimbursement"], rows)
            )


@click.command(name="export-csv")
@filter_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: EXPORT_DIR/contractor_entries_<date>.csv)",
)
def export_csv(
    date_range: Optional[str],
    start: Optional[str],
    end: Optional[str],
    project: Optional[str],
    output: Optional[str],
):
    """Export entries as CSV.

    Example:
        contractor-tracker export-csv --range month
        contractor-tracker export-csv -o june.csv --start 2025-06-01 --end 2025-06-30
    """
    with with_error_handling(is_debug()):
        service, config = open_tracker()

        entries = apply_filters(service.list_entries(), date_range, start, end, project)
        data = EntryCsvWriter(
            entries, service.state.profile, mileage_rate=config.mileage_rate
        ).render()

        path = write_document(
            data, csv_filename(dt.date.today()), config.export_dir, output
        )
        click.echo(format_success(f"Exported {len(entries)} entries to {path}"))


@click.command(name="export-report")
@filter_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: EXPORT_DIR/contractor_report_<date>.pdf)",
)
def export_report(
    date_range: Optional[str],
    start: Optional[str],
    end: Optional[str],
    project: Optional[str],
    output: Optional[str],
):
    """Export a PDF report of the filtered entries.

    Example:
        contractor-tracker export-report --range month --project Acme
    """
    with with_error_handling(is_debug()):
        service, config = open_tracker()

        entries = apply_filters(service.list_entries(), date_range, start, end, project)
        rates = service.state.profile.default_rates
        totals = aggregate(
            entries,
            rate_table=rates if rates.configured_categories() else None,
            mileage_rate=config.mileage_rate,
        )

        writer = PdfReportWriter(
            entries,
            service.state.profile,
            totals,
            subtitle=describe_filters(date_range, start, end, project),
        )
        data = writer.render()

        path = write_document(
            data, report_filename(dt.date.today(), project), config.export_dir, output
        )
        click.echo(
            format_success(
                f"Exported report of {len(entries)} entries "
                f"({writer.page_count} page(s)) to {path}"
            )
        )
