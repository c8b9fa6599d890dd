"""Invoice command."""

from typing import Dict, Optional, Tuple

import click

from contractor_tracker.cli.error_handlers import with_error_handling
from contractor_tracker.cli.utils.formatters import (
    format_info,
    format_invoice,
    format_report_issues,
    format_success,
)
from contractor_tracker.cli.utils.session import (
    apply_filters,
    filter_options,
    is_debug,
    open_tracker,
)
from contractor_tracker.models.entry import HourCategory
from contractor_tracker.models.invoice import RateTable
from contractor_tracker.writers.filenames import invoice_filename
from contractor_tracker.writers.output import write_document
from contractor_tracker.writers.pdf_invoice_writer import PdfInvoiceWriter

RATE_NAMES = [category.value for category in HourCategory]


def parse_rates(values: Tuple[str, ...]) -> Dict[str, str]:
    """Parse ``CATEGORY=RATE`` pairs into RateTable field values.

    Raises:
        click.BadParameter: If a pair is malformed or names an unknown category
    """
    rates: Dict[str, str] = {}
    for value in values:
        name, sep, rate = value.partition("=")
        name = name.strip().lower().replace("-", "_")
        if not sep or name not in RATE_NAMES:
            raise click.BadParameter(
                f"Expected CATEGORY=RATE with CATEGORY one of: {', '.join(RATE_NAMES)}",
                param_hint="--rate",
            )
        rates[HourCategory(name).rate_field_name] = rate.strip()
    return rates


@click.command(name="invoice")
@click.option(
    "--id",
    "entry_ids",
    type=int,
    multiple=True,
    help="Entry to bill (repeatable); without --id the filters select entries",
)
@filter_options
@click.option("--client", default=None, help="Client name (default: profile client)")
@click.option("--client-address", default=None, help="Client address")
@click.option("--client-email", default=None, help="Client email")
@click.option("--number", default=None, help="Invoice number (default: timestamp)")
@click.option("--date", "invoice_date", default=None, help="Invoice date (YYYY-MM-DD)")
@click.option("--due", "due_date", default=None, help="Due date (YYYY-MM-DD)")
@click.option("--terms", default=None, help="Payment terms (remembered)")
@click.option("--notes", default=None, help="Notes printed on the invoice")
@click.option(
    "--rate",
    "rates",
    multiple=True,
    help="Hourly rate as CATEGORY=RATE, e.g. standard=50 (repeatable, remembered)",
)
@click.option(
    "--preview", is_flag=True, help="Show the line items without writing a PDF"
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: EXPORT_DIR/invoice_<number>.pdf)",
)
def create_invoice(
    entry_ids: Tuple[int, ...],
    date_range: Optional[str],
    start: Optional[str],
    end: Optional[str],
    project: Optional[str],
    client: Optional[str],
    client_address: Optional[str],
    client_email: Optional[str],
    number: Optional[str],
    invoice_date: Optional[str],
    due_date: Optional[str],
    terms: Optional[str],
    notes: Optional[str],
    rates: Tuple[str, ...],
    preview: bool,
    output: Optional[str],
):
    """Create a 1099 contractor invoice as PDF.

    Rates and payment terms are remembered for the next invoice; rates not
    given fall back to the remembered ones, then to the profile defaults.

    Example:
        contractor-tracker invoice --range month --client "Acme Corp" --rate standard=50
        contractor-tracker invoice --id 1717250000000 --number INV-0042 --preview
    """
    with with_error_handling(is_debug()):
        service, config = open_tracker()

        if entry_ids:
            selected_ids = list(entry_ids)
        else:
            selected_ids = [
                e.id
                for e in apply_filters(
                    service.list_entries(), date_range, start, end, project
                )
            ]

        rate_table = service.rate_table_for_invoice()
        if rates:
            rate_table = RateTable.model_validate(
                {**rate_table.model_dump(), **parse_rates(rates)}
            )

        draft = service.new_invoice_draft(
            invoice_number=number,
            client_name=client,
            client_address=client_address,
            client_email=client_email,
            invoice_date=invoice_date,
            due_date=due_date,
            payment_terms=terms,
            notes=notes,
            rate_table=rate_table,
            selected_ids=selected_ids,
        )

        selected, result, report = service.prepare_invoice(draft)

        for line in format_report_issues(report):
            click.echo(line)
        click.echo(format_invoice(result))

        if preview:
            click.echo(format_info("Preview only, no PDF written"))
            return

        writer = PdfInvoiceWriter(selected, service.state.profile, draft, result)
        data = writer.render()

        path = write_document(
            data, invoice_filename(writer.invoice_number), config.export_dir, output
        )
        click.echo(
            format_success(
                f"Invoice {writer.invoice_number} for {len(selected)} entries "
                f"written to {path}"
            )
        )
