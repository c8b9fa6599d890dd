"""Settings commands: profile, categories and theme."""

from typing import Optional, Tuple

import click

from contractor_tracker.cli.commands.invoice import parse_rates
from contractor_tracker.cli.error_handlers import with_error_handling
from contractor_tracker.cli.utils.formatters import (
    format_info,
    format_table,
    format_warning,
)
from contractor_tracker.cli.utils.session import echo_saved, is_debug, open_tracker
from contractor_tracker.models.entry import HourCategory
from contractor_tracker.models.profile import ContractorProfile
from contractor_tracker.services.tracker_service import Theme
from contractor_tracker.utils.number_utils import format_currency

PROFILE_FIELDS = ("name", "business", "client", "address", "email", "phone")


def _profile_table(profile: ContractorProfile) -> str:
    rows = [[field.title(), getattr(profile, field) or ""] for field in PROFILE_FIELDS]
    for category in HourCategory:
        rate = getattr(profile.default_rates, category.rate_field_name)
        if rate is not None:
            rows.append([f"{category.label} Rate", f"{format_currency(rate)}/hr"])
    return format_table(["Field", "Value"], rows, max_width=60)


@click.command(name="profile")
@click.option("--name", default=None, help="Your name")
@click.option("--business", default=None, help="Business name")
@click.option("--client", default=None, help="Default client for invoices")
@click.option("--address", default=None, help="Postal address")
@click.option("--email", default=None, help="Email address")
@click.option("--phone", default=None, help="Phone number")
@click.option(
    "--rate",
    "rates",
    multiple=True,
    help="Default hourly rate as CATEGORY=RATE, e.g. standard=50 (repeatable)",
)
def profile(rates: Tuple[str, ...], **fields: Optional[str]):
    """Show or update the contractor profile.

    Without options the current profile is shown. Pass an empty string to
    clear a field.

    Example:
        contractor-tracker profile --name "John Doe" --business "Doe Services LLC"
        contractor-tracker profile --rate standard=50 --rate overtime=75
    """
    with with_error_handling(is_debug()):
        service, _ = open_tracker()

        changes = {k: v for k, v in fields.items() if v is not None}
        if rates:
            changes["default_rates"] = parse_rates(rates)

        if changes:
            updated = service.update_profile(**changes)
            echo_saved(service, "Profile updated")
        else:
            updated = service.state.profile

        click.echo(_profile_table(updated))


@click.command(name="categories")
@click.option("--add", "label", default=None, help="Add an expense category")
def categories(label: Optional[str]):
    """List expense categories or add one.

    Categories can be added but never removed.

    Example:
        contractor-tracker categories
        contractor-tracker categories --add Permits
    """
    with with_error_handling(is_debug()):
        service, _ = open_tracker()

        if label is not None:
            if service.add_expense_category(label):
                echo_saved(service, f"Added category '{label.strip()}'")
            else:
                click.echo(format_warning(f"Category '{label}' already exists"))

        for name in service.state.categories.categories:
            click.echo(f"  {name}")


@click.command(name="theme")
@click.argument(
    "value",
    required=False,
    type=click.Choice([t.value for t in Theme], case_sensitive=False),
)
def theme(value: Optional[str]):
    """Show or set the display theme preference (dark or light).

    Example:
        contractor-tracker theme light
    """
    with with_error_handling(is_debug()):
        service, _ = open_tracker()

        if value is None:
            click.echo(format_info(f"Theme: {service.state.theme.value}"))
            return

        selected = service.set_theme(value.lower())
        echo_saved(service, f"Theme set to {selected.value}")
