"""Error handling for CLI commands."""

import sys
import traceback

import click
from pydantic import ValidationError

from contractor_tracker.cli.utils.formatters import (
    format_error,
    format_report_issues,
    format_warning,
)
from contractor_tracker.exceptions import (
    ConfigurationError,
    EntryNotFoundError,
    ExportError,
    StorageError,
    TrackerError,
    ValidationFailedError,
)

EXIT_CONFIGURATION = 1
EXIT_TRACKER = 2
EXIT_VALIDATION = 3
EXIT_NOT_FOUND = 4
EXIT_STORAGE = 5
EXIT_EXPORT = 6
EXIT_ABORTED = 130
EXIT_UNEXPECTED = 255


def _echo_hint(error: TrackerError) -> None:
    if error.recovery_hint:
        click.echo(format_warning(f"Hint: {error.recovery_hint}"))


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Print a user-friendly message for ``error``.

    Args:
        error: The exception that occurred
        debug: Whether to show the full stack trace for unexpected errors

    Returns:
        Exit code for the error type
    """
    if isinstance(error, ConfigurationError):
        click.echo(format_error(f"Configuration Error: {error.message}"))
        _echo_hint(error)
        return EXIT_CONFIGURATION

    elif isinstance(error, ValidationFailedError):
        click.echo(format_error(f"Validation Error: {error.message}"))
        for line in format_report_issues(error.report):
            click.echo(f"  {line}")
        _echo_hint(error)
        return EXIT_VALIDATION

    elif isinstance(error, EntryNotFoundError):
        click.echo(format_error(f"Not Found: {error.message}"))
        _echo_hint(error)
        return EXIT_NOT_FOUND

    elif isinstance(error, StorageError):
        click.echo(format_error(f"Storage Error: {error.message}"))
        _echo_hint(error)
        return EXIT_STORAGE

    elif isinstance(error, ExportError):
        click.echo(format_error(f"Export Error: {error.message}"))
        _echo_hint(error)
        return EXIT_EXPORT

    elif isinstance(error, TrackerError):
        click.echo(format_error(error.message))
        _echo_hint(error)
        return EXIT_TRACKER

    elif isinstance(error, ValidationError):
        click.echo(format_error("Validation Error: invalid value"))
        for detail in error.errors():
            location = ".".join(str(part) for part in detail.get("loc", ()))
            message = detail.get("msg", "Invalid value")
            click.echo(f"  {format_error(f'{location}: {message}')}")
        return EXIT_VALIDATION

    # User cancellation
    elif isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return EXIT_ABORTED

    else:
        click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
        click.echo(str(error))

        if debug:
            click.echo("\nFull stack trace:")
            click.echo(
                "".join(
                    traceback.format_exception(
                        type(error), error, error.__traceback__
                    )
                )
            )
        else:
            click.echo(format_warning("\nRun with --debug flag for full stack trace"))

        return EXIT_UNEXPECTED


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Errors raised inside the block are reported through handle_cli_error()
    and the process exits with the matching exit code.

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                ...
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if isinstance(exc_val, Exception) and not isinstance(
                exc_val, (click.ClickException, click.exceptions.Exit)
            ):
                exit_code = handle_cli_error(exc_val, self.show_debug)
                sys.exit(exit_code)
            return False

    return ErrorHandler(debug)
