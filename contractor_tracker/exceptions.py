"""Exception hierarchy for the contractor tracker."""

from typing import Optional

from contractor_tracker.validators.validation_report import ValidationReport


class TrackerError(Exception):
    """Base exception with a user-facing message and optional recovery hint."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize tracker error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ValidationFailedError(TrackerError):
    """Input failed validation; the action was aborted with no state change."""

    def __init__(
        self,
        message: str,
        report: ValidationReport,
        recovery_hint: Optional[str] = None,
    ):
        self.report = report
        super().__init__(message, recovery_hint)


class EntryValidationError(ValidationFailedError):
    """An entry could not be created or updated."""

    pass


class InvoiceValidationError(ValidationFailedError):
    """An invoice cannot be rendered."""

    pass


class EntryNotFoundError(TrackerError):
    """No entry has the requested identifier."""

    def __init__(self, entry_id: int):
        self.entry_id = entry_id
        super().__init__(
            f"No entry with id {entry_id}",
            recovery_hint="Run 'contractor-tracker list' to see entry ids",
        )


class StorageError(TrackerError):
    """The key-value store could not be read or written."""

    pass


class ExportError(TrackerError):
    """A document could not be written."""

    pass


class ConfigurationError(TrackerError):
    """Configuration could not be loaded."""

    pass
