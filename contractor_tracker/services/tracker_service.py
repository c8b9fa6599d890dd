"""Application state service for the contractor tracker.

This module owns the in-memory application state (entries, profile, expense
categories, theme and the invoice memo) and synchronizes it with a
key-value store. Every mutation updates memory first and then saves the
affected key; a failed save is logged and reported through the return
value and ``last_save_ok``, and the in-memory state stays usable for the
rest of the session.
"""

import base64
import datetime as dt
import json
import logging
import mimetypes
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import ValidationError

from contractor_tracker.calculators.invoice_calculator import (
    InvoiceResult,
    build_invoice,
    select_entries,
)
from contractor_tracker.config.settings import MILEAGE_RATE, TrackerConfig
from contractor_tracker.exceptions import (
    EntryNotFoundError,
    EntryValidationError,
    InvoiceValidationError,
    StorageError,
)
from contractor_tracker.models.entry import Entry
from contractor_tracker.models.invoice import InvoiceDraft, InvoiceSettings, RateTable
from contractor_tracker.models.profile import ContractorProfile, ExpenseCategorySet
from contractor_tracker.services.key_value_store import JsonFileStore, KeyValueStore
from contractor_tracker.utils.logging_utils import LogContext, summarize_record
from contractor_tracker.validators.entry_validators import EntryValidator
from contractor_tracker.validators.invoice_validators import InvoiceValidator
from contractor_tracker.validators.validation_report import (
    ValidationReport,
    ValidationSeverity,
)

logger = logging.getLogger(__name__)

ENTRIES_KEY = "contractor-entries"
PROFILE_KEY = "contractor-info"
CATEGORIES_KEY = "expense-categories"
THEME_KEY = "theme"
INVOICE_SETTINGS_KEY = "invoice-settings"

MAX_RECEIPT_BYTES = 5 * 1024 * 1024


class Theme(str, Enum):
    """Display theme preference."""

    DARK = "dark"
    LIGHT = "light"


@dataclass
class TrackerState:
    """Everything the tracker keeps between sessions."""

    entries: List[Entry] = field(default_factory=list)
    profile: ContractorProfile = field(default_factory=ContractorProfile)
    categories: ExpenseCategorySet = field(default_factory=ExpenseCategorySet)
    theme: Theme = Theme.DARK
    invoice_settings: InvoiceSettings = field(default_factory=InvoiceSettings)


def _report_from_pydantic(error: ValidationError) -> ValidationReport:
    report = ValidationReport()
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "entry"
        report.add_error(
            location, detail.get("msg", "Invalid value"), detail.get("input")
        )
    return report


class TrackerService:
    """Loads, mutates and saves the tracker state.

    Attributes:
        state: The loaded application state
        last_save_ok: Whether the most recent save reached the store

    Example:
        >>> service = TrackerService(InMemoryStore())
        >>> service.load()
        >>> entry = service.add_entry({"date": "2025-06-01", "standard_hours": "8"})
        >>> service.get_entry(entry.id).standard_hours
        Decimal('8')
    """

    def __init__(self, store: KeyValueStore, mileage_rate: Decimal = MILEAGE_RATE):
        """
        Initialize the service.

        Args:
            store: Key-value store holding the persisted state
            mileage_rate: Currency per mile used for invoices
        """
        self.store = store
        self.mileage_rate = mileage_rate
        self.state = TrackerState()
        self.last_save_ok = True

    @classmethod
    def from_config(cls, config: TrackerConfig) -> "TrackerService":
        """Create a service backed by the configured data file."""
        return cls(JsonFileStore(config.data_file), mileage_rate=config.mileage_rate)

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    def _read_json(self, key: str) -> Any:
        text = self.store.get(key)
        if text is None:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(
                f"Stored value for '{key}' is corrupted, using defaults: {e}"
            )
            return None

    def _load_entries(self) -> List[Entry]:
        data = self._read_json(ENTRIES_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(f"Stored '{ENTRIES_KEY}' is not a list, ignoring it")
            return []

        entries = []
        for index, record in enumerate(data):
            try:
                entries.append(Entry.from_record(record))
            except (ValidationError, TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid stored entry #{index}: {e}")
        return entries

    def _load_model(self, key: str, model_cls, default):
        data = self._read_json(key)
        if data is None:
            return default
        try:
            return model_cls.from_record(data)
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Stored '{key}' is invalid, using defaults: {e}")
            return default

    def load(self) -> TrackerState:
        """Load the state from the store.

        Missing or corrupted keys fall back to defaults; loading never fails.

        Returns:
            The loaded state (also available as ``self.state``)
        """
        entries = self._load_entries()
        profile = self._load_model(PROFILE_KEY, ContractorProfile, ContractorProfile())
        invoice_settings = self._load_model(
            INVOICE_SETTINGS_KEY, InvoiceSettings, InvoiceSettings()
        )

        categories = ExpenseCategorySet()
        stored_categories = self._read_json(CATEGORIES_KEY)
        if isinstance(stored_categories, list):
            categories = ExpenseCategorySet(
                categories=[c for c in stored_categories if isinstance(c, str)]
            )

        theme = Theme.DARK
        stored_theme = self._read_json(THEME_KEY)
        if stored_theme is not None:
            try:
                theme = Theme(stored_theme)
            except ValueError:
                logger.warning(f"Unknown stored theme {stored_theme!r}, using dark")

        self.state = TrackerState(
            entries=entries,
            profile=profile,
            categories=categories,
            theme=theme,
            invoice_settings=invoice_settings,
        )

        logger.info(f"Loaded {len(entries)} entries")
        return self.state

    def _save(self, key: str, payload: Any) -> bool:
        try:
            self.store.set(key, json.dumps(payload))
        except (StorageError, OSError) as e:
            logger.error(
                f"Failed to save '{key}'; changes kept for this session: {e}"
            )
            self.last_save_ok = False
        else:
            self.last_save_ok = True
        return self.last_save_ok

    def save_entries(self) -> bool:
        """Persist the entry list. Returns False if the store failed."""
        return self._save(ENTRIES_KEY, [e.to_record() for e in self.state.entries])

    def export_state(self) -> Dict[str, Any]:
        """The persisted representation of every key, as JSON values."""
        return {
            ENTRIES_KEY: [e.to_record() for e in self.state.entries],
            PROFILE_KEY: self.state.profile.to_record(),
            CATEGORIES_KEY: list(self.state.categories.categories),
            THEME_KEY: self.state.theme.value,
            INVOICE_SETTINGS_KEY: self.state.invoice_settings.to_record(),
        }

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def _validator(self) -> EntryValidator:
        return EntryValidator(categories=self.state.categories.categories)

    def _log_warnings(self, report: ValidationReport) -> None:
        for issue in report.issues:
            if issue.severity != ValidationSeverity.ERROR:
                logger.info(str(issue))

    def _index_of(self, entry_id: int) -> int:
        for index, entry in enumerate(self.state.entries):
            if entry.id == entry_id:
                return index
        raise EntryNotFoundError(entry_id)

    def get_entry(self, entry_id: int) -> Entry:
        """Return the entry with ``entry_id``.

        Raises:
            EntryNotFoundError: If no entry has that id
        """
        return self.state.entries[self._index_of(entry_id)]

    def list_entries(self, newest_first: bool = False) -> List[Entry]:
        """Entries in stored order, or most recently created first."""
        entries = list(self.state.entries)
        if newest_first:
            entries.sort(key=lambda e: (e.timestamp, e.id), reverse=True)
        return entries

    def add_entry(self, values: Mapping[str, Any]) -> Entry:
        """Validate form values and append a new entry.

        Args:
            values: Entry fields (snake_case keys); ``date`` is required

        Returns:
            The created entry

        Raises:
            EntryValidationError: If the values are invalid (nothing is stored)
        """
        report = self._validator().validate(values, require_date=True)
        if report.has_errors():
            raise EntryValidationError(
                f"Entry not added: {report.summary()}", report
            )
        self._log_warnings(report)

        fields = {k: v for k, v in values.items() if k not in ("id", "timestamp")}
        try:
            entry = Entry.create(**fields)
        except ValidationError as e:
            raise EntryValidationError(
                "Entry not added: invalid values", _report_from_pydantic(e)
            ) from e

        self.state.entries.append(entry)
        with LogContext(entry_id=entry.id):
            logger.info(f"Added entry {entry.id} for {entry.date}")
            logger.debug(f"Entry data: {summarize_record(entry.to_record())}")
        self.save_entries()
        return entry

    def update_entry(self, entry_id: int, values: Mapping[str, Any]) -> Entry:
        """Update an entry in place.

        Only the given fields change; a blank value clears an optional field.
        The id and creation timestamp never change.

        Raises:
            EntryNotFoundError: If no entry has that id
            EntryValidationError: If the values are invalid (nothing changes)
        """
        index = self._index_of(entry_id)
        existing = self.state.entries[index]

        report = self._validator().validate(
            {**values, "id": entry_id}, require_date=False
        )
        if report.has_errors():
            raise EntryValidationError(
                f"Entry {entry_id} not updated: {report.summary()}", report
            )
        self._log_warnings(report)

        merged = existing.model_dump()
        merged.update(
            {k: v for k, v in values.items() if k not in ("id", "timestamp")}
        )
        merged["id"] = existing.id
        merged["timestamp"] = existing.timestamp

        try:
            updated = Entry.model_validate(merged)
        except ValidationError as e:
            raise EntryValidationError(
                f"Entry {entry_id} not updated: invalid values",
                _report_from_pydantic(e),
            ) from e

        self.state.entries[index] = updated
        with LogContext(entry_id=entry_id):
            logger.info(f"Updated entry {entry_id}")
        self.save_entries()
        return updated

    def delete_entry(self, entry_id: int) -> Entry:
        """Remove an entry.

        Returns:
            The removed entry

        Raises:
            EntryNotFoundError: If no entry has that id
        """
        index = self._index_of(entry_id)
        removed = self.state.entries.pop(index)
        with LogContext(entry_id=entry_id):
            logger.info(f"Deleted entry {entry_id}")
        self.save_entries()
        return removed

    def attach_receipt(self, path: Union[str, Path]) -> str:
        """Read a receipt image into a data URL suitable for ``receipt_image``.

        Raises:
            EntryValidationError: If the file is missing, unreadable or too large
        """
        receipt_path = Path(path).expanduser()
        report = ValidationReport()

        try:
            data = receipt_path.read_bytes()
        except OSError as e:
            report.add_error(
                "receipt_image", f"Cannot read receipt file: {e}", str(path)
            )
            raise EntryValidationError("Receipt not attached", report) from e

        if len(data) > MAX_RECEIPT_BYTES:
            report.add_error(
                "receipt_image",
                f"Receipt is larger than {MAX_RECEIPT_BYTES // (1024 * 1024)} MB",
                str(path),
            )
            raise EntryValidationError("Receipt not attached", report)

        mime_type = (
            mimetypes.guess_type(receipt_path.name)[0] or "application/octet-stream"
        )
        encoded = base64.b64encode(data).decode("ascii")
        logger.debug(f"Attached receipt {receipt_path.name} ({len(data)} bytes)")
        return f"data:{mime_type};base64,{encoded}"

    # ------------------------------------------------------------------
    # Profile, categories, theme
    # ------------------------------------------------------------------

    def update_profile(self, **fields: Any) -> ContractorProfile:
        """Update profile fields (``default_rates`` may be a dict of rates).

        Raises:
            pydantic.ValidationError: If a value is invalid
        """
        data = self.state.profile.model_dump()
        rates = fields.pop("default_rates", None)
        data.update(fields)
        if rates is not None:
            data["default_rates"] = {**data["default_rates"], **dict(rates)}

        self.state.profile = ContractorProfile.model_validate(data)
        logger.info("Updated contractor profile")
        self._save(PROFILE_KEY, self.state.profile.to_record())
        return self.state.profile

    def add_expense_category(self, label: str) -> bool:
        """Append an expense category. Returns False if it already exists."""
        added = self.state.categories.add(label)
        if added:
            logger.info(f"Added expense category '{label.strip()}'")
            self._save(CATEGORIES_KEY, list(self.state.categories.categories))
        return added

    def set_theme(self, theme: Union[Theme, str]) -> Theme:
        """Set the theme preference.

        Raises:
            ValueError: If the theme is unknown
        """
        self.state.theme = Theme(theme)
        self._save(THEME_KEY, self.state.theme.value)
        return self.state.theme

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    def rate_table_for_invoice(self) -> RateTable:
        """Rates for a new invoice: remembered invoice rates over profile defaults."""
        return self.state.invoice_settings.rates.merged_over(
            self.state.profile.default_rates
        )

    def save_invoice_settings(self, settings: InvoiceSettings) -> bool:
        """Remember rates and payment terms for the next invoice."""
        self.state.invoice_settings = settings
        return self._save(INVOICE_SETTINGS_KEY, settings.to_record())

    def prepare_invoice(
        self, draft: InvoiceDraft
    ) -> Tuple[List[Entry], InvoiceResult, ValidationReport]:
        """Build an invoice and apply the rendering gates.

        The draft's rates and terms are remembered for the next invoice once
        the invoice passes validation.

        Args:
            draft: Invoice draft with selected entry ids

        Returns:
            Tuple of (selected entries, computed invoice, validation report)

        Raises:
            InvoiceValidationError: If the selection is empty or unknown, no
                client name is set, or the total is zero
        """
        selected = select_entries(self.state.entries, draft.selected_ids)
        result = build_invoice(
            selected, draft.rate_table, mileage_rate=self.mileage_rate
        )

        report = InvoiceValidator().validate(draft, self.state.entries, result)
        if report.has_errors():
            raise InvoiceValidationError(
                f"Invoice not created: {report.summary()}",
                report,
                recovery_hint=(
                    "Select entries with billable hours or expenses "
                    "and set a client name"
                ),
            )
        self._log_warnings(report)

        self.save_invoice_settings(draft.to_settings())
        return selected, result, report

    def new_invoice_draft(self, **fields: Any) -> InvoiceDraft:
        """Create a draft seeded with remembered rates, terms and default client."""
        settings = self.state.invoice_settings
        seeded: Dict[str, Any] = {
            "client_name": self.state.profile.client,
            "payment_terms": settings.payment_terms,
            "rate_table": self.rate_table_for_invoice(),
            "invoice_date": dt.date.today(),
        }
        seeded.update({k: v for k, v in fields.items() if v is not None})
        return InvoiceDraft.model_validate(seeded)
