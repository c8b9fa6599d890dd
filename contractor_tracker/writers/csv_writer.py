"""CSV export of entries.

The export starts with a short metadata block (title, contractor, business,
generation date), then a blank line, then one row per entry in a fixed
column order. Mileage payment is the only derived column; no totals are
computed here.
"""

import datetime as dt
import io
import logging
from decimal import Decimal
from typing import List, Optional, Sequence

import pandas as pd

from contractor_tracker.config.settings import MILEAGE_RATE
from contractor_tracker.models.entry import Entry
from contractor_tracker.models.profile import ContractorProfile
from contractor_tracker.utils.logging_utils import log_function_call
from contractor_tracker.utils.number_utils import round_money

logger = logging.getLogger(__name__)

CSV_TITLE = "Contractor Time & Expense Report"

CSV_COLUMNS = [
    "Date",
    "Project",
    "Driving Hours",
    "Standard Hours",
    "Overtime Hours",
    "Night Hours",
    "Night OT Hours",
    "Weekend Hours",
    "Weekend OT Hours",
    "Mileage",
    "Mileage Payment",
    "Per Diem",
    "Other Expense",
    "Expense Category",
    "Expense Description",
    "Notes",
]


def _cell(value: Optional[Decimal]) -> str:
    return "" if value is None else str(value)


class EntryCsvWriter:
    """Render entries as CSV bytes.

    Example:
        >>> writer = EntryCsvWriter(entries, profile)
        >>> data = writer.render()
        >>> data.splitlines()[0]
        b'Report,Contractor Time & Expense Report'
    """

    def __init__(
        self,
        entries: Sequence[Entry],
        profile: Optional[ContractorProfile] = None,
        mileage_rate: Decimal = MILEAGE_RATE,
        generated_on: Optional[dt.date] = None,
    ):
        """Initialize with the entries to export.

        Args:
            entries: Entries in the order they should appear
            profile: Contractor details for the metadata block
            mileage_rate: Currency per mile for the Mileage Payment column
            generated_on: Date printed in the metadata block (default today)
        """
        self.entries = list(entries)
        self.profile = profile or ContractorProfile()
        self.mileage_rate = mileage_rate
        self.generated_on = generated_on or dt.date.today()

    def build_metadata(self) -> pd.DataFrame:
        """Two-column metadata block printed above the entry table."""
        rows = [
            ["Report", CSV_TITLE],
            ["Contractor", self.profile.name or ""],
            ["Business", self.profile.business or ""],
            ["Generated", self.generated_on.isoformat()],
        ]
        return pd.DataFrame(rows)

    def build_table(self) -> pd.DataFrame:
        """One row per entry in CSV_COLUMNS order."""
        if not self.entries:
            return pd.DataFrame(columns=CSV_COLUMNS)

        rows: List[List[str]] = []
        for entry in self.entries:
            mileage_payment = round_money(entry.amount("mileage") * self.mileage_rate)
            rows.append(
                [
                    entry.date.isoformat(),
                    entry.project_name or "",
                    _cell(entry.driving_hours),
                    _cell(entry.standard_hours),
                    _cell(entry.overtime_hours),
                    _cell(entry.night_hours),
                    _cell(entry.night_overtime_hours),
                    _cell(entry.weekend_hours),
                    _cell(entry.weekend_overtime_hours),
                    _cell(entry.mileage),
                    f"{mileage_payment:.2f}",
                    _cell(entry.per_diem),
                    _cell(entry.other_expense),
                    entry.expense_category or "",
                    entry.expense_description or "",
                    entry.notes or "",
                ]
            )

        return pd.DataFrame(rows, columns=CSV_COLUMNS)

    @log_function_call
    def render(self) -> bytes:
        """Render the metadata block, a blank line and the entry table."""
        buffer = io.StringIO()
        self.build_metadata().to_csv(buffer, header=False, index=False)
        buffer.write("\n")
        self.build_table().to_csv(buffer, index=False)

        logger.info(f"Rendered CSV with {len(self.entries)} entries")
        return buffer.getvalue().encode("utf-8")


def render_csv(
    entries: Sequence[Entry],
    profile: Optional[ContractorProfile] = None,
    mileage_rate: Decimal = MILEAGE_RATE,
) -> bytes:
    """Render entries as CSV bytes (see EntryCsvWriter)."""
    return EntryCsvWriter(entries, profile, mileage_rate).render()
