"""Default file names for exported documents."""

import datetime as dt
import re
from typing import Optional

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def sanitize_filename_part(text: str) -> str:
    """Replace runs of characters other than letters, digits, ``-`` and ``_``.

    Example:
        >>> sanitize_filename_part("Main St. / Phase 2")
        'Main_St_Phase_2'
    """
    return _UNSAFE_CHARS.sub("_", text)


def report_filename(day: dt.date, project_name: Optional[str] = None) -> str:
    """``contractor_report_<YYYY-MM-DD>[_<project>].pdf``"""
    name = f"contractor_report_{day.isoformat()}"
    if project_name:
        name += f"_{sanitize_filename_part(project_name)}"
    return f"{name}.pdf"


def invoice_filename(invoice_number: str) -> str:
    """``invoice_<number>.pdf``"""
    return f"invoice_{sanitize_filename_part(invoice_number)}.pdf"


def csv_filename(day: dt.date) -> str:
    """``contractor_entries_<YYYY-MM-DD>.csv``"""
    return f"contractor_entries_{day.isoformat()}.csv"
