"""Contractor time and expense tracker.

Log hours, mileage and expenses, summarize them and export CSV files, PDF
reports and 1099 contractor invoices.
"""

__version__ = "1.0.0"
