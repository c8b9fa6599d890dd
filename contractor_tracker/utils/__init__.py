"""Shared helpers: numeric coercion, calendar dates and structured logging."""
