"""Structured logging utilities with context support."""

import functools
import logging
import threading
from typing import Any, Callable, Dict, Optional

# Thread-local storage for log context
_thread_local = threading.local()

# Record fields whose content is bulky binary data (data URLs)
BULKY_FIELDS = {"receiptImage", "receipt_image"}

MAX_LOGGED_TEXT = 80


class LogContext:
    """
    Context manager for adding structured fields to log records.

    Fields are stored in thread-local storage and attached to every record
    emitted inside the block by the ContextFilter installed by
    configure_logging().

    Example:
        with LogContext(invoice_number="INV-0042"):
            logger.info("Rendering invoice")
            # Record carries invoice_number="INV-0042"
    """

    def __init__(self, **kwargs):
        """
        Initialize log context with custom fields.

        Args:
            **kwargs: Key-value pairs to add to log records
        """
        self.fields = kwargs
        self.previous_context: Optional[Dict[str, Any]] = None

    def __enter__(self):
        """Enter context and add fields to thread-local storage."""
        if not hasattr(_thread_local, "context"):
            _thread_local.context = {}

        self.previous_context = _thread_local.context.copy()
        _thread_local.context.update(self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context and restore the previous fields."""
        _thread_local.context = self.previous_context or {}


def current_context() -> Dict[str, Any]:
    """Return a copy of the fields currently in scope."""
    return dict(getattr(_thread_local, "context", {}))


class ContextFilter(logging.Filter):
    """Logging filter that adds context fields to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Add context fields to log record.

        Returns:
            True (always allow record through)
        """
        for key, value in current_context().items():
            setattr(record, key, value)
        return True


def summarize_record(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shorten a stored record for inclusion in log messages.

    Bulky fields such as receipt images are replaced by their size and long
    text values are truncated.

    Args:
        data: Record to summarize

    Returns:
        New dictionary safe to log
    """
    summary: Dict[str, Any] = {}

    for key, value in data.items():
        if key in BULKY_FIELDS and value:
            summary[key] = f"<{len(str(value))} chars>"
        elif isinstance(value, str) and len(value) > MAX_LOGGED_TEXT:
            summary[key] = value[:MAX_LOGGED_TEXT] + "..."
        else:
            summary[key] = value

    return summary


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Decorator to log function entry and exit.

    Exceptions are logged with their traceback and re-raised.

    Args:
        func: Function to decorate (when used without arguments)
        include_args: Whether to include function arguments in logs
        level: Log level to use (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Decorated function

    Example:
        @log_function_call
        def render(self):
            ...

        @log_function_call(include_args=True, level="INFO")
        def export(path):
            ...
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())

            if include_args:
                args_repr = [repr(a) for a in args]
                kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
                signature = ", ".join(args_repr + kwargs_repr)
                logger.log(
                    log_level, f"Entering {f.__qualname__} with args: {signature}"
                )
            else:
                logger.log(log_level, f"Entering {f.__qualname__}")

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Exception in {f.__qualname__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            logger.log(log_level, f"Exiting {f.__qualname__}")
            return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)
