r"""Structured logging utilities for machine-readable log output.

abackoff logs the progress of each retry run at DEBUG level. The events
emitted when an attempt finishes carry the attempt metrics (working
time, delays, ...) as ``extra`` fields, which the formatter provided
here renders as JSON objects.

The structured logging system is opt-in: abackoff never configures
handlers itself.

Example:
    Enable structured logging for abackoff:

    ```python
    import logging
    from abackoff.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("abackoff")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

    Use a correlation id to group the events of one run:

    ```python
    from abackoff import Backoff
    from abackoff.utils.structured_logging import clear_correlation_id, set_correlation_id

    set_correlation_id("job-123")
    try:
        Backoff.exponential(1).max_attempts(5).attempt(fetch_report)
    finally:
        clear_correlation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "abackoff_correlation_id", default=None
)

# Attributes every LogRecord carries, everything else came from ``extra``
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.DEBUG, "", 0, "", (), None))
) | {"message", "asctime"}


def get_correlation_id() -> str | None:
    """Get the correlation id of the current context.

    Returns:
        The current correlation id, or None if not set.

    Example:
        ```pycon
        >>> from abackoff.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> clear_correlation_id()
        >>> get_correlation_id()
        >>> set_correlation_id("job-123")
        >>> get_correlation_id()
        'job-123'

        ```
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation id of the current context.

    The id is stored in a context variable, so each thread and each
    asyncio task sees its own value.

    Args:
        correlation_id: The correlation id to set (e.g. a job id).
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation id of the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp (UTC, millisecond precision)
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - module, function, line: Where the event was logged
        - correlation_id: Only when one is set

    The fields passed through ``extra`` are added as-is when they are
    JSON serializable, and as their ``repr`` otherwise.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from io import StringIO
        >>> from abackoff.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_formatter")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.DEBUG)
        >>> logger.debug("Attempt 2 finished", extra={"attempt_number": 2})
        >>> data = json.loads(stream.getvalue())
        >>> data["message"], data["attempt_number"]
        ('Attempt 2 finished', 2)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        """Format the record time as ISO 8601, ignoring ``datefmt``."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log a message with structured fields.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Structured fields to attach to the record.
    """
    logger.log(level, message, extra=extra)
