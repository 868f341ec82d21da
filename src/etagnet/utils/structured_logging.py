r"""Structured logging utilities for machine-readable log output.

Every request event is logged with the request URL in the ``url`` field
(and the HTTP status in ``status_code`` when there is one). With the
default formatter these fields are invisible; with ``StructuredFormatter``
each event becomes one JSON object per line.

Example:
    Emit etagnet events as JSON:

    ```python
    import logging

    from etagnet import fire
    from etagnet.utils.structured_logging import configure_structured_logging

    configure_structured_logging(level=logging.INFO)
    outcome = fire("https://api.example.com/data")
    ```

    Tag all events of a unit of work with a correlation ID:

    ```python
    from etagnet.utils.structured_logging import clear_correlation_id, set_correlation_id

    set_correlation_id("sync-42")
    try:
        outcome = fire("https://api.example.com/data")
    finally:
        clear_correlation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "configure_structured_logging",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
from datetime import datetime, timezone
from typing import IO, Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

# Attributes of a bare LogRecord, anything else came through ``extra``
_RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"message"}

# Request fields logged by the executor, emitted first and in this order
_REQUEST_FIELDS = ("url", "method", "conditional", "status_code")


def get_correlation_id() -> str | None:
    """Get the current correlation ID.

    Returns:
        The current correlation ID, or None if not set.
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context.

    The ID is stored in a context variable, so it is local to the current
    thread or asyncio task.

    Args:
        correlation_id: The correlation ID to set (e.g., request ID, trace ID).

    Example:
        ```pycon
        >>> from etagnet.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("request-456")
        >>> get_correlation_id()
        'request-456'
        >>> clear_correlation_id()

        ```
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID for the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - url, method, conditional, status_code: The request fields, when
          the event carries them
        - correlation_id: Optional correlation/trace ID
        - module, function, line: Where the event was logged
        - thread, process: Who logged it

    Other fields passed through ``extra`` are added as top-level keys
    after these. Values that are not JSON serializable are
    rendered with ``str``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from io import StringIO
        >>> from etagnet.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doc_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("done", extra={"url": "https://example.com"})
        >>> json.loads(stream.getvalue())["url"]
        'https://example.com'

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = record.__dict__
        log_data.update({key: fields[key] for key in _REQUEST_FIELDS if key in fields})

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id

        log_data.update(
            {
                "module": record.module,
                "function": record.funcName,
                "line": record.lineno,
                "thread": record.threadName,
                "process": record.process,
            }
        )
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(
            {
                key: value
                for key, value in fields.items()
                if key not in _RECORD_ATTRIBUTES and key not in log_data
            }
        )
        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        r"""Return the UTC creation time in ISO 8601 with millisecond
        precision, for instance ``2024-05-01T12:00:00.123Z``."""
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return created.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **fields: Any,
) -> None:
    r"""Log a request event with structured fields.

    Fields set to ``None`` are left out, so an event without HTTP status
    has no ``status_code`` key.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        **fields: The event fields, usually ``url``, ``method``,
            ``conditional`` and ``status_code``.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={k: v for k, v in fields.items() if v is not None})


def configure_structured_logging(
    level: int = logging.INFO,
    stream: IO[str] | None = None,
    logger_name: str = "etagnet",
) -> logging.Handler:
    """Attach a JSON handler to the etagnet logger.

    Args:
        level: The level of the etagnet logger.
        stream: The stream to write to. Defaults to ``sys.stderr``.
        logger_name: The logger to configure.

    Returns:
        The installed handler, so that callers can remove it.
    """
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger(logger_name)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
