r"""Structured logging utilities for machine-readable log output.

The retry executors log every failed attempt and every backoff wait with
structured fields (``attempt``, ``max_retries``, ``wait_time``,
``error_type``). This module provides a JSON formatter that renders those
fields, and an invocation ID that ties together the records produced by a
single retry invocation.

The structured logging system is opt-in and can be enabled by configuring
Python's logging system to use the provided formatter.

Example:
    Enable structured logging for reattempt:

    ```python
    import logging
    from reattempt.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("reattempt")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

    Use a fixed invocation ID to correlate retries with a request:

    ```python
    from reattempt import call_with_retry
    from reattempt.utils.structured_logging import set_invocation_id, clear_invocation_id

    set_invocation_id("request-123")
    try:
        call_with_retry(fetch_data)
    finally:
        clear_invocation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_invocation_id",
    "get_invocation_id",
    "invocation_scope",
    "log_structured",
    "set_invocation_id",
]

import contextvars
import json
import logging
import time
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Generator

# Context variable for the current retry invocation (thread-safe and task-safe)
_invocation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "invocation_id", default=None
)

_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


def get_invocation_id() -> str | None:
    """Get the current invocation ID.

    Returns:
        The current invocation ID, or None if not set.

    Example:
        ```pycon
        >>> from reattempt.utils.structured_logging import (
        ...     clear_invocation_id,
        ...     get_invocation_id,
        ...     set_invocation_id,
        ... )
        >>> set_invocation_id("req-123")
        >>> get_invocation_id()
        'req-123'
        >>> clear_invocation_id()

        ```
    """
    return _invocation_id.get()


def set_invocation_id(invocation_id: str) -> None:
    """Set the invocation ID for the current context.

    Args:
        invocation_id: The ID to attach to log records (e.g. request ID,
            trace ID).
    """
    _invocation_id.set(invocation_id)


def clear_invocation_id() -> None:
    """Clear the invocation ID for the current context."""
    _invocation_id.set(None)


@contextmanager
def invocation_scope() -> Generator[str, None, None]:
    """Ensure an invocation ID is set while the block runs.

    An ID already set by the caller is kept. Otherwise a fresh random ID is
    set and removed when the block exits.

    Yields:
        The invocation ID in effect.

    Example:
        ```pycon
        >>> from reattempt.utils.structured_logging import get_invocation_id, invocation_scope
        >>> with invocation_scope() as invocation_id:
        ...     get_invocation_id() == invocation_id
        ...
        True
        >>> get_invocation_id() is None
        True

        ```
    """
    current = _invocation_id.get()
    if current is not None:
        yield current
        return
    new_id = uuid.uuid4().hex
    token = _invocation_id.set(new_id)
    try:
        yield new_id
    finally:
        _invocation_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - invocation_id: Optional retry invocation ID
        - module, function, line: Where the record originated

    Any additional fields added via the ``extra`` parameter of logging calls
    are included in the JSON output. Values that are not JSON serializable
    are rendered with ``repr``.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from reattempt.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured_formatter")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Attempt failed", extra={"attempt": 1})
        >>> '"attempt": 1' in stream.getvalue()
        True

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

        invocation_id = get_invocation_id()
        if invocation_id is not None:
            log_data["invocation_id"] = invocation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=repr)

    def formatTime(  # noqa: N802
        self, record: logging.LogRecord, datefmt: str | None = None  # noqa: ARG002
    ) -> str:
        """Format timestamp as ISO 8601 with millisecond precision."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Additional structured fields to include in the log.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra)
