r"""Utility functions for retry delays and logging."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_invocation_id",
    "get_invocation_id",
    "log_structured",
    "set_invocation_id",
    "sleep",
    "sleep_async",
]

from reattempt.utils.sleep import sleep, sleep_async
from reattempt.utils.structured_logging import (
    StructuredFormatter,
    clear_invocation_id,
    get_invocation_id,
    log_structured,
    set_invocation_id,
)
