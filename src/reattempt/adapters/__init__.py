r"""Retryable actions for specific domains, built on the retry executors.

- ``reattempt.adapters.http``: HTTP requests sent with httpx
- ``reattempt.adapters.statement``: SQL statements run on DB-API 2.0
  connections
"""

from __future__ import annotations

__all__ = [
    "RETRY_STATUS_CODES",
    "execute_statement_with_retry",
    "request_with_retry",
    "request_with_retry_async",
]

from reattempt.adapters.http import (
    RETRY_STATUS_CODES,
    request_with_retry,
    request_with_retry_async,
)
from reattempt.adapters.statement import execute_statement_with_retry
