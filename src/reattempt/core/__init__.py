r"""Core configuration and validation shared by the sync and async
executors."""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY",
    "DEFAULT_MAX_RETRIES",
    "MAX_DELAY",
    "RetryPolicy",
    "validate_delay",
    "validate_exception_types",
    "validate_operation",
    "validate_predicates",
    "validate_retry_params",
]

from reattempt.core.config import DEFAULT_DELAY, DEFAULT_MAX_RETRIES, RetryPolicy
from reattempt.core.validation import (
    MAX_DELAY,
    validate_delay,
    validate_exception_types,
    validate_operation,
    validate_predicates,
    validate_retry_params,
)
