r"""reattempt - Run operations with bounded, cancellable retry logic.

This package runs a caller-supplied operation until it succeeds, retrying
failed attempts with a computed delay in between, and reports every cause
in a single error when all attempts are exhausted.

Key Features:
    - Blocking (``RetryExecutor``) and suspending (``AsyncRetryExecutor``)
      executors sharing the same policy objects
    - Backoff strategies: Constant, Exponential, Exponential with jitter,
      Full random jitter, Linear, Fibonacci, Progression, Gamma, and plain
      functions
    - Retry filters on exception types, exception predicates and result
      predicates
    - Aggregated ``RetryExhaustedError`` exposing every cause in order
    - Cooperative cancellation that interrupts backoff delays
    - Callback system for observability (logging, metrics, alerting)
    - Adapters for HTTP requests (httpx) and SQL statements (DB-API 2.0)

Example:
    ```pycon
    >>> from reattempt import CancellationToken, RetryPolicy, call_with_retry
    >>> from reattempt.backoff import ExponentialJitterBackoff
    >>> token = CancellationToken()
    >>> policy = RetryPolicy(
    ...     max_retries=5,
    ...     backoff_strategy=ExponentialJitterBackoff(initial_delay=0.5, max_delay=10.0),
    ...     retry_on=(ConnectionError, TimeoutError),
    ...     retry_if_result=lambda value: value is None,
    ...     cancellation=token,
    ... )
    >>> result = call_with_retry(fetch_data, policy=policy)  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY",
    "DEFAULT_MAX_RETRIES",
    "AsyncRetryExecutor",
    "CancellationToken",
    "ConstantBackoff",
    "ExponentialBackoff",
    "ExponentialJitterBackoff",
    "RetryCancelledError",
    "RetryConfigurationError",
    "RetryError",
    "RetryExecutor",
    "RetryExhaustedError",
    "RetryPolicy",
    "UnexpectedResultError",
    "__version__",
    "call_with_retry",
    "call_with_retry_async",
    "retryable",
]

from importlib.metadata import PackageNotFoundError, version

from reattempt.backoff import ConstantBackoff, ExponentialBackoff, ExponentialJitterBackoff
from reattempt.call import call_with_retry, call_with_retry_async
from reattempt.cancellation import CancellationToken
from reattempt.core.config import DEFAULT_DELAY, DEFAULT_MAX_RETRIES, RetryPolicy
from reattempt.decorator import retryable
from reattempt.exceptions import (
    RetryCancelledError,
    RetryConfigurationError,
    RetryError,
    RetryExhaustedError,
    UnexpectedResultError,
)
from reattempt.retry import AsyncRetryExecutor, RetryExecutor

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
