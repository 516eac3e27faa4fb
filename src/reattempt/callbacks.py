r"""Callback types and data structures for observability.

This module provides callback support for reattempt, enabling users to
hook into the retry lifecycle for logging, metrics and alerting.

The callback system provides four lifecycle hooks:
- on_attempt: Called before each attempt
- on_retry: Called after a failed attempt, before the backoff delay
- on_success: Called when an attempt produces an accepted result
- on_failure: Called when all retries are exhausted

Example:
    ```pycon
    >>> from reattempt import RetryPolicy, call_with_retry
    >>> from reattempt.callbacks import RetryInfo
    >>> def log_retry(retry_info: RetryInfo) -> None:
    ...     print(f"attempt {retry_info.attempt} failed, waiting {retry_info.wait_time}s")
    ...
    >>> policy = RetryPolicy(on_retry=log_retry)
    >>> call_with_retry(flaky_operation, policy=policy)  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "AttemptInfo",
    "FailureInfo",
    "RetryInfo",
    "SuccessInfo",
    "invoke_on_attempt",
    "invoke_on_failure",
    "invoke_on_retry",
    "invoke_on_success",
]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class AttemptInfo:
    """Information passed to on_attempt callback.

    Attributes:
        attempt: The current attempt number (1-indexed). First attempt is 1.
        max_retries: Maximum number of retries configured.
    """

    attempt: int
    max_retries: int


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        attempt: The failed attempt number (1-indexed). First failure is 1,
            which is also the number of the retry about to run.
        max_retries: Maximum number of retries configured.
        wait_time: The delay in seconds before the next attempt.
        error: The cause recorded for the failed attempt.
    """

    attempt: int
    max_retries: int
    wait_time: float
    error: Exception


@dataclass
class SuccessInfo:
    """Information passed to on_success callback.

    Attributes:
        attempt: The attempt number that succeeded (1-indexed).
        max_retries: Maximum number of retries configured.
        result: The accepted result.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    attempt: int
    max_retries: int
    result: Any
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        attempt: The final attempt number (1-indexed).
        max_retries: Maximum number of retries configured.
        error: The aggregated error about to be raised.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    attempt: int
    max_retries: int
    error: Exception
    total_time: float


def invoke_on_attempt(
    on_attempt: Callable[[AttemptInfo], None] | None, *, attempt: int, max_retries: int
) -> None:
    """Invoke on_attempt callback if provided.

    Args:
        on_attempt: Optional callback to invoke before each attempt.
        attempt: The current attempt number (0-indexed internally). The callback
            receives this as a 1-indexed value (attempt + 1).
        max_retries: Maximum number of retries.
    """
    if on_attempt is not None:
        on_attempt(AttemptInfo(attempt=attempt + 1, max_retries=max_retries))


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    attempt: int,
    max_retries: int,
    wait_time: float,
    error: Exception,
) -> None:
    """Invoke on_retry callback if provided.

    Args:
        on_retry: Optional callback to invoke after each failed attempt
            that is followed by a retry.
        attempt: The failed attempt (0-indexed internally). The callback
            receives this as a 1-indexed value (attempt + 1).
        max_retries: Maximum number of retries.
        wait_time: The delay in seconds before the next attempt.
        error: The cause recorded for the failed attempt.
    """
    if on_retry is not None:
        on_retry(
            RetryInfo(
                attempt=attempt + 1,
                max_retries=max_retries,
                wait_time=wait_time,
                error=error,
            )
        )


def invoke_on_success(
    on_success: Callable[[SuccessInfo], None] | None,
    *,
    attempt: int,
    max_retries: int,
    result: Any,
    start_time: float,
) -> None:
    """Invoke on_success callback if provided.

    Args:
        on_success: Optional callback to invoke when an attempt succeeds.
        attempt: The attempt number that succeeded (0-indexed internally). The
            callback receives this as a 1-indexed value (attempt + 1).
        max_retries: Maximum number of retries.
        result: The accepted result.
        start_time: The timestamp when the first attempt started.
    """
    if on_success is not None:
        on_success(
            SuccessInfo(
                attempt=attempt + 1,
                max_retries=max_retries,
                result=result,
                total_time=time.time() - start_time,
            )
        )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    attempt: int,
    max_retries: int,
    error: Exception,
    start_time: float,
) -> None:
    """Invoke on_failure callback if provided.

    Args:
        on_failure: Optional callback to invoke when all retries are exhausted.
        attempt: The final attempt number (0-indexed internally).
        max_retries: Maximum number of retries.
        error: The aggregated error.
        start_time: The timestamp when the first attempt started.
    """
    if on_failure is not None:
        on_failure(
            FailureInfo(
                attempt=attempt + 1,
                max_retries=max_retries,
                error=error,
                total_time=time.time() - start_time,
            )
        )
