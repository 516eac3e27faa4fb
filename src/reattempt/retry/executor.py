r"""Synchronous retry executor.

This module provides the RetryExecutor class that runs an operation with
automatic retry logic, blocking the calling thread during backoff delays.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from reattempt.core.config import RetryPolicy
from reattempt.core.validation import validate_operation
from reattempt.retry.aggregator import FailureAggregator
from reattempt.retry.decider import AttemptOutcome, RetryDecider
from reattempt.retry.executor_core import (
    check_cancelled,
    create_exhausted_error,
    log_failed_attempt,
    log_fatal_failure,
)
from reattempt.retry.manager import CallbackManager
from reattempt.retry.strategy import RetryStrategy
from reattempt.utils.sleep import sleep
from reattempt.utils.structured_logging import invocation_scope

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes operations with automatic retry logic.

    This class implements the retry loop for synchronous operations. It uses
    composition with strategy objects:

    - RetryStrategy: Calculates and validates backoff delays
    - RetryDecider: Classifies each attempt as success, retryable or fatal
    - CallbackManager: Invokes user-defined callbacks at lifecycle events

    The executor holds no per-invocation state, so one instance can serve
    concurrent invocations from several threads.

    Args:
        policy: The retry policy. Defaults to ``RetryPolicy()``.

    Attributes:
        policy: The retry policy.
        strategy: Strategy for calculating retry delays.
        decider: Logic for deciding whether to retry.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> from reattempt.backoff import ConstantBackoff
        >>> from reattempt.core import RetryPolicy
        >>> from reattempt.retry import RetryExecutor
        >>> calls = []
        >>> def flaky() -> str:
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("reset")
        ...     return "ok"
        ...
        >>> executor = RetryExecutor(RetryPolicy(backoff_strategy=ConstantBackoff(0.0)))
        >>> executor.execute(flaky)
        'ok'
        >>> len(calls)
        3

        ```
    """

    def __init__(self, policy: RetryPolicy | None = None) -> None:
        self.policy = policy if policy is not None else RetryPolicy()
        self.strategy: RetryStrategy = RetryStrategy(self.policy.backoff_strategy)
        self.decider: RetryDecider = RetryDecider(
            self.policy.retry_on,
            self.policy.retry_if_exception,
            self.policy.retry_if_result,
        )
        self.callbacks: CallbackManager = CallbackManager(self.policy)

    def execute(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Execute an operation with automatic retry logic.

        Runs the operation up to ``max_retries + 1`` times, waiting between
        attempts for the delay computed by the backoff strategy.

        The retry loop handles:
        - Accepted results: returned immediately, recorded causes are discarded
        - Retryable exceptions and unwanted results: recorded, then retried
        - Fatal exceptions: re-raised immediately and unchanged
        - Cancellation: checked before each attempt and during each delay

        Args:
            operation: The function to call. It may accept the cancellation
                token through ``args`` or ``kwargs`` to stop mid-flight.
            *args: Positional arguments passed to ``operation``.
            **kwargs: Keyword arguments passed to ``operation``.

        Returns:
            The first accepted result of ``operation``.

        Raises:
            RetryExhaustedError: If every attempt failed. The error holds
                one cause per attempt, in order.
            RetryCancelledError: If the cancellation token fired.
            RetryConfigurationError: If the operation is not callable or the
                backoff strategy misbehaves.
            Exception: The first non-retryable exception raised by
                ``operation``.
        """
        validate_operation(operation)
        max_retries = self.policy.max_retries
        cancellation = self.policy.cancellation
        aggregator = FailureAggregator()
        start_time = time.time()

        with invocation_scope():
            for attempt in range(max_retries + 1):
                check_cancelled(cancellation, attempt)

                # Wait before retry (if not first attempt)
                if attempt > 0:
                    sleep_time = self.strategy.calculate_delay(attempt)
                    self.callbacks.on_retry(
                        attempt - 1, max_retries, sleep_time, aggregator.last_cause
                    )
                    sleep(sleep_time, cancellation, attempt)

                self.callbacks.on_attempt(attempt, max_retries)
                try:
                    result = operation(*args, **kwargs)
                except Exception as exc:
                    record = self.decider.classify_exception(exc, attempt)
                    if record.outcome is AttemptOutcome.FATAL_FAILURE:
                        log_fatal_failure(record, max_retries)
                        raise
                else:
                    record = self.decider.classify_result(result, attempt)
                    if record.outcome is AttemptOutcome.SUCCESS:
                        self.callbacks.on_success(attempt, max_retries, result, start_time)
                        return result

                aggregator.record(record.error)
                log_failed_attempt(record, max_retries)

            # All retries exhausted
            error = create_exhausted_error(aggregator, self.callbacks, max_retries, start_time)
            raise error from aggregator.last_cause
