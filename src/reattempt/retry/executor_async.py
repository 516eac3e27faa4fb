r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that runs an async
operation with automatic retry logic. Backoff delays suspend the calling
task instead of blocking the event loop thread.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import inspect
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
from reattempt.utils.sleep import sleep_async
from reattempt.utils.structured_logging import invocation_scope

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes async operations with automatic retry logic.

    This class implements the same retry loop as ``RetryExecutor`` over the
    same policy objects. The differences are:

    - the operation is awaited (a plain function is also accepted; its
      result is awaited only if it is awaitable)
    - backoff delays use ``asyncio`` suspension, so other tasks run while
      waiting
    - task cancellation (``asyncio.CancelledError``) propagates unchanged

    Args:
        policy: The retry policy. Defaults to ``RetryPolicy()``.

    Attributes:
        policy: The retry policy.
        strategy: Strategy for calculating retry delays.
        decider: Logic for deciding whether to retry.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from reattempt.backoff import ConstantBackoff
        >>> from reattempt.core import RetryPolicy
        >>> from reattempt.retry import AsyncRetryExecutor
        >>> calls = []
        >>> async def flaky() -> str:
        ...     calls.append(1)
        ...     if len(calls) < 2:
        ...         raise TimeoutError("slow")
        ...     return "ok"
        ...
        >>> executor = AsyncRetryExecutor(RetryPolicy(backoff_strategy=ConstantBackoff(0.0)))
        >>> asyncio.run(executor.execute(flaky))
        'ok'

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

    async def execute(
        self, operation: Callable[..., Awaitable[T] | T], *args: Any, **kwargs: Any
    ) -> T:
        """Execute an async operation with automatic retry logic.

        Runs the operation up to ``max_retries + 1`` times, suspending
        between attempts for the delay computed by the backoff strategy.

        Args:
            operation: The coroutine function to call. It may accept the
                cancellation token through ``args`` or ``kwargs``.
            *args: Positional arguments passed to ``operation``.
            **kwargs: Keyword arguments passed to ``operation``.

        Returns:
            The first accepted result of ``operation``.

        Raises:
            RetryExhaustedError: If every attempt failed.
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

                if attempt > 0:
                    sleep_time = self.strategy.calculate_delay(attempt)
                    self.callbacks.on_retry(
                        attempt - 1, max_retries, sleep_time, aggregator.last_cause
                    )
                    await sleep_async(sleep_time, cancellation, attempt)

                self.callbacks.on_attempt(attempt, max_retries)
                try:
                    result = operation(*args, **kwargs)
                    if inspect.isawaitable(result):
                        result = await result
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

            error = create_exhausted_error(aggregator, self.callbacks, max_retries, start_time)
            raise error from aggregator.last_cause
