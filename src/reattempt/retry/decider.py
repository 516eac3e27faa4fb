r"""Retry decision logic for determining whether to retry an attempt.

This module provides the RetryDecider class that classifies the outcome of
each attempt, based on the retryable exception types, the exception
predicates and the result predicates of a retry policy.

Evaluation order for one attempt:

1. The operation raised: the exception must be an instance of one of the
   retryable types, otherwise it is fatal. Then, if exception predicates
   are registered, at least one must return ``True``, otherwise it is fatal.
2. The operation returned: if any result predicate returns ``True`` the
   result is unwanted and the attempt is retried. Otherwise it is a success.
"""

from __future__ import annotations

__all__ = ["AttemptOutcome", "AttemptRecord", "RetryDecider"]

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from reattempt.exceptions import RetryCancelledError, UnexpectedResultError

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class AttemptOutcome(Enum):
    """Classification of a single attempt.

    Attributes:
        SUCCESS: The operation returned an accepted result.
        RETRYABLE_FAILURE: The operation raised a retryable exception.
        FATAL_FAILURE: The operation raised an exception that ends the loop.
        UNWANTED_RESULT: The operation returned a result rejected by a
            result predicate. Handled like a retryable failure.
    """

    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"
    FATAL_FAILURE = "fatal_failure"
    UNWANTED_RESULT = "unwanted_result"


@dataclass(frozen=True)
class AttemptRecord:
    """Outcome of one attempt.

    Attributes:
        attempt: The attempt number (0-indexed).
        outcome: The classification of the attempt.
        value: The value returned by the operation, if any.
        error: The exception raised by the operation, or the
            ``UnexpectedResultError`` recorded for an unwanted result.
        reason: Short human-readable reason for the classification.
    """

    attempt: int
    outcome: AttemptOutcome
    value: Any = None
    error: Exception | None = None
    reason: str = ""

    @property
    def should_retry(self) -> bool:
        """``True`` if another attempt is warranted."""
        return self.outcome in (AttemptOutcome.RETRYABLE_FAILURE, AttemptOutcome.UNWANTED_RESULT)


class RetryDecider:
    """Decides whether an attempt should be retried.

    Args:
        retry_on: Tuple of retryable exception types.
        retry_if_exception: Predicates over a raised exception.
        retry_if_result: Predicates over a returned value.

    Example:
        ```pycon
        >>> from reattempt.retry.decider import RetryDecider
        >>> decider = RetryDecider(retry_on=(ConnectionError,))
        >>> decider.classify_exception(ConnectionError("reset"), attempt=0).outcome
        <AttemptOutcome.RETRYABLE_FAILURE: 'retryable_failure'>
        >>> decider.classify_exception(KeyError("id"), attempt=0).outcome
        <AttemptOutcome.FATAL_FAILURE: 'fatal_failure'>

        ```
    """

    def __init__(
        self,
        retry_on: tuple[type[BaseException], ...] = (Exception,),
        retry_if_exception: tuple[Callable[[Exception], bool], ...] = (),
        retry_if_result: tuple[Callable[[Any], bool], ...] = (),
    ) -> None:
        self.retry_on = retry_on
        self.retry_if_exception = retry_if_exception
        self.retry_if_result = retry_if_result

    def should_retry_exception(self, exception: Exception) -> tuple[bool, str]:
        """Determine if an exception should trigger a retry.

        Args:
            exception: The exception raised by the operation.

        Returns:
            Tuple of (should_retry, reason).
        """
        if isinstance(exception, RetryCancelledError):
            return (False, "cancelled")
        if not isinstance(exception, self.retry_on):
            return (False, f"{type(exception).__name__} is not a retryable type")
        if not self.retry_if_exception:
            return (True, type(exception).__name__)
        if any(predicate(exception) for predicate in self.retry_if_exception):
            return (True, "retry_if_exception predicate")
        return (False, "no retry_if_exception predicate matched")

    def should_retry_result(self, result: Any) -> tuple[bool, str]:
        """Determine if a returned value should trigger a retry.

        Args:
            result: The value returned by the operation.

        Returns:
            Tuple of (should_retry, reason).
        """
        if any(predicate(result) for predicate in self.retry_if_result):
            return (True, "retry_if_result predicate")
        return (False, "success")

    def classify_exception(self, exception: Exception, attempt: int) -> AttemptRecord:
        """Classify an attempt that raised an exception.

        Args:
            exception: The exception raised by the operation.
            attempt: The attempt number (0-indexed).

        Returns:
            A record with outcome ``RETRYABLE_FAILURE`` or ``FATAL_FAILURE``.
        """
        should_retry, reason = self.should_retry_exception(exception)
        outcome = AttemptOutcome.RETRYABLE_FAILURE if should_retry else AttemptOutcome.FATAL_FAILURE
        return AttemptRecord(attempt=attempt, outcome=outcome, error=exception, reason=reason)

    def classify_result(self, result: Any, attempt: int) -> AttemptRecord:
        """Classify an attempt that returned normally.

        Args:
            result: The value returned by the operation.
            attempt: The attempt number (0-indexed).

        Returns:
            A record with outcome ``SUCCESS`` or ``UNWANTED_RESULT``. An
            unwanted result carries an ``UnexpectedResultError`` wrapping
            the value.
        """
        should_retry, reason = self.should_retry_result(result)
        if not should_retry:
            return AttemptRecord(
                attempt=attempt, outcome=AttemptOutcome.SUCCESS, value=result, reason=reason
            )
        return AttemptRecord(
            attempt=attempt,
            outcome=AttemptOutcome.UNWANTED_RESULT,
            value=result,
            error=UnexpectedResultError(result=result, attempt=attempt),
            reason=reason,
        )
