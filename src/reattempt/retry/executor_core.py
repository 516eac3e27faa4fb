r"""Shared core logic for retry executors.

This module provides helper functions used by both the synchronous and the
asynchronous retry executors: cancellation checks, structured logging of
failed attempts and construction of the final aggregated error.
"""

from __future__ import annotations

__all__ = ["check_cancelled", "create_exhausted_error", "log_failed_attempt", "log_fatal_failure"]

import logging
from typing import TYPE_CHECKING

from reattempt.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from reattempt.cancellation import CancellationToken
    from reattempt.exceptions import RetryExhaustedError
    from reattempt.retry.aggregator import FailureAggregator
    from reattempt.retry.decider import AttemptRecord
    from reattempt.retry.manager import CallbackManager

logger: logging.Logger = logging.getLogger(__name__)


def check_cancelled(cancellation: CancellationToken | None, attempt: int) -> None:
    """Raise if the cancellation token has fired.

    Args:
        cancellation: Optional cancellation token.
        attempt: The attempt about to run (0-indexed).

    Raises:
        RetryCancelledError: If the token is cancelled.
    """
    if cancellation is not None:
        cancellation.raise_if_cancelled(attempt)


def log_failed_attempt(record: AttemptRecord, max_retries: int) -> None:
    """Log a retryable failure or an unwanted result.

    Args:
        record: The record of the failed attempt.
        max_retries: Maximum number of retries.
    """
    error = record.error
    log_structured(
        logger,
        logging.DEBUG,
        f"Attempt {record.attempt + 1}/{max_retries + 1} failed ({record.reason}): {error}",
        attempt=record.attempt,
        max_retries=max_retries,
        outcome=record.outcome.value,
        error_type=type(error).__name__,
    )


def log_fatal_failure(record: AttemptRecord, max_retries: int) -> None:
    """Log a failure that ends the retry loop.

    Args:
        record: The record of the failed attempt.
        max_retries: Maximum number of retries.
    """
    log_structured(
        logger,
        logging.DEBUG,
        f"Attempt {record.attempt + 1}/{max_retries + 1} failed with a non-retryable "
        f"error ({record.reason})",
        attempt=record.attempt,
        max_retries=max_retries,
        outcome=record.outcome.value,
        error_type=type(record.error).__name__,
    )


def create_exhausted_error(
    aggregator: FailureAggregator,
    callbacks: CallbackManager,
    max_retries: int,
    start_time: float,
) -> RetryExhaustedError:
    """Create the error raised when all attempts failed.

    The on_failure callback is invoked with the new error.

    Args:
        aggregator: The aggregator holding every recorded cause.
        callbacks: Callback manager for invoking on_failure.
        max_retries: Maximum number of retries.
        start_time: When the first attempt started.

    Returns:
        The aggregated error.
    """
    error = aggregator.build_error()
    logger.debug(f"All {max_retries + 1} attempts failed")
    callbacks.on_failure(
        attempt=max_retries,
        max_retries=max_retries,
        error=error,
        start_time=start_time,
    )
    return error
