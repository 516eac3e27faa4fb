r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that handles invocation
of user-defined callbacks at various points in the retry lifecycle.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING, Any

from reattempt.callbacks import (
    invoke_on_attempt,
    invoke_on_failure,
    invoke_on_retry,
    invoke_on_success,
)

if TYPE_CHECKING:
    from reattempt.core.config import RetryPolicy


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Attributes:
        policy: The policy holding the callback functions.
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy

    def on_attempt(self, attempt: int, max_retries: int) -> None:
        """Invoke on_attempt callback.

        Args:
            attempt: Current attempt number (0-indexed).
            max_retries: Maximum number of retries.
        """
        invoke_on_attempt(self.policy.on_attempt, attempt=attempt, max_retries=max_retries)

    def on_retry(self, attempt: int, max_retries: int, sleep_time: float, error: Exception) -> None:
        """Invoke on_retry callback.

        Args:
            attempt: The failed attempt (0-indexed).
            max_retries: Maximum number of retries.
            sleep_time: Sleep time before the next attempt.
            error: Cause recorded for the failed attempt.
        """
        invoke_on_retry(
            self.policy.on_retry,
            attempt=attempt,
            max_retries=max_retries,
            wait_time=sleep_time,
            error=error,
        )

    def on_success(self, attempt: int, max_retries: int, result: Any, start_time: float) -> None:
        """Invoke on_success callback.

        Args:
            attempt: Attempt number that succeeded (0-indexed).
            max_retries: Maximum number of retries.
            result: The accepted result.
            start_time: Timestamp when the first attempt started.
        """
        invoke_on_success(
            self.policy.on_success,
            attempt=attempt,
            max_retries=max_retries,
            result=result,
            start_time=start_time,
        )

    def on_failure(
        self, attempt: int, max_retries: int, error: Exception, start_time: float
    ) -> None:
        """Invoke on_failure callback.

        Args:
            attempt: Final attempt number (0-indexed).
            max_retries: Maximum number of retries.
            error: The aggregated error.
            start_time: Timestamp when the first attempt started.
        """
        invoke_on_failure(
            self.policy.on_failure,
            attempt=attempt,
            max_retries=max_retries,
            error=error,
            start_time=start_time,
        )
