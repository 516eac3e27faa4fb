r"""Retry policy dataclass and defaults.

This module provides configuration constants and the dataclass-based
``RetryPolicy`` consumed by ``RetryExecutor`` and ``AsyncRetryExecutor``.
A policy is plain data: it can be reused across any number of independent
(and concurrent) retry invocations.
"""

from __future__ import annotations

__all__ = ["DEFAULT_DELAY", "DEFAULT_MAX_RETRIES", "RetryPolicy"]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from reattempt.backoff import BaseBackoffStrategy, ConstantBackoff
from reattempt.core.validation import (
    validate_exception_types,
    validate_predicates,
    validate_retry_params,
)
from reattempt.exceptions import RetryConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from reattempt.backoff import BackoffFunction
    from reattempt.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo
    from reattempt.cancellation import CancellationToken


# Default maximum number of retries
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Default fixed interval between attempts, in seconds
DEFAULT_DELAY = 1.0


def _as_tuple(value: Any) -> tuple[Any, ...]:
    if isinstance(value, tuple):
        return value
    if isinstance(value, (list, set, frozenset)):
        return tuple(value)
    return (value,)


@dataclass
class RetryPolicy:
    """Configuration for retry behavior.

    Args:
        max_retries: Number of retries after the initial attempt. Must be
            >= 1. The operation runs at most ``max_retries + 1`` times.
        backoff_strategy: Strategy, or plain function of the retry number
            (1-indexed), computing the delay in seconds before each retry.
            Defaults to ``ConstantBackoff(1.0)``.
        retry_on: Exception types eligible for retry. Any other exception
            is fatal and propagates immediately. A single type is accepted.
            Defaults to ``(Exception,)``.
        retry_if_exception: Predicates over a raised exception. When at
            least one is registered, an exception is retried only if one
            of them returns ``True``.
        retry_if_result: Predicates over a returned value. If any returns
            ``True`` the result is rejected and the attempt is retried.
        cancellation: Optional token used to cancel the retry loop.
        on_attempt: Optional callback called before each attempt.
        on_retry: Optional callback called after each failed attempt
            followed by a retry, with the computed delay and the cause.
        on_success: Optional callback called when an attempt succeeds.
        on_failure: Optional callback called when all retries are exhausted.

    Raises:
        RetryConfigurationError: If any parameter fails validation.

    Example:
        ```pycon
        >>> from reattempt.core.config import RetryPolicy
        >>> from reattempt.backoff import ExponentialBackoff
        >>> policy = RetryPolicy()  # Use defaults
        >>> policy.max_retries
        3
        >>> policy = RetryPolicy(
        ...     max_retries=5,
        ...     backoff_strategy=ExponentialBackoff(initial_delay=0.5, max_delay=10.0),
        ...     retry_on=ConnectionError,
        ... )
        >>> policy.retry_on
        (<class 'ConnectionError'>,)
        >>> policy.merge(max_retries=10).max_retries
        10
        >>> policy.max_retries  # Original unchanged
        5

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_strategy: BaseBackoffStrategy | BackoffFunction = field(
        default_factory=lambda: ConstantBackoff(DEFAULT_DELAY)
    )
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    retry_if_exception: tuple[Callable[[Exception], bool], ...] = ()
    retry_if_result: tuple[Callable[[Any], bool], ...] = ()
    cancellation: CancellationToken | None = None
    on_attempt: Callable[[AttemptInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[SuccessInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        """Normalize and validate configuration parameters.

        Raises:
            RetryConfigurationError: If any parameter fails validation.
        """
        self.retry_on = _as_tuple(self.retry_on)
        self.retry_if_exception = _as_tuple(self.retry_if_exception)
        self.retry_if_result = _as_tuple(self.retry_if_result)

        validate_retry_params(self.max_retries)
        validate_exception_types(self.retry_on)
        validate_predicates("retry_if_exception", self.retry_if_exception)
        validate_predicates("retry_if_result", self.retry_if_result)
        if not (
            isinstance(self.backoff_strategy, BaseBackoffStrategy)
            or callable(self.backoff_strategy)
        ):
            msg = (
                "backoff_strategy must be a BaseBackoffStrategy or a callable, "
                f"got {type(self.backoff_strategy).__name__}"
            )
            raise RetryConfigurationError(msg)

    @property
    def max_attempts(self) -> int:
        """The total number of attempts, including the initial one."""
        return self.max_retries + 1

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryPolicy instance with overrides applied.

        Example:
            ```pycon
            >>> from reattempt.core.config import RetryPolicy
            >>> policy = RetryPolicy(max_retries=3)
            >>> new_policy = policy.merge(max_retries=5, cancellation=None)
            >>> new_policy.max_retries
            5
            >>> policy.max_retries  # Original unchanged
            3

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the policy to a dictionary of its parameters.

        Returns:
            Dictionary with the policy parameters.

        Example:
            ```pycon
            >>> from reattempt.core.config import RetryPolicy
            >>> RetryPolicy(max_retries=5).to_dict()["max_retries"]
            5

            ```
        """
        return {
            "max_retries": self.max_retries,
            "backoff_strategy": self.backoff_strategy,
            "retry_on": self.retry_on,
            "retry_if_exception": self.retry_if_exception,
            "retry_if_result": self.retry_if_result,
            "cancellation": self.cancellation,
            "on_attempt": self.on_attempt,
            "on_retry": self.on_retry,
            "on_success": self.on_success,
            "on_failure": self.on_failure,
        }
