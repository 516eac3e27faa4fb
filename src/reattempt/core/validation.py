r"""Parameter validation utilities for retry policies.

This module provides validation functions for retry parameters to ensure
they meet the required constraints before being used by the retry
executors.
"""

from __future__ import annotations

__all__ = [
    "MAX_DELAY",
    "validate_delay",
    "validate_exception_types",
    "validate_operation",
    "validate_predicates",
    "validate_retry_params",
]

import math
import threading
from typing import TYPE_CHECKING, Any

from reattempt.exceptions import RetryConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

# Longest timeout accepted by threading.Event.wait, which backs cancellable waits
MAX_DELAY: float = threading.TIMEOUT_MAX


def validate_retry_params(max_retries: int) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Number of retries after the initial attempt. Must be
            an integer >= 1. The total number of attempts is
            ``max_retries + 1``.

    Raises:
        RetryConfigurationError: If ``max_retries`` is not an integer or
            is lower than 1.

    Example:
        ```pycon
        >>> from reattempt.core import validate_retry_params
        >>> validate_retry_params(max_retries=3)
        >>> validate_retry_params(max_retries=0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        reattempt.exceptions.RetryConfigurationError: max_retries must be >= 1, got 0

        ```
    """
    if isinstance(max_retries, bool) or not isinstance(max_retries, int):
        msg = f"max_retries must be an integer, got {type(max_retries).__name__}"
        raise RetryConfigurationError(msg)
    if max_retries < 1:
        msg = f"max_retries must be >= 1, got {max_retries}"
        raise RetryConfigurationError(msg)


def validate_exception_types(retry_on: tuple[type[BaseException], ...]) -> None:
    """Validate the retryable failure kinds.

    Args:
        retry_on: Tuple of exception classes.

    Raises:
        RetryConfigurationError: If ``retry_on`` is empty or contains
            something other than an exception class.
    """
    if not retry_on:
        msg = "retry_on must contain at least one exception type"
        raise RetryConfigurationError(msg)
    for exc_type in retry_on:
        if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
            msg = f"retry_on must contain exception types, got {exc_type!r}"
            raise RetryConfigurationError(msg)


def validate_predicates(name: str, predicates: tuple[Callable[..., bool], ...]) -> None:
    """Validate a tuple of predicates.

    Args:
        name: The name of the parameter, used in error messages.
        predicates: The predicates to check.

    Raises:
        RetryConfigurationError: If a predicate is not callable.
    """
    for predicate in predicates:
        if not callable(predicate):
            msg = f"{name} must contain callables, got {predicate!r}"
            raise RetryConfigurationError(msg)


def validate_operation(operation: Any) -> None:
    """Validate the operation passed to a retry executor.

    Args:
        operation: The operation to execute.

    Raises:
        RetryConfigurationError: If ``operation`` is ``None`` or not callable.
    """
    if operation is None or not callable(operation):
        msg = f"operation must be callable, got {type(operation).__name__}"
        raise RetryConfigurationError(msg)


def validate_delay(delay: Any, attempt: int) -> float:
    """Validate a delay produced by a backoff strategy.

    Args:
        delay: The value returned by the strategy.
        attempt: The retry number (1-indexed) passed to the strategy.

    Returns:
        The delay as a float.

    Raises:
        RetryConfigurationError: If the delay is not a real number, is NaN,
            is negative, or is infinite or longer than ``MAX_DELAY``.

    Example:
        ```pycon
        >>> from reattempt.core import validate_delay
        >>> validate_delay(2, attempt=1)
        2.0

        ```
    """
    if isinstance(delay, bool) or not isinstance(delay, (int, float)):
        msg = f"backoff delay must be a number, got {type(delay).__name__} for retry {attempt}"
        raise RetryConfigurationError(msg)
    if (isinstance(delay, float) and math.isnan(delay)) or delay < 0:
        msg = f"backoff delay must be non-negative, got {delay} for retry {attempt}"
        raise RetryConfigurationError(msg)
    if delay > MAX_DELAY:
        msg = (
            f"backoff delay must be finite and at most {MAX_DELAY} seconds, "
            f"got {delay} for retry {attempt}"
        )
        raise RetryConfigurationError(msg)
    return float(delay)
