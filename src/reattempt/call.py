r"""Functional API to call an operation with automatic retry logic."""

from __future__ import annotations

__all__ = ["call_with_retry", "call_with_retry_async"]

from typing import TYPE_CHECKING, Any, TypeVar

from reattempt.retry import AsyncRetryExecutor, RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from reattempt.core.config import RetryPolicy

T = TypeVar("T")


def call_with_retry(
    operation: Callable[..., T],
    *args: Any,
    policy: RetryPolicy | None = None,
    **kwargs: Any,
) -> T:
    r"""Call an operation with automatic retry logic.

    Args:
        operation: The function to call.
        *args: Positional arguments passed to ``operation``.
        policy: The retry policy. Defaults to ``RetryPolicy()``: 3 retries
            on any exception, 1 second apart.
        **kwargs: Keyword arguments passed to ``operation``.

    Returns:
        The first accepted result of ``operation``.

    Raises:
        RetryExhaustedError: If every attempt failed.
        RetryCancelledError: If the policy's cancellation token fired.
        RetryConfigurationError: If the configuration is invalid.

    Example:
        ```pycon
        >>> from reattempt import RetryPolicy, call_with_retry
        >>> from reattempt.backoff import ExponentialBackoff
        >>> call_with_retry(int, "42")
        42
        >>> policy = RetryPolicy(
        ...     max_retries=5,
        ...     backoff_strategy=ExponentialBackoff(initial_delay=0.5, max_delay=8.0),
        ...     retry_on=(ConnectionError, TimeoutError),
        ... )
        >>> call_with_retry(fetch_data, "users", policy=policy)  # doctest: +SKIP

        ```
    """
    return RetryExecutor(policy).execute(operation, *args, **kwargs)


async def call_with_retry_async(
    operation: Callable[..., Awaitable[T]],
    *args: Any,
    policy: RetryPolicy | None = None,
    **kwargs: Any,
) -> T:
    r"""Call an async operation with automatic retry logic.

    Backoff delays suspend the calling task instead of blocking the event
    loop.

    Args:
        operation: The coroutine function to call.
        *args: Positional arguments passed to ``operation``.
        policy: The retry policy. Defaults to ``RetryPolicy()``.
        **kwargs: Keyword arguments passed to ``operation``.

    Returns:
        The first accepted result of ``operation``.

    Raises:
        RetryExhaustedError: If every attempt failed.
        RetryCancelledError: If the policy's cancellation token fired.
        RetryConfigurationError: If the configuration is invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from reattempt import call_with_retry_async
        >>> async def fetch() -> str:
        ...     return "data"
        ...
        >>> asyncio.run(call_with_retry_async(fetch))
        'data'

        ```
    """
    return await AsyncRetryExecutor(policy).execute(operation, *args, **kwargs)
