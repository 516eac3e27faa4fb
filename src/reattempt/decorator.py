r"""Decorator adding automatic retry logic to a function."""

from __future__ import annotations

__all__ = ["retryable"]

import functools
import inspect
from typing import TYPE_CHECKING, Any, TypeVar

from reattempt.core.config import RetryPolicy
from reattempt.retry import AsyncRetryExecutor, RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

F = TypeVar("F", bound="Callable[..., Any]")


def retryable(policy: RetryPolicy | None = None, **overrides: Any) -> Callable[[F], F]:
    r"""Decorate a function so that every call is retried on failure.

    Coroutine functions are run by ``AsyncRetryExecutor``, other functions
    by ``RetryExecutor``. The executor is built once, at decoration time.

    Args:
        policy: The retry policy. Defaults to ``RetryPolicy()``.
        **overrides: Policy parameters overriding those of ``policy``
            (see ``RetryPolicy.merge``).

    Returns:
        The decorator.

    Raises:
        RetryConfigurationError: If the resulting policy is invalid.

    Example:
        ```pycon
        >>> from reattempt import retryable
        >>> from reattempt.backoff import ConstantBackoff
        >>> attempts = []
        >>> @retryable(max_retries=2, backoff_strategy=ConstantBackoff(0.0))
        ... def flaky() -> str:
        ...     attempts.append(1)
        ...     if len(attempts) < 2:
        ...         raise ConnectionError("reset")
        ...     return "ok"
        ...
        >>> flaky()
        'ok'
        >>> len(attempts)
        2

        ```
    """
    resolved = policy if policy is not None else RetryPolicy()
    if overrides:
        resolved = resolved.merge(**overrides)

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):
            async_executor = AsyncRetryExecutor(resolved)

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                return await async_executor.execute(func, *args, **kwargs)

            async_wrapper.retry_policy = resolved  # type: ignore[attr-defined]
            return async_wrapper  # type: ignore[return-value]

        executor = RetryExecutor(resolved)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return executor.execute(func, *args, **kwargs)

        wrapper.retry_policy = resolved  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator
