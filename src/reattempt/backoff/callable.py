r"""Adapter for caller-supplied backoff functions."""

from __future__ import annotations

__all__ = ["CallableBackoff", "resolve_backoff_strategy"]

from typing import TYPE_CHECKING

from reattempt.backoff.base import BaseBackoffStrategy
from reattempt.exceptions import RetryConfigurationError

if TYPE_CHECKING:
    from reattempt.backoff.base import BackoffFunction


class CallableBackoff(BaseBackoffStrategy):
    """Backoff strategy delegating to a plain function.

    The function receives the retry number (1-indexed) and returns the delay
    in seconds. The executor validates the returned value on every call, as
    it does for the built-in strategies.

    Args:
        func: The function computing the delay.

    Raises:
        RetryConfigurationError: If ``func`` is not callable.

    Example:
        ```pycon
        >>> from reattempt.backoff import CallableBackoff
        >>> backoff = CallableBackoff(lambda attempt: 0.5 * attempt)
        >>> backoff.calculate(3)
        1.5

        ```
    """

    def __init__(self, func: BackoffFunction) -> None:
        if not callable(func):
            msg = f"backoff function must be callable, got {type(func).__name__}"
            raise RetryConfigurationError(msg)
        self.func = func

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self.func!r})"

    def calculate(self, attempt: int) -> float:
        return self.func(attempt)


def resolve_backoff_strategy(
    strategy: BaseBackoffStrategy | BackoffFunction,
) -> BaseBackoffStrategy:
    """Return ``strategy`` as a ``BaseBackoffStrategy``.

    Plain callables are wrapped in ``CallableBackoff``.

    Args:
        strategy: A backoff strategy or a function of the retry number.

    Returns:
        The backoff strategy.

    Raises:
        RetryConfigurationError: If ``strategy`` is neither a strategy nor
            a callable.

    Example:
        ```pycon
        >>> from reattempt.backoff import ConstantBackoff, resolve_backoff_strategy
        >>> resolve_backoff_strategy(ConstantBackoff(0.5))
        ConstantBackoff(delay=0.5)
        >>> resolve_backoff_strategy(lambda attempt: 1.0).calculate(1)
        1.0

        ```
    """
    if isinstance(strategy, BaseBackoffStrategy):
        return strategy
    return CallableBackoff(strategy)
