r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff", "validate_exponential_params"]

import math

from reattempt.backoff.base import BaseBackoffStrategy
from reattempt.exceptions import RetryConfigurationError


def validate_exponential_params(initial_delay: float, max_delay: float, factor: float) -> None:
    """Validate the parameters shared by the exponential strategies.

    Args:
        initial_delay: The delay before the first retry. Must be finite
            and >= 0.
        max_delay: The maximum delay. Must be finite and > 0.
        factor: The growth factor between retries. Must be > 0.

    Raises:
        RetryConfigurationError: If a parameter is out of range.
    """
    if initial_delay < 0:
        msg = f"initial_delay must be non-negative, got {initial_delay}"
        raise RetryConfigurationError(msg)
    if not math.isfinite(initial_delay):
        msg = f"initial_delay must be finite, got {initial_delay}"
        raise RetryConfigurationError(msg)
    if max_delay <= 0:
        msg = f"max_delay must be positive, got {max_delay}"
        raise RetryConfigurationError(msg)
    if not math.isfinite(max_delay):
        msg = f"max_delay must be finite, got {max_delay}"
        raise RetryConfigurationError(msg)
    if factor <= 0:
        msg = f"factor must be positive, got {factor}"
        raise RetryConfigurationError(msg)


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: ``min(initial_delay * factor ** (attempt - 1), max_delay)``.

    When the power exceeds the float range, ``max_delay`` is returned
    instead of raising ``OverflowError``.

    Args:
        initial_delay: The delay in seconds before the first retry (default: 1.0).
        max_delay: The maximum delay cap in seconds (default: 60.0).
        factor: The multiplier applied after each retry (default: 2.0).

    Raises:
        RetryConfigurationError: If ``initial_delay`` is negative, or if
            ``max_delay`` or ``factor`` is not positive, or if a delay
            bound is infinite.

    Example:
        ```pycon
        >>> from reattempt.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(initial_delay=1.0, max_delay=10.0)
        >>> backoff.calculate(1)  # First retry
        1.0
        >>> backoff.calculate(2)  # Second retry
        2.0
        >>> backoff.calculate(4)  # Fourth retry
        8.0
        >>> backoff.calculate(5)  # Would be 16.0, but capped
        10.0
        >>> backoff.calculate(100_000)  # Overflows, capped
        10.0

        ```
    """

    def __init__(
        self, initial_delay: float = 1.0, max_delay: float = 60.0, factor: float = 2.0
    ) -> None:
        validate_exponential_params(initial_delay, max_delay, factor)
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.factor = factor

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(initial_delay={self.initial_delay}, "
            f"max_delay={self.max_delay}, factor={self.factor})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The retry number (1-indexed).

        Returns:
            The calculated delay: ``initial_delay * factor ** (attempt - 1)``,
            capped at ``max_delay``.
        """
        if self.initial_delay == 0:
            return 0.0
        try:
            delay = self.initial_delay * float(self.factor) ** (attempt - 1)
        except OverflowError:
            return self.max_delay
        if math.isnan(delay) or delay > self.max_delay:
            return self.max_delay
        return delay
