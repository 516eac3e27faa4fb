r"""Fibonacci backoff strategy."""

from __future__ import annotations

__all__ = ["FibonacciBackoff"]

from reattempt.backoff.base import BaseBackoffStrategy, validate_delay_bounds


class FibonacciBackoff(BaseBackoffStrategy):
    """Fibonacci backoff strategy.

    Calculates delay as: base_delay * fibonacci(attempt), with optional
    max_delay cap. The sequence (1, 1, 2, 3, 5, 8, 13, ...) grows more
    gradually than exponential backoff.

    With a cap, the sequence is only walked until the cap is reached, so
    large retry numbers cost no more than small ones.

    Args:
        base_delay: The base delay in seconds (default: 1.0).
        max_delay: Optional maximum delay cap in seconds.

    Raises:
        RetryConfigurationError: If ``base_delay`` is negative, if
            ``max_delay`` is not positive, or if either is infinite.

    Example:
        ```pycon
        >>> from reattempt.backoff import FibonacciBackoff
        >>> backoff = FibonacciBackoff(base_delay=1.0)
        >>> [backoff.calculate(n) for n in range(1, 7)]
        [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]
        >>> FibonacciBackoff(base_delay=1.0, max_delay=10.0).calculate(11)
        10.0

        ```
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        validate_delay_bounds("base_delay", base_delay, max_delay)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        if attempt <= 0 or self.base_delay == 0:
            return 0.0
        a, b = 0, 1
        for _ in range(attempt - 1):
            if self.max_delay is not None and self.base_delay * b >= self.max_delay:
                return float(self.max_delay)
            a, b = b, a + b
        delay = float(self.base_delay * b)
        if self.max_delay is not None:
            delay = min(delay, float(self.max_delay))
        return delay
