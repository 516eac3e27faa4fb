r"""Backoff strategy whose delay grows with the square of the retry number."""

from __future__ import annotations

__all__ = ["ProgressionBackoff"]

from reattempt.backoff.base import BaseBackoffStrategy, validate_delay_bounds


class ProgressionBackoff(BaseBackoffStrategy):
    """Wait ``interval + n**2`` seconds before the n-th retry.

    The fixed ``interval`` is paid on every retry and the quadratic term
    makes later retries back off faster than ``LinearBackoff``.

    Args:
        interval: The fixed part of the delay, in seconds (default: 1.0).
        max_delay: Optional upper bound on the delay, in seconds.

    Raises:
        RetryConfigurationError: If ``interval`` is negative, if
            ``max_delay`` is not positive, or if either is infinite.

    Example:
        ```pycon
        >>> from reattempt.backoff import ProgressionBackoff
        >>> backoff = ProgressionBackoff(interval=1.0)
        >>> [backoff.calculate(n) for n in (1, 2, 3)]
        [2.0, 5.0, 10.0]
        >>> ProgressionBackoff(interval=1.0, max_delay=8.0).calculate(3)
        8.0

        ```
    """

    def __init__(self, interval: float = 1.0, max_delay: float | None = None) -> None:
        validate_delay_bounds("interval", interval, max_delay)
        self.interval = interval
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(interval={self.interval}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        delay = float(self.interval + attempt * attempt)
        if self.max_delay is None:
            return delay
        return min(delay, float(self.max_delay))
