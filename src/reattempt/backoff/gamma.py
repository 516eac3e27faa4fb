r"""Backoff strategy whose delay grows as ``n * ln(n)``."""

from __future__ import annotations

__all__ = ["GammaBackoff"]

import math

from reattempt.backoff.base import BaseBackoffStrategy, validate_delay_bounds


class GammaBackoff(BaseBackoffStrategy):
    """Wait ``interval * n * ln(n)`` seconds before the n-th retry.

    The growth sits between linear and quadratic. Because ``ln(1) == 0``
    the first retry runs immediately, and the delay is never negative.

    Args:
        interval: The scale of the delay, in seconds (default: 1.0).
        max_delay: Optional upper bound on the delay, in seconds.

    Raises:
        RetryConfigurationError: If ``interval`` is negative, if
            ``max_delay`` is not positive, or if either is infinite.

    Example:
        ```pycon
        >>> from reattempt.backoff import GammaBackoff
        >>> backoff = GammaBackoff(interval=1.0)
        >>> backoff.calculate(1)
        0.0
        >>> round(backoff.calculate(3), 3)
        3.296

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
        if attempt <= 1:
            return 0.0
        delay = float(self.interval * attempt * math.log(attempt))
        if self.max_delay is None:
            return delay
        return min(delay, float(self.max_delay))
