r"""Backoff strategy whose delay grows by a fixed step per retry."""

from __future__ import annotations

__all__ = ["LinearBackoff"]

from reattempt.backoff.base import BaseBackoffStrategy, validate_delay_bounds


class LinearBackoff(BaseBackoffStrategy):
    """Wait ``base_delay`` seconds more before each successive retry.

    The n-th retry waits ``base_delay * n`` seconds, optionally capped at
    ``max_delay``.

    Args:
        base_delay: The step added for each retry, in seconds.
        max_delay: Optional upper bound on the delay, in seconds.

    Raises:
        RetryConfigurationError: If ``base_delay`` is negative, if
            ``max_delay`` is not positive, or if either is infinite.

    Example:
        ```pycon
        >>> from reattempt.backoff import LinearBackoff
        >>> backoff = LinearBackoff(base_delay=0.5)
        >>> [backoff.calculate(n) for n in (1, 2, 3)]
        [0.5, 1.0, 1.5]
        >>> LinearBackoff(base_delay=2.0, max_delay=5.0).calculate(4)
        5.0

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
        delay = float(self.base_delay * attempt)
        if self.max_delay is None:
            return delay
        return min(delay, float(self.max_delay))
