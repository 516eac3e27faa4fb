r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from reattempt.backoff.base import BaseBackoffStrategy, validate_delay_bounds


class ConstantBackoff(BaseBackoffStrategy):
    """Constant/fixed interval backoff strategy.

    Returns the same delay for every retry, regardless of the retry number.
    This is the default strategy of ``RetryPolicy``.

    Args:
        delay: The fixed delay in seconds to use for all retries (default: 1.0).

    Raises:
        RetryConfigurationError: If ``delay`` is negative or infinite.

    Example:
        ```pycon
        >>> from reattempt.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay=2.5)
        >>> backoff.calculate(1)  # First retry
        2.5
        >>> backoff.calculate(2)  # Second retry
        2.5
        >>> backoff.calculate(10)  # Tenth retry
        2.5

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        validate_delay_bounds("delay", delay, None)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        """Calculate constant backoff delay.

        Args:
            attempt: The retry number (1-indexed, unused).

        Returns:
            The fixed delay value.
        """
        return self.delay
