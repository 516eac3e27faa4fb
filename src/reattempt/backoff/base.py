r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BackoffFunction", "BaseBackoffStrategy", "validate_delay_bounds"]

import math
from abc import ABC, abstractmethod
from collections.abc import Callable

from reattempt.exceptions import RetryConfigurationError

BackoffFunction = Callable[[int], float]


def validate_delay_bounds(name: str, base_delay: float, max_delay: float | None) -> None:
    """Validate the base delay and the optional cap of a strategy.

    Args:
        name: The name of the base delay parameter, used in messages.
        base_delay: The base delay. Must be finite and >= 0.
        max_delay: Optional cap. Must be finite and > 0 when given.

    Raises:
        RetryConfigurationError: If a value is out of range.

    Example:
        ```pycon
        >>> from reattempt.backoff import validate_delay_bounds
        >>> validate_delay_bounds("base_delay", 1.0, None)
        >>> validate_delay_bounds("base_delay", 1.0, float("inf"))
        Traceback (most recent call last):
        ...
        reattempt.exceptions.RetryConfigurationError: max_delay must be finite, got inf

        ```
    """
    if base_delay < 0:
        msg = f"{name} must be non-negative, got {base_delay}"
        raise RetryConfigurationError(msg)
    if not math.isfinite(base_delay):
        msg = f"{name} must be finite, got {base_delay}"
        raise RetryConfigurationError(msg)
    if max_delay is None:
        return
    if max_delay <= 0:
        msg = f"max_delay must be positive if specified, got {max_delay}"
        raise RetryConfigurationError(msg)
    if not math.isfinite(max_delay):
        msg = f"max_delay must be finite, got {max_delay}"
        raise RetryConfigurationError(msg)


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before retrying a
    failed operation based on the retry number.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given retry.

        Args:
            attempt: The retry number (1-indexed). For example,
                attempt=1 is the first retry after the initial attempt,
                attempt=2 is the second retry, etc.

        Returns:
            The calculated delay in seconds before the retry. Must be
                non-negative.
        """

    def __call__(self, attempt: int) -> float:
        return self.calculate(attempt)
