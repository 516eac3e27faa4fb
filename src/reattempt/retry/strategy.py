r"""Retry strategy for calculating validated backoff delays.

This module provides the RetryStrategy class, which calls the configured
backoff strategy and turns any misbehavior (an exception, a negative or
non-numeric delay) into a ``RetryConfigurationError``.
"""

from __future__ import annotations

__all__ = ["RetryStrategy"]

import logging
from typing import TYPE_CHECKING

from reattempt.backoff import resolve_backoff_strategy
from reattempt.core.validation import validate_delay
from reattempt.exceptions import RetryConfigurationError
from reattempt.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from reattempt.backoff import BackoffFunction, BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)


class RetryStrategy:
    """Strategy for calculating retry delays.

    Args:
        backoff_strategy: Backoff strategy instance or plain function of
            the retry number.

    Attributes:
        backoff_strategy: The resolved backoff strategy.

    Example:
        ```pycon
        >>> from reattempt.backoff import ExponentialBackoff
        >>> from reattempt.retry.strategy import RetryStrategy
        >>> strategy = RetryStrategy(ExponentialBackoff(initial_delay=0.5))
        >>> strategy.calculate_delay(3)
        2.0

        ```
    """

    def __init__(self, backoff_strategy: BaseBackoffStrategy | BackoffFunction) -> None:
        self.backoff_strategy: BaseBackoffStrategy = resolve_backoff_strategy(backoff_strategy)

    def calculate_delay(self, attempt: int) -> float:
        """Calculate the delay before a retry.

        Args:
            attempt: The retry number (1-indexed).

        Returns:
            Sleep time in seconds, never negative.

        Raises:
            RetryConfigurationError: If the backoff strategy raises or
                returns an invalid delay.
        """
        try:
            delay = self.backoff_strategy.calculate(attempt)
        except RetryConfigurationError:
            raise
        except Exception as exc:
            msg = f"backoff strategy {self.backoff_strategy!r} failed for retry {attempt}: {exc}"
            raise RetryConfigurationError(msg) from exc
        delay = validate_delay(delay, attempt)
        log_structured(
            logger,
            logging.DEBUG,
            f"Waiting {delay:.2f}s before retry {attempt}",
            attempt=attempt,
            wait_time=delay,
        )
        return delay
