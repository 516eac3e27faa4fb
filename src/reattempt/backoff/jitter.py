r"""Backoff strategies that randomize the delay."""

from __future__ import annotations

__all__ = ["ExponentialJitterBackoff", "RandomBackoff"]

import logging
import random
import threading

from reattempt.backoff.base import BaseBackoffStrategy, validate_delay_bounds
from reattempt.backoff.exponential import ExponentialBackoff
from reattempt.exceptions import RetryConfigurationError

logger: logging.Logger = logging.getLogger(__name__)


class ExponentialJitterBackoff(ExponentialBackoff):
    """Exponential backoff strategy with signed random jitter.

    The base delay is computed like ``ExponentialBackoff`` (capped at
    ``max_delay``), then a uniformly distributed jitter in
    ``[-jitter_factor, +jitter_factor] * base`` is added. The result is
    clamped at 0, so it always lies in
    ``[base * (1 - jitter_factor), base * (1 + jitter_factor)]`` clamped at 0.

    Jitter spreads out the retries of many clients failing at the same time.

    The random source defaults to ``random.SystemRandom``, which draws from
    the operating system's cryptographic generator. Draws are serialized
    with a lock, so a single instance can be shared between threads even
    when a custom ``random.Random`` is injected.

    Args:
        initial_delay: The base delay in seconds before the first retry
            (default: 1.0).
        max_delay: The cap applied to the base delay in seconds (default: 60.0).
        factor: The multiplier applied after each retry (default: 2.0).
        jitter_factor: The relative amplitude of the jitter (default: 0.2).
            Must be >= 0.
        rng: Optional random source. Must produce uniform floats in
            ``[0, 1)`` from ``random()``.

    Example:
        ```pycon
        >>> import random
        >>> from reattempt.backoff import ExponentialJitterBackoff
        >>> backoff = ExponentialJitterBackoff(initial_delay=1.0, jitter_factor=0.2)
        >>> 0.8 <= backoff.calculate(1) <= 1.2
        True
        >>> 1.6 <= backoff.calculate(2) <= 2.4
        True

        ```
    """

    def __init__(
        self,
        initial_delay: float = 1.0,
        max_delay: float = 60.0,
        factor: float = 2.0,
        jitter_factor: float = 0.2,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(initial_delay=initial_delay, max_delay=max_delay, factor=factor)
        if jitter_factor < 0:
            msg = f"jitter_factor must be non-negative, got {jitter_factor}"
            raise RetryConfigurationError(msg)
        self.jitter_factor = jitter_factor
        self._rng = rng if rng is not None else random.SystemRandom()
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(initial_delay={self.initial_delay}, "
            f"max_delay={self.max_delay}, factor={self.factor}, "
            f"jitter_factor={self.jitter_factor})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay with jitter.

        Args:
            attempt: The retry number (1-indexed).

        Returns:
            The jittered delay in seconds, never negative.
        """
        base = super().calculate(attempt)
        with self._lock:
            sample = self._rng.random()
        jitter = (2.0 * sample - 1.0) * self.jitter_factor * base
        delay = max(0.0, base + jitter)
        logger.debug(f"Jittered delay {delay:.3f}s (base={base:.3f}s, jitter={jitter:.3f}s)")
        return delay


class RandomBackoff(BaseBackoffStrategy):
    """Full-jitter backoff strategy.

    The n-th retry waits a uniformly distributed delay in
    ``[0, min(base_delay * 2**n, max_delay))``. Unlike
    ``ExponentialJitterBackoff``, the whole delay is random, which spreads
    out concurrent clients the most at the cost of an unpredictable wait.

    Args:
        base_delay: The base delay in seconds (default: 1.0).
        max_delay: The cap applied to the ceiling in seconds (default: 60.0).
        rng: Optional random source. Must produce uniform floats in
            ``[0, 1)`` from ``random()``. Defaults to ``random.SystemRandom``.

    Raises:
        RetryConfigurationError: If ``base_delay`` is negative, if
            ``max_delay`` is not positive, or if either is infinite.

    Example:
        ```pycon
        >>> from reattempt.backoff import RandomBackoff
        >>> backoff = RandomBackoff(base_delay=1.0, max_delay=10.0)
        >>> 0.0 <= backoff.calculate(1) < 2.0
        True
        >>> 0.0 <= backoff.calculate(10) < 10.0
        True

        ```
    """

    def __init__(
        self,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        rng: random.Random | None = None,
    ) -> None:
        validate_delay_bounds("base_delay", base_delay, max_delay)
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._rng = rng if rng is not None else random.SystemRandom()
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def ceiling(self, attempt: int) -> float:
        r"""Return the exclusive upper bound of the delay for a retry.

        Args:
            attempt: The retry number (1-indexed).

        Returns:
            ``base_delay * 2**attempt`` capped at ``max_delay``.
        """
        if self.base_delay == 0:
            return 0.0
        try:
            ceiling = self.base_delay * (2.0**attempt)
        except OverflowError:
            return float(self.max_delay)
        return min(ceiling, float(self.max_delay))

    def calculate(self, attempt: int) -> float:
        ceiling = self.ceiling(attempt)
        with self._lock:
            sample = self._rng.random()
        delay = sample * ceiling
        logger.debug(f"Random delay {delay:.3f}s (ceiling={ceiling:.3f}s)")
        return delay
