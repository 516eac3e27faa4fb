r"""Unit tests for RandomBackoff strategy."""

from __future__ import annotations

import random
import sys
import threading
from unittest.mock import Mock

import pytest

from reattempt.backoff.jitter import RandomBackoff
from reattempt.exceptions import RetryConfigurationError


def test_random_backoff_uses_system_random_by_default() -> None:
    backoff = RandomBackoff()
    assert isinstance(backoff._rng, random.SystemRandom)


def test_random_backoff_default_values() -> None:
    backoff = RandomBackoff()
    assert backoff.base_delay == 1.0
    assert backoff.max_delay == 60.0


@pytest.mark.parametrize(
    ("attempt", "sample", "expected"),
    [(1, 0.0, 0.0), (1, 0.5, 1.0), (2, 0.5, 2.0), (3, 0.25, 2.0), (10, 0.5, 5.0)],
)
def test_random_backoff_deterministic_samples(
    attempt: int, sample: float, expected: float
) -> None:
    """Test the full-jitter computation with a fixed random sample."""
    rng = Mock(spec=random.Random)
    rng.random.return_value = sample
    backoff = RandomBackoff(base_delay=1.0, max_delay=10.0, rng=rng)
    assert backoff.calculate(attempt) == pytest.approx(expected)
    rng.random.assert_called_once_with()


@pytest.mark.parametrize(
    ("attempt", "expected"), [(1, 2.0), (2, 4.0), (3, 8.0), (4, 10.0), (100, 10.0)]
)
def test_random_backoff_ceiling(attempt: int, expected: float) -> None:
    assert RandomBackoff(base_delay=1.0, max_delay=10.0).ceiling(attempt) == expected


@pytest.mark.parametrize("attempt", [1100, sys.maxsize])
def test_random_backoff_ceiling_overflow_returns_max_delay(attempt: int) -> None:
    assert RandomBackoff(base_delay=1.0, max_delay=10.0).ceiling(attempt) == 10.0


@pytest.mark.parametrize("attempt", [1, 2, 3, 5, 8])
def test_random_backoff_stays_within_band(attempt: int) -> None:
    """Test over many draws that the delay stays in [0, ceiling)."""
    backoff = RandomBackoff(base_delay=0.5, max_delay=30.0)
    ceiling = min(0.5 * 2**attempt, 30.0)
    samples = [backoff.calculate(attempt) for _ in range(2000)]
    assert all(0.0 <= s < ceiling for s in samples)
    assert min(samples) < ceiling * 0.1
    assert max(samples) > ceiling * 0.9


def test_random_backoff_zero_base_delay() -> None:
    backoff = RandomBackoff(base_delay=0.0, max_delay=10.0)
    assert backoff.calculate(1) == 0.0
    assert backoff.calculate(2000) == 0.0


def test_random_backoff_shared_between_threads() -> None:
    rng = random.Random(7)  # noqa: S311
    backoff = RandomBackoff(base_delay=1.0, max_delay=10.0, rng=rng)
    results: list[float] = []
    lock = threading.Lock()

    def worker() -> None:
        values = [backoff.calculate(3) for _ in range(500)]
        with lock:
            results.extend(values)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 4000
    assert all(0.0 <= value < 8.0 for value in results)


def test_random_backoff_repr() -> None:
    assert repr(RandomBackoff(base_delay=0.5, max_delay=4.0)) == (
        "RandomBackoff(base_delay=0.5, max_delay=4.0)"
    )


def test_random_backoff_invalid_base_delay() -> None:
    with pytest.raises(RetryConfigurationError, match=r"base_delay must be non-negative"):
        RandomBackoff(base_delay=-1.0)


@pytest.mark.parametrize(
    ("max_delay", "message"),
    [
        (0.0, "max_delay must be positive"),
        (float("inf"), "max_delay must be finite"),
    ],
)
def test_random_backoff_invalid_max_delay(max_delay: float, message: str) -> None:
    with pytest.raises(RetryConfigurationError, match=message):
        RandomBackoff(max_delay=max_delay)
