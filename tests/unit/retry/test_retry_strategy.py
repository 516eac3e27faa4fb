r"""Unit tests for RetryStrategy."""

from __future__ import annotations

import logging

import pytest

from reattempt.backoff import CallableBackoff, ConstantBackoff, ExponentialBackoff
from reattempt.exceptions import RetryConfigurationError
from reattempt.retry.strategy import RetryStrategy


def test_retry_strategy_with_backoff_instance() -> None:
    backoff = ExponentialBackoff(initial_delay=1.0, max_delay=10.0)
    strategy = RetryStrategy(backoff)
    assert strategy.backoff_strategy is backoff
    assert [strategy.calculate_delay(n) for n in range(1, 5)] == [1.0, 2.0, 4.0, 8.0]


def test_retry_strategy_with_function() -> None:
    strategy = RetryStrategy(lambda attempt: attempt * 0.5)
    assert isinstance(strategy.backoff_strategy, CallableBackoff)
    assert strategy.calculate_delay(3) == 1.5


def test_retry_strategy_int_delay_is_converted() -> None:
    delay = RetryStrategy(lambda attempt: 2).calculate_delay(1)
    assert delay == 2.0
    assert isinstance(delay, float)


def test_retry_strategy_negative_delay() -> None:
    """Test that a negative delay is reported as a configuration error."""
    strategy = RetryStrategy(lambda attempt: -1.0)
    with pytest.raises(RetryConfigurationError, match=r"backoff delay must be non-negative"):
        strategy.calculate_delay(1)


def test_retry_strategy_non_numeric_delay() -> None:
    strategy = RetryStrategy(lambda attempt: "1s")
    with pytest.raises(RetryConfigurationError, match=r"backoff delay must be a number"):
        strategy.calculate_delay(1)


def test_retry_strategy_wraps_strategy_exception() -> None:
    """Test that an exception raised by the backoff is wrapped."""
    error = ZeroDivisionError("division by zero")

    def backoff(attempt: int) -> float:
        raise error

    strategy = RetryStrategy(backoff)
    with pytest.raises(RetryConfigurationError, match=r"failed for retry 2") as exc_info:
        strategy.calculate_delay(2)
    assert exc_info.value.__cause__ is error


def test_retry_strategy_logs_delay(caplog: pytest.LogCaptureFixture) -> None:
    strategy = RetryStrategy(ConstantBackoff(0.25))
    with caplog.at_level(logging.DEBUG, logger="reattempt.retry.strategy"):
        strategy.calculate_delay(1)
    assert any("0.25" in record.getMessage() for record in caplog.records)
