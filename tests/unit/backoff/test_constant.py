r"""Unit tests for ConstantBackoff strategy."""

from __future__ import annotations

import pytest

from reattempt.backoff.constant import ConstantBackoff
from reattempt.exceptions import RetryConfigurationError


@pytest.mark.parametrize("attempt", [1, 2, 3, 10, 1000])
def test_constant_backoff_same_delay(attempt: int) -> None:
    """Test that the delay does not depend on the retry number."""
    assert ConstantBackoff(delay=2.5).calculate(attempt) == 2.5


def test_constant_backoff_default_delay() -> None:
    """Test constant backoff with default delay of one second."""
    backoff = ConstantBackoff()
    assert backoff.delay == 1.0
    assert backoff.calculate(1) == 1.0


def test_constant_backoff_zero_delay() -> None:
    """Test that a zero delay is allowed."""
    assert ConstantBackoff(delay=0.0).calculate(5) == 0.0


def test_constant_backoff_invalid_delay() -> None:
    """Test that negative delay raises RetryConfigurationError."""
    with pytest.raises(RetryConfigurationError, match=r"delay must be non-negative"):
        ConstantBackoff(delay=-1.0)


def test_constant_backoff_invalid_delay_is_value_error() -> None:
    """Test that configuration errors are also ValueErrors."""
    with pytest.raises(ValueError, match=r"delay must be non-negative"):
        ConstantBackoff(delay=-0.1)


def test_constant_backoff_repr() -> None:
    assert repr(ConstantBackoff(delay=0.5)) == "ConstantBackoff(delay=0.5)"


def test_constant_backoff_infinite_delay() -> None:
    with pytest.raises(RetryConfigurationError, match=r"delay must be finite"):
        ConstantBackoff(delay=float("inf"))
