r"""Unit tests for RetryPolicy configuration class."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from coola.equality import objects_are_equal

from reattempt import CancellationToken
from reattempt.backoff import ConstantBackoff, ExponentialBackoff
from reattempt.core.config import DEFAULT_DELAY, DEFAULT_MAX_RETRIES, RetryPolicy
from reattempt.exceptions import RetryConfigurationError

#######################################
#     Tests for default constants     #
#######################################


def test_default_max_retries() -> None:
    assert DEFAULT_MAX_RETRIES == 3


def test_default_delay() -> None:
    assert DEFAULT_DELAY == 1.0


##################################
#     Tests for RetryPolicy      #
##################################


def test_retry_policy_defaults() -> None:
    """Test RetryPolicy with default values."""
    policy = RetryPolicy()
    assert policy.max_retries == 3
    assert isinstance(policy.backoff_strategy, ConstantBackoff)
    assert policy.backoff_strategy.delay == 1.0
    assert policy.retry_on == (Exception,)
    assert policy.retry_if_exception == ()
    assert policy.retry_if_result == ()
    assert policy.cancellation is None
    assert policy.on_attempt is None
    assert policy.on_retry is None
    assert policy.on_success is None
    assert policy.on_failure is None


def test_retry_policy_default_strategies_are_not_shared() -> None:
    assert RetryPolicy().backoff_strategy is not RetryPolicy().backoff_strategy


def test_retry_policy_max_attempts() -> None:
    assert RetryPolicy(max_retries=4).max_attempts == 5


def test_retry_policy_custom_values() -> None:
    """Test RetryPolicy with custom values."""
    token = CancellationToken()
    backoff = ExponentialBackoff(initial_delay=0.5, max_delay=10.0)
    policy = RetryPolicy(
        max_retries=5,
        backoff_strategy=backoff,
        retry_on=(ConnectionError, TimeoutError),
        cancellation=token,
    )
    assert policy.max_retries == 5
    assert policy.backoff_strategy is backoff
    assert policy.retry_on == (ConnectionError, TimeoutError)
    assert policy.cancellation is token


def test_retry_policy_single_exception_type_is_normalized() -> None:
    assert RetryPolicy(retry_on=ValueError).retry_on == (ValueError,)


def test_retry_policy_exception_type_list_is_normalized() -> None:
    assert RetryPolicy(retry_on=[ValueError, KeyError]).retry_on == (ValueError, KeyError)


def test_retry_policy_single_predicate_is_normalized() -> None:
    def predicate(value: object) -> bool:
        return value is None

    policy = RetryPolicy(retry_if_result=predicate, retry_if_exception=[predicate])
    assert policy.retry_if_result == (predicate,)
    assert policy.retry_if_exception == (predicate,)


def test_retry_policy_accepts_function_backoff() -> None:
    def delay(attempt: int) -> float:
        return 0.1 * attempt

    assert RetryPolicy(backoff_strategy=delay).backoff_strategy is delay


@pytest.mark.parametrize("max_retries", [0, -1, -10])
def test_retry_policy_invalid_max_retries(max_retries: int) -> None:
    """Test that max_retries below 1 raises RetryConfigurationError."""
    with pytest.raises(RetryConfigurationError, match=r"max_retries must be >= 1"):
        RetryPolicy(max_retries=max_retries)


@pytest.mark.parametrize("max_retries", [True, 2.0, "3", None])
def test_retry_policy_max_retries_not_int(max_retries: object) -> None:
    with pytest.raises(RetryConfigurationError, match=r"max_retries must be an integer"):
        RetryPolicy(max_retries=max_retries)  # type: ignore[arg-type]


def test_retry_policy_empty_retry_on() -> None:
    with pytest.raises(RetryConfigurationError, match=r"retry_on must contain at least one"):
        RetryPolicy(retry_on=())


def test_retry_policy_retry_on_not_exception_type() -> None:
    with pytest.raises(RetryConfigurationError, match=r"retry_on must contain exception types"):
        RetryPolicy(retry_on=(ValueError, "KeyError"))  # type: ignore[arg-type]


def test_retry_policy_predicate_not_callable() -> None:
    with pytest.raises(RetryConfigurationError, match=r"retry_if_result must contain callables"):
        RetryPolicy(retry_if_result=(None,))  # type: ignore[arg-type]


def test_retry_policy_invalid_backoff_strategy() -> None:
    with pytest.raises(RetryConfigurationError, match=r"backoff_strategy must be"):
        RetryPolicy(backoff_strategy=1.5)  # type: ignore[arg-type]


def test_retry_policy_merge() -> None:
    """Test merging overrides into a new policy."""
    policy = RetryPolicy(max_retries=3, retry_on=ValueError)
    new_policy = policy.merge(max_retries=5)
    assert new_policy is not policy
    assert new_policy.max_retries == 5
    assert new_policy.retry_on == (ValueError,)
    assert policy.max_retries == 3


def test_retry_policy_merge_ignores_none() -> None:
    token = CancellationToken()
    policy = RetryPolicy(cancellation=token)
    assert policy.merge(cancellation=None, max_retries=None).cancellation is token


def test_retry_policy_merge_validates() -> None:
    with pytest.raises(RetryConfigurationError, match=r"max_retries must be >= 1"):
        RetryPolicy().merge(max_retries=0)


def test_retry_policy_merge_normalizes() -> None:
    assert RetryPolicy().merge(retry_on=KeyError).retry_on == (KeyError,)


def test_retry_policy_to_dict() -> None:
    backoff = ConstantBackoff(0.5)
    callback = Mock()
    policy = RetryPolicy(max_retries=2, backoff_strategy=backoff, on_retry=callback)
    assert objects_are_equal(
        policy.to_dict(),
        {
            "max_retries": 2,
            "backoff_strategy": backoff,
            "retry_on": (Exception,),
            "retry_if_exception": (),
            "retry_if_result": (),
            "cancellation": None,
            "on_attempt": None,
            "on_retry": callback,
            "on_success": None,
            "on_failure": None,
        },
    )
