r"""Unit tests for the helpers shared by both executors."""

from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from reattempt import CancellationToken, RetryCancelledError, RetryExhaustedError
from reattempt.core import RetryPolicy
from reattempt.retry.aggregator import FailureAggregator
from reattempt.retry.decider import AttemptOutcome, AttemptRecord
from reattempt.retry.executor_core import (
    check_cancelled,
    create_exhausted_error,
    log_failed_attempt,
    log_fatal_failure,
)
from reattempt.retry.manager import CallbackManager

#####################################
#     Tests for check_cancelled     #
#####################################


def test_check_cancelled_without_token() -> None:
    check_cancelled(None, 0)


def test_check_cancelled_active_token() -> None:
    check_cancelled(CancellationToken(), 0)


def test_check_cancelled_cancelled_token() -> None:
    token = CancellationToken()
    token.cancel()
    with pytest.raises(RetryCancelledError) as exc_info:
        check_cancelled(token, 2)
    assert exc_info.value.attempt == 2


#########################################
#     Tests for logging helpers         #
#########################################


def test_log_failed_attempt(caplog: pytest.LogCaptureFixture) -> None:
    record = AttemptRecord(
        attempt=1,
        outcome=AttemptOutcome.RETRYABLE_FAILURE,
        error=TimeoutError("slow"),
        reason="TimeoutError",
    )
    with caplog.at_level(logging.DEBUG, logger="reattempt.retry.executor_core"):
        log_failed_attempt(record, max_retries=3)
    assert len(caplog.records) == 1
    log_record = caplog.records[0]
    assert "Attempt 2/4 failed" in log_record.getMessage()
    assert log_record.attempt == 1
    assert log_record.max_retries == 3
    assert log_record.outcome == "retryable_failure"
    assert log_record.error_type == "TimeoutError"


def test_log_fatal_failure(caplog: pytest.LogCaptureFixture) -> None:
    record = AttemptRecord(
        attempt=0,
        outcome=AttemptOutcome.FATAL_FAILURE,
        error=ValueError("bad"),
        reason="ValueError is not a retryable type",
    )
    with caplog.at_level(logging.DEBUG, logger="reattempt.retry.executor_core"):
        log_fatal_failure(record, max_retries=3)
    assert "non-retryable" in caplog.records[0].getMessage()
    assert caplog.records[0].error_type == "ValueError"


def test_log_failed_attempt_disabled(caplog: pytest.LogCaptureFixture) -> None:
    record = AttemptRecord(attempt=0, outcome=AttemptOutcome.RETRYABLE_FAILURE, error=OSError())
    with caplog.at_level(logging.INFO, logger="reattempt.retry.executor_core"):
        log_failed_attempt(record, max_retries=3)
    assert caplog.records == []


############################################
#     Tests for create_exhausted_error     #
############################################


def test_create_exhausted_error(mock_callback: Mock) -> None:
    causes = [ValueError("a"), ValueError("b")]
    aggregator = FailureAggregator()
    for cause in causes:
        aggregator.record(cause)
    callbacks = CallbackManager(RetryPolicy(max_retries=1, on_failure=mock_callback))

    error = create_exhausted_error(aggregator, callbacks, max_retries=1, start_time=0.0)

    assert isinstance(error, RetryExhaustedError)
    assert error.causes == tuple(causes)
    mock_callback.assert_called_once()
    info = mock_callback.call_args.args[0]
    assert info.attempt == 2
    assert info.max_retries == 1
    assert info.error is error
