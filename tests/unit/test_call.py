r"""Unit tests for call_with_retry and call_with_retry_async."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest

from reattempt import RetryExhaustedError, RetryPolicy, call_with_retry, call_with_retry_async


def test_call_with_retry_success(mock_sleep: Mock) -> None:
    operation = Mock(side_effect=[ConnectionError(), "ok"])
    assert call_with_retry(operation) == "ok"
    mock_sleep.assert_called_once_with(1.0)


def test_call_with_retry_arguments(fast_policy: RetryPolicy) -> None:
    assert call_with_retry(int, "42", policy=fast_policy) == 42
    assert call_with_retry(int, "ff", base=16, policy=fast_policy) == 255


def test_call_with_retry_exhausted(fast_policy: RetryPolicy) -> None:
    operation = Mock(side_effect=OSError("down"))
    with pytest.raises(RetryExhaustedError):
        call_with_retry(operation, policy=fast_policy.merge(max_retries=2))
    assert operation.call_count == 3


@pytest.mark.asyncio
async def test_call_with_retry_async_success(mock_asleep: Mock) -> None:
    operation = AsyncMock(side_effect=[TimeoutError(), "data"])
    assert await call_with_retry_async(operation) == "data"
    mock_asleep.assert_called_once_with(1.0)


@pytest.mark.asyncio
async def test_call_with_retry_async_arguments(fast_policy: RetryPolicy) -> None:
    operation = AsyncMock(return_value="ok")
    assert await call_with_retry_async(operation, "a", flag=True, policy=fast_policy) == "ok"
    operation.assert_awaited_once_with("a", flag=True)
