r"""Retry package implementing class-based composition pattern.

Public API:
    - RetryExecutor: Synchronous (blocking) retry executor
    - AsyncRetryExecutor: Asynchronous (suspending) retry executor
    - RetryStrategy: Validated backoff delay calculation
    - RetryDecider: Classification of attempt outcomes
    - AttemptOutcome, AttemptRecord: Result of the classification
    - FailureAggregator: Collection of the causes of failed attempts
    - CallbackManager: Manager for callback invocations
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "AttemptOutcome",
    "AttemptRecord",
    "CallbackManager",
    "FailureAggregator",
    "RetryDecider",
    "RetryExecutor",
    "RetryStrategy",
]

from reattempt.retry.aggregator import FailureAggregator
from reattempt.retry.decider import AttemptOutcome, AttemptRecord, RetryDecider
from reattempt.retry.executor import RetryExecutor
from reattempt.retry.executor_async import AsyncRetryExecutor
from reattempt.retry.manager import CallbackManager
from reattempt.retry.strategy import RetryStrategy
