r"""Backoff strategies for retry delays.

This package provides the strategies used to compute the delay before each
retry: constant, exponential, exponential with jitter, full random jitter,
linear, Fibonacci, quadratic progression, ``n * ln(n)`` growth, and
caller-supplied functions.
"""

from __future__ import annotations

__all__ = [
    "BackoffFunction",
    "BaseBackoffStrategy",
    "CallableBackoff",
    "ConstantBackoff",
    "ExponentialBackoff",
    "ExponentialJitterBackoff",
    "FibonacciBackoff",
    "GammaBackoff",
    "LinearBackoff",
    "ProgressionBackoff",
    "RandomBackoff",
    "resolve_backoff_strategy",
    "validate_delay_bounds",
]

from reattempt.backoff.base import BackoffFunction, BaseBackoffStrategy, validate_delay_bounds
from reattempt.backoff.callable import CallableBackoff, resolve_backoff_strategy
from reattempt.backoff.constant import ConstantBackoff
from reattempt.backoff.exponential import ExponentialBackoff
from reattempt.backoff.fibonacci import FibonacciBackoff
from reattempt.backoff.gamma import GammaBackoff
from reattempt.backoff.jitter import ExponentialJitterBackoff, RandomBackoff
from reattempt.backoff.linear import LinearBackoff
from reattempt.backoff.progression import ProgressionBackoff
