r"""Exception types raised by the retry engine.

The retry engine distinguishes four kinds of errors:

- ``RetryExhaustedError``: every attempt failed; the error carries each
  recorded cause in attempt order.
- ``UnexpectedResultError``: the cause recorded when an operation returned
  a value rejected by a result predicate.
- ``RetryConfigurationError``: the policy, a backoff strategy or the
  operation is invalid. It is never retried.
- ``RetryCancelledError``: the cancellation token fired. It is never
  wrapped in ``RetryExhaustedError``.

Fatal failures (filtered out by kind or by predicate) are not wrapped: the
original exception object propagates unchanged.
"""

from __future__ import annotations

__all__ = [
    "RetryCancelledError",
    "RetryConfigurationError",
    "RetryError",
    "RetryExhaustedError",
    "UnexpectedResultError",
]

from typing import Any


class RetryError(Exception):
    """Base class for all errors raised by reattempt."""


class RetryConfigurationError(RetryError, ValueError):
    """Exception raised when a retry policy or strategy is invalid.

    Example:
        ```pycon
        >>> from reattempt.exceptions import RetryConfigurationError
        >>> raise RetryConfigurationError("max_retries must be >= 1, got 0")
        Traceback (most recent call last):
            ...
        reattempt.exceptions.RetryConfigurationError: max_retries must be >= 1, got 0

        ```
    """


class RetryCancelledError(RetryError):
    """Exception raised when a retry loop is cancelled.

    Args:
        message: A descriptive error message.
        attempt: The 0-indexed attempt that would have run next, if known.
    """

    def __init__(self, message: str = "retry cancelled", attempt: int | None = None) -> None:
        super().__init__(message)
        self.attempt = attempt


class UnexpectedResultError(RetryError):
    """Cause recorded when an operation returns an unwanted result.

    Args:
        result: The value returned by the operation.
        attempt: The 0-indexed attempt that produced the value.

    Example:
        ```pycon
        >>> from reattempt.exceptions import UnexpectedResultError
        >>> err = UnexpectedResultError(result=None, attempt=0)
        >>> err.result is None
        True
        >>> str(err)
        'unexpected result on attempt 1: None'

        ```
    """

    def __init__(self, result: Any, attempt: int) -> None:
        super().__init__(f"unexpected result on attempt {attempt + 1}: {result!r}")
        self.result = result
        self.attempt = attempt


class RetryExhaustedError(RetryError):
    """Exception raised when all retry attempts have failed.

    The causes are stored in attempt order and cannot be modified once the
    error is created.

    Args:
        causes: The exceptions recorded for each failed attempt.
        message: Optional custom message.

    Attributes:
        causes: Tuple of recorded causes, one per failed attempt.

    Example:
        ```pycon
        >>> from reattempt.exceptions import RetryExhaustedError
        >>> err = RetryExhaustedError([ValueError("a"), KeyError("b")])
        >>> err.attempts
        2
        >>> err.last_cause
        KeyError('b')
        >>> print(err)
        operation failed after 2 attempts: KeyError: 'b'

        ```
    """

    def __init__(
        self, causes: list[Exception] | tuple[Exception, ...], message: str | None = None
    ) -> None:
        self._causes = tuple(causes)
        if message is None:
            message = f"operation failed after {len(self._causes)} attempts"
            if self._causes:
                last = self._causes[-1]
                message = f"{message}: {type(last).__name__}: {last}"
        super().__init__(message)

    @property
    def causes(self) -> tuple[Exception, ...]:
        return self._causes

    @property
    def attempts(self) -> int:
        """The number of failed attempts."""
        return len(self._causes)

    @property
    def last_cause(self) -> Exception | None:
        """The cause recorded for the last attempt, or ``None``."""
        if not self._causes:
            return None
        return self._causes[-1]

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._causes, str(self)))
