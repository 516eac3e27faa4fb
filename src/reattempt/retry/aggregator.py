r"""Collection of the causes recorded during one retry invocation."""

from __future__ import annotations

__all__ = ["FailureAggregator"]

from reattempt.exceptions import RetryExhaustedError


class FailureAggregator:
    """Collects the cause of every failed attempt, in attempt order.

    One aggregator belongs to a single retry invocation and is discarded
    when the invocation returns.

    Example:
        ```pycon
        >>> from reattempt.retry.aggregator import FailureAggregator
        >>> aggregator = FailureAggregator()
        >>> aggregator.record(ValueError("first"))
        >>> aggregator.record(ValueError("second"))
        >>> len(aggregator)
        2
        >>> aggregator.build_error().causes
        (ValueError('first'), ValueError('second'))

        ```
    """

    def __init__(self) -> None:
        self._causes: list[Exception] = []

    def __len__(self) -> int:
        return len(self._causes)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(causes={len(self._causes)})"

    @property
    def causes(self) -> tuple[Exception, ...]:
        return tuple(self._causes)

    @property
    def last_cause(self) -> Exception | None:
        if not self._causes:
            return None
        return self._causes[-1]

    def record(self, cause: Exception) -> None:
        """Append the cause of a failed attempt.

        Args:
            cause: The exception raised by the attempt, or the
                ``UnexpectedResultError`` wrapping an unwanted result.
        """
        self._causes.append(cause)

    def build_error(self) -> RetryExhaustedError:
        """Create the aggregated error from the recorded causes.

        Returns:
            A ``RetryExhaustedError`` holding a snapshot of the causes.
        """
        return RetryExhaustedError(self._causes)
