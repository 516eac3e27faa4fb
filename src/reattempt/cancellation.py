r"""Cooperative cancellation for retry loops.

A ``CancellationToken`` is shared between the code that starts a retry
loop and the code that may want to stop it. The retry executors check the
token before every attempt and wake up from an in-progress backoff delay as
soon as the token is cancelled. A running operation is never interrupted;
it may observe the token itself if it needs to abort mid-flight.

The token works from any thread and from any event loop:

- blocking waits use a ``threading.Event``
- suspending waits register an ``asyncio.Event`` that ``cancel`` sets
  through ``loop.call_soon_threadsafe``

Example:
    ```pycon
    >>> from reattempt.cancellation import CancellationToken
    >>> token = CancellationToken()
    >>> token.cancelled
    False
    >>> token.cancel()
    >>> token.cancelled
    True
    >>> token.wait(10.0)  # returns immediately once cancelled
    True

    ```
"""

from __future__ import annotations

__all__ = ["CancellationToken"]

import asyncio
import logging
import threading

from reattempt.exceptions import RetryCancelledError

logger: logging.Logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe cancellation signal.

    Once cancelled, a token stays cancelled.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._waiters: set[tuple[asyncio.AbstractEventLoop, asyncio.Event]] = set()
        self._timer: threading.Timer | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(cancelled={self.cancelled})"

    @property
    def cancelled(self) -> bool:
        """``True`` once ``cancel`` has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Signal cancellation and wake up every pending wait."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            waiters = list(self._waiters)
            self._waiters.clear()
        logger.debug("Cancellation requested")
        for loop, event in waiters:
            if not loop.is_closed():
                loop.call_soon_threadsafe(event.set)

    def cancel_after(self, delay: float) -> None:
        """Cancel the token after ``delay`` seconds from a timer thread.

        Args:
            delay: The number of seconds to wait before cancelling.
                Must be >= 0.

        Raises:
            ValueError: If ``delay`` is negative.
        """
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(delay, self.cancel)
            self._timer.daemon = True
            self._timer.start()

    def raise_if_cancelled(self, attempt: int | None = None) -> None:
        """Raise ``RetryCancelledError`` if the token is cancelled.

        Args:
            attempt: Optional 0-indexed attempt number, attached to the error.

        Raises:
            RetryCancelledError: If the token is cancelled.
        """
        if self._event.is_set():
            raise RetryCancelledError(attempt=attempt)

    def wait(self, timeout: float | None = None) -> bool:
        """Block the calling thread until cancelled or ``timeout`` elapses.

        Args:
            timeout: The maximum number of seconds to wait, or ``None`` to
                wait until cancelled.

        Returns:
            ``True`` if the token was cancelled, ``False`` on timeout.
        """
        return self._event.wait(timeout)

    async def wait_async(self, timeout: float | None = None) -> bool:
        """Suspend the current task until cancelled or ``timeout`` elapses.

        The event loop thread is not blocked while waiting.

        Args:
            timeout: The maximum number of seconds to wait, or ``None`` to
                wait until cancelled.

        Returns:
            ``True`` if the token was cancelled, ``False`` on timeout.
        """
        loop = asyncio.get_running_loop()
        event = asyncio.Event()
        waiter = (loop, event)
        with self._lock:
            if self._event.is_set():
                return True
            self._waiters.add(waiter)
        try:
            await asyncio.wait_for(event.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        finally:
            with self._lock:
                self._waiters.discard(waiter)
        return True
