r"""Cancellable sleep utilities for the retry executors.

The blocking helper occupies the calling thread; the async helper
suspends the calling task and leaves the event loop free. Both return as
soon as the cancellation token fires and raise ``RetryCancelledError``.
"""

from __future__ import annotations

__all__ = ["sleep", "sleep_async"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from reattempt.exceptions import RetryCancelledError

if TYPE_CHECKING:
    from reattempt.cancellation import CancellationToken

logger: logging.Logger = logging.getLogger(__name__)


def sleep(
    delay: float, cancellation: CancellationToken | None = None, attempt: int | None = None
) -> None:
    """Block the calling thread for ``delay`` seconds.

    Args:
        delay: The number of seconds to wait.
        cancellation: Optional token interrupting the wait.
        attempt: Optional 0-indexed attempt that follows the wait, attached
            to the cancellation error.

    Raises:
        RetryCancelledError: If the token is cancelled before or during
            the wait.

    Example:
        ```pycon
        >>> from reattempt.utils.sleep import sleep
        >>> sleep(0.0)

        ```
    """
    if cancellation is None:
        time.sleep(delay)
        return
    if cancellation.wait(delay):
        logger.debug(f"Wait of {delay:.2f}s interrupted by cancellation")
        raise RetryCancelledError(attempt=attempt)


async def sleep_async(
    delay: float, cancellation: CancellationToken | None = None, attempt: int | None = None
) -> None:
    """Suspend the calling task for ``delay`` seconds.

    Args:
        delay: The number of seconds to wait.
        cancellation: Optional token interrupting the wait.
        attempt: Optional 0-indexed attempt that follows the wait, attached
            to the cancellation error.

    Raises:
        RetryCancelledError: If the token is cancelled before or during
            the wait.
    """
    if cancellation is None:
        await asyncio.sleep(delay)
        return
    if await cancellation.wait_async(delay):
        logger.debug(f"Wait of {delay:.2f}s interrupted by cancellation")
        raise RetryCancelledError(attempt=attempt)
