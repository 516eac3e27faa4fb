r"""Retryable HTTP requests on top of httpx.

Requests are retried when the transport fails (connection errors,
timeouts, protocol errors) and when the response status code is one of
``status_forcelist``. Any other response is returned to the caller, even
an error response.

Example:
    ```pycon
    >>> import httpx
    >>> from reattempt import RetryPolicy
    >>> from reattempt.adapters.http import request_with_retry
    >>> from reattempt.backoff import ExponentialBackoff
    >>> policy = RetryPolicy(backoff_strategy=ExponentialBackoff(initial_delay=0.3))
    >>> with httpx.Client() as client:  # doctest: +SKIP
    ...     url = "https://api.example.com/data"
    ...     response = request_with_retry(client, "GET", url, policy=policy)
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "RETRY_STATUS_CODES",
    "build_http_policy",
    "request_with_retry",
    "request_with_retry_async",
]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from reattempt.core.config import RetryPolicy
from reattempt.retry import AsyncRetryExecutor, RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

# HTTP status codes that should trigger automatic retry
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


def _status_predicate(status_forcelist: tuple[int, ...]) -> Callable[[httpx.Response], bool]:
    def is_retryable_status(response: httpx.Response) -> bool:
        if response.status_code in status_forcelist:
            logger.debug(
                f"{response.request.method} request to {response.request.url} "
                f"returned retryable status {response.status_code}"
            )
            return True
        return False

    return is_retryable_status


def build_http_policy(
    policy: RetryPolicy | None = None,
    status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES,
    retry_on: tuple[type[BaseException], ...] = (httpx.TransportError,),
) -> RetryPolicy:
    """Derive the policy used for HTTP requests.

    Args:
        policy: The base policy. Defaults to ``RetryPolicy()``.
        status_forcelist: Status codes that trigger a retry.
        retry_on: Exception types that trigger a retry. Replaces the
            ``retry_on`` of the base policy.

    Returns:
        A new policy with the status code predicate appended to the base
        policy's result predicates.

    Example:
        ```pycon
        >>> from reattempt.adapters.http import build_http_policy
        >>> policy = build_http_policy(status_forcelist=(503,))
        >>> policy.retry_on
        (<class 'httpx.TransportError'>,)
        >>> len(policy.retry_if_result)
        1

        ```
    """
    base = policy if policy is not None else RetryPolicy()
    return base.merge(
        retry_on=retry_on,
        retry_if_result=(*base.retry_if_result, _status_predicate(tuple(status_forcelist))),
    )


def request_with_retry(
    client: httpx.Client,
    method: str,
    url: str | httpx.URL,
    *,
    policy: RetryPolicy | None = None,
    status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES,
    **kwargs: Any,
) -> httpx.Response:
    r"""Send an HTTP request with automatic retry logic.

    Args:
        client: The httpx client used to send the request.
        method: The HTTP method (e.g. "GET", "POST").
        url: The URL to request.
        policy: The retry policy. Its ``retry_on`` is replaced by
            ``(httpx.TransportError,)``.
        status_forcelist: Status codes that trigger a retry.
        **kwargs: Additional keyword arguments passed to
            ``httpx.Client.request``.

    Returns:
        The first response whose status code is not in ``status_forcelist``.

    Raises:
        RetryExhaustedError: If every attempt failed. Causes are the
            transport errors, or ``UnexpectedResultError`` instances whose
            ``result`` is the rejected response.
        RetryCancelledError: If the policy's cancellation token fired.
    """
    executor = RetryExecutor(build_http_policy(policy, status_forcelist))
    return executor.execute(client.request, method, url, **kwargs)


async def request_with_retry_async(
    client: httpx.AsyncClient,
    method: str,
    url: str | httpx.URL,
    *,
    policy: RetryPolicy | None = None,
    status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES,
    **kwargs: Any,
) -> httpx.Response:
    r"""Send an async HTTP request with automatic retry logic.

    Args:
        client: The httpx async client used to send the request.
        method: The HTTP method (e.g. "GET", "POST").
        url: The URL to request.
        policy: The retry policy. Its ``retry_on`` is replaced by
            ``(httpx.TransportError,)``.
        status_forcelist: Status codes that trigger a retry.
        **kwargs: Additional keyword arguments passed to
            ``httpx.AsyncClient.request``.

    Returns:
        The first response whose status code is not in ``status_forcelist``.

    Raises:
        RetryExhaustedError: If every attempt failed.
        RetryCancelledError: If the policy's cancellation token fired.
    """
    executor = AsyncRetryExecutor(build_http_policy(policy, status_forcelist))
    return await executor.execute(client.request, method, url, **kwargs)
