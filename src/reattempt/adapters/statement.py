r"""Retryable execution of a stored SQL statement.

The statement is run on a DB-API 2.0 connection (``sqlite3``, ``psycopg``,
``pymysql``, ...). A failed attempt is rolled back before the next one, so
each attempt starts from a clean transaction; a successful attempt is
committed.
"""

from __future__ import annotations

__all__ = ["execute_statement_with_retry"]

import logging
from typing import TYPE_CHECKING, Any

from reattempt.retry import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reattempt.core.config import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


def _run_statement(
    connection: Any, statement: str, parameters: Sequence[Any] | dict[str, Any]
) -> list[Any]:
    cursor = connection.cursor()
    try:
        cursor.execute(statement, parameters)
        rows = cursor.fetchall() if cursor.description is not None else []
        connection.commit()
    except Exception:
        logger.debug(f"Rolling back failed statement: {statement}")
        connection.rollback()
        raise
    finally:
        cursor.close()
    return rows


def execute_statement_with_retry(
    connection: Any,
    statement: str,
    parameters: Sequence[Any] | dict[str, Any] = (),
    *,
    policy: RetryPolicy | None = None,
) -> list[Any]:
    r"""Execute a SQL statement with automatic retry logic.

    Args:
        connection: A DB-API 2.0 connection.
        statement: The SQL statement to execute.
        parameters: The statement parameters.
        policy: The retry policy. Restrict ``retry_on`` to the driver's
            transient errors (e.g. ``sqlite3.OperationalError``) to avoid
            retrying programming errors.

    Returns:
        The rows returned by the statement, or an empty list for
        statements that return no rows.

    Raises:
        RetryExhaustedError: If every attempt failed.
        RetryCancelledError: If the policy's cancellation token fired.

    Example:
        ```pycon
        >>> import sqlite3
        >>> from reattempt.adapters.statement import execute_statement_with_retry
        >>> connection = sqlite3.connect(":memory:")
        >>> execute_statement_with_retry(connection, "SELECT 1 + ?", (1,))
        [(2,)]

        ```
    """
    return RetryExecutor(policy).execute(_run_statement, connection, statement, parameters)
