r"""Unit tests for structured logging utilities."""

from __future__ import annotations

import json
import logging
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from reattempt.utils.structured_logging import (
    StructuredFormatter,
    clear_invocation_id,
    get_invocation_id,
    invocation_scope,
    log_structured,
    set_invocation_id,
)

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _reset_invocation_id() -> Generator[None, None, None]:
    clear_invocation_id()
    yield
    clear_invocation_id()


@pytest.fixture
def stream_logger() -> Generator[tuple[logging.Logger, StringIO], None, None]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("test_structured_logging")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger, stream
    logger.removeHandler(handler)


def _last_record(stream: StringIO) -> dict:
    return json.loads(stream.getvalue().strip().splitlines()[-1])


#######################################
#     Tests for the invocation ID     #
#######################################


def test_invocation_id_default() -> None:
    assert get_invocation_id() is None


def test_set_and_clear_invocation_id() -> None:
    set_invocation_id("req-1")
    assert get_invocation_id() == "req-1"
    clear_invocation_id()
    assert get_invocation_id() is None


def test_invocation_scope_generates_id() -> None:
    with invocation_scope() as invocation_id:
        assert isinstance(invocation_id, str)
        assert len(invocation_id) == 32
        assert get_invocation_id() == invocation_id
    assert get_invocation_id() is None


def test_invocation_scope_unique_ids() -> None:
    with invocation_scope() as first:
        pass
    with invocation_scope() as second:
        pass
    assert first != second


def test_invocation_scope_keeps_existing_id() -> None:
    set_invocation_id("req-2")
    with invocation_scope() as invocation_id:
        assert invocation_id == "req-2"
    assert get_invocation_id() == "req-2"


def test_invocation_scope_resets_on_error() -> None:
    with pytest.raises(RuntimeError), invocation_scope():
        raise RuntimeError
    assert get_invocation_id() is None


#########################################
#     Tests for StructuredFormatter     #
#########################################


def test_structured_formatter_fields(stream_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = stream_logger
    logger.info("Attempt failed", extra={"attempt": 1, "error_type": "OSError"})
    data = _last_record(stream)
    assert data["level"] == "INFO"
    assert data["logger"] == "test_structured_logging"
    assert data["message"] == "Attempt failed"
    assert data["attempt"] == 1
    assert data["error_type"] == "OSError"
    assert data["timestamp"].endswith("Z")
    assert "invocation_id" not in data


def test_structured_formatter_invocation_id(
    stream_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = stream_logger
    set_invocation_id("req-3")
    logger.warning("waiting")
    assert _last_record(stream)["invocation_id"] == "req-3"


def test_structured_formatter_exception(stream_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = stream_logger
    try:
        msg = "boom"
        raise ValueError(msg)
    except ValueError:
        logger.exception("failed")
    assert "ValueError: boom" in _last_record(stream)["exception"]


def test_structured_formatter_non_serializable(
    stream_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = stream_logger
    logger.info("failed", extra={"error": KeyError("k")})
    assert _last_record(stream)["error"] == "KeyError('k')"


####################################
#     Tests for log_structured     #
####################################


def test_log_structured(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("test_log_structured")
    with caplog.at_level(logging.DEBUG, logger="test_log_structured"):
        log_structured(logger, logging.DEBUG, "retrying", attempt=2, wait_time=0.5)
    assert caplog.records[0].attempt == 2
    assert caplog.records[0].wait_time == 0.5


def test_log_structured_disabled(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("test_log_structured_disabled")
    with caplog.at_level(logging.WARNING, logger="test_log_structured_disabled"):
        log_structured(logger, logging.DEBUG, "retrying", attempt=2)
    assert caplog.records == []
