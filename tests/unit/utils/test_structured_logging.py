from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from abackoff import Backoff
from abackoff.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def stream() -> Generator[StringIO, None, None]:
    """Attach a StructuredFormatter handler to the abackoff loggers."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("abackoff")
    level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield stream
    finally:
        logger.removeHandler(handler)
        logger.setLevel(level)
        clear_correlation_id()


def read_records(stream: StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().strip().split("\n") if line]


##############################################
#     Tests for correlation ID management    #
##############################################


def test_get_correlation_id_initially_none() -> None:
    """Test that correlation ID is initially None."""
    clear_correlation_id()
    assert get_correlation_id() is None


def test_set_and_get_correlation_id() -> None:
    """Test setting and getting correlation ID."""
    set_correlation_id("job-123")
    assert get_correlation_id() == "job-123"
    clear_correlation_id()


def test_clear_correlation_id() -> None:
    """Test clearing correlation ID."""
    set_correlation_id("job-456")
    clear_correlation_id()
    assert get_correlation_id() is None


##############################################
#     Tests for StructuredFormatter          #
##############################################


def test_structured_formatter_basic_log(stream: StringIO) -> None:
    """Test that StructuredFormatter produces valid JSON."""
    logging.getLogger("abackoff.test").info("Test message")

    (log_data,) = read_records(stream)
    assert log_data["message"] == "Test message"
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "abackoff.test"
    assert "module" in log_data
    assert "function" in log_data
    assert "line" in log_data
    assert "correlation_id" not in log_data


def test_structured_formatter_with_correlation_id(stream: StringIO) -> None:
    """Test that StructuredFormatter includes the correlation ID."""
    set_correlation_id("job-789")
    logging.getLogger("abackoff.test").info("Run started")

    (log_data,) = read_records(stream)
    assert log_data["correlation_id"] == "job-789"


def test_structured_formatter_with_extra_fields(stream: StringIO) -> None:
    """Test that StructuredFormatter includes extra fields."""
    logging.getLogger("abackoff.test").info(
        "Attempt finished", extra={"attempt_number": 2, "next_delay": 1.5}
    )

    (log_data,) = read_records(stream)
    assert log_data["attempt_number"] == 2
    assert log_data["next_delay"] == 1.5


def test_structured_formatter_non_serializable_extra_field(stream: StringIO) -> None:
    """Test that values JSON cannot serialize are rendered with repr."""
    occurred_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    logging.getLogger("abackoff.test").info("Attempt", extra={"occurred_at": occurred_at})

    (log_data,) = read_records(stream)
    assert log_data["occurred_at"] == repr(occurred_at)


def test_structured_formatter_with_exception(stream: StringIO) -> None:
    """Test that StructuredFormatter includes exception information."""
    try:
        raise ValueError("Test error")
    except ValueError:
        logging.getLogger("abackoff.test").exception("An error occurred")

    (log_data,) = read_records(stream)
    assert "ValueError: Test error" in log_data["exception"]


def test_structured_formatter_timestamp_format(stream: StringIO) -> None:
    """Test that StructuredFormatter uses ISO 8601 timestamps."""
    logging.getLogger("abackoff.test").info("Timestamp test")

    (log_data,) = read_records(stream)
    timestamp = log_data["timestamp"]
    assert "T" in timestamp
    assert timestamp.endswith("Z")
    # Format: YYYY-MM-DDTHH:MM:SS.MMMZ
    assert len(timestamp) == 24


##############################################
#     Tests for log_structured helper        #
##############################################


def test_log_structured_with_extra_fields(stream: StringIO) -> None:
    """Test log_structured helper function."""
    log_structured(
        logging.getLogger("abackoff.test"),
        logging.DEBUG,
        "Attempt 1 finished",
        attempt_number=1,
        unit_type="seconds",
    )

    (log_data,) = read_records(stream)
    assert log_data["message"] == "Attempt 1 finished"
    assert log_data["attempt_number"] == 1
    assert log_data["unit_type"] == "seconds"


def test_log_structured_respects_log_level(stream: StringIO) -> None:
    """Test that log_structured respects the logger's level."""
    logging.getLogger("abackoff").setLevel(logging.WARNING)
    log_structured(logging.getLogger("abackoff.test"), logging.DEBUG, "Hidden")
    log_structured(logging.getLogger("abackoff.test"), logging.WARNING, "Shown")

    (log_data,) = read_records(stream)
    assert log_data["message"] == "Shown"


def test_attempt_metrics_are_logged(stream: StringIO) -> None:
    """Test that each finished attempt is logged with its metrics."""
    Backoff.noop().max_attempts(2).attempt(lambda: 42)

    finished = [record for record in read_records(stream) if "attempt_number" in record]
    assert len(finished) == 1
    assert finished[0]["message"] == "Attempt 1 finished"
    assert finished[0]["max_attempts"] == 2
    assert finished[0]["unit_type"] == "seconds"
    assert finished[0]["prev_delay"] is None
    assert finished[0]["next_delay"] == 0
