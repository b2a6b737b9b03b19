r"""Unit tests for the abackoff exceptions."""

from __future__ import annotations

import pytest

from abackoff.exceptions import BackoffError, BackoffInitialisationError, BackoffRuntimeError

################################################
#     Tests for BackoffInitialisationError     #
################################################


def test_initialisation_error_is_value_error() -> None:
    """Test that initialisation errors can be caught as ValueError."""
    assert isinstance(BackoffInitialisationError("msg"), ValueError)
    assert isinstance(BackoffInitialisationError("msg"), BackoffError)


def test_initialisation_error_invalid_unit_type() -> None:
    """Test the message of the invalid unit error."""
    exc = BackoffInitialisationError.invalid_unit_type("hours")
    assert str(exc) == 'Invalid unit type "hours" was given'


def test_initialisation_error_rand_min_is_greater_than_max() -> None:
    """Test the message of the min/max error."""
    exc = BackoffInitialisationError.rand_min_is_greater_than_max(5, 2)
    assert str(exc) == "The minimum value 5 is greater than the maximum value 2"


def test_initialisation_error_can_be_raised() -> None:
    """Test that the factory methods return raisable exceptions."""
    with pytest.raises(BackoffInitialisationError, match=r"Invalid unit type"):
        raise BackoffInitialisationError.invalid_unit_type("days")


#########################################
#     Tests for BackoffRuntimeError     #
#########################################


def test_runtime_error_is_runtime_error() -> None:
    """Test that runtime errors can be caught as RuntimeError."""
    assert isinstance(BackoffRuntimeError("msg"), RuntimeError)
    assert isinstance(BackoffRuntimeError("msg"), BackoffError)


def test_runtime_error_cannot_change_after_starting() -> None:
    """Test that the message names the method that was called."""
    exc = BackoffRuntimeError.cannot_change_after_starting("max_attempts")
    assert str(exc) == (
        'Backoff settings cannot be reconfigured after starting - attempted to call "max_attempts"'
    )


def test_runtime_error_start_of_attempt_not_allowed() -> None:
    """Test the message raised when starting an attempt after stopping."""
    exc = BackoffRuntimeError.start_of_attempt_not_allowed()
    assert str(exc) == "Cannot start an attempt after the backoff has stopped"


def test_runtime_error_attempt_log_has_not_started() -> None:
    """Test the message raised when ending an attempt that never
    started."""
    exc = BackoffRuntimeError.attempt_log_has_not_started()
    assert str(exc) == "Cannot end an attempt that has not started"


def test_runtime_error_invalid_callback_result() -> None:
    """Test that the message names the type returned by the callback."""
    exc = BackoffRuntimeError.invalid_callback_result("abc")
    assert str(exc) == "The backoff callback must return a number or None, got str"
