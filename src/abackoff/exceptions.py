r"""Exceptions raised by abackoff.

The errors are split in two families: initialisation errors, raised when
an object is built with invalid values, and runtime errors, raised when
the retry machinery is misused while it runs. Exceptions raised by the
operation being retried are never wrapped in these classes.
"""

from __future__ import annotations

__all__ = ["BackoffError", "BackoffInitialisationError", "BackoffRuntimeError"]

from typing import Any


class BackoffError(Exception):
    """Base class of all the exceptions raised by abackoff."""


class BackoffInitialisationError(BackoffError, ValueError):
    """Exception raised when an object is initialised with invalid
    values.

    Args:
        message: A descriptive error message.

    Example:
        ```pycon
        >>> from abackoff.exceptions import BackoffInitialisationError
        >>> raise BackoffInitialisationError.invalid_unit_type("hours")
        Traceback (most recent call last):
            ...
        abackoff.exceptions.BackoffInitialisationError: Invalid unit type "hours" was given

        ```
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)

    @classmethod
    def invalid_unit_type(cls, unit: Any) -> BackoffInitialisationError:
        return cls(f'Invalid unit type "{unit}" was given')

    @classmethod
    def rand_min_is_greater_than_max(cls, min_: float, max_: float) -> BackoffInitialisationError:
        return cls(f"The minimum value {min_} is greater than the maximum value {max_}")


class BackoffRuntimeError(BackoffError, RuntimeError):
    """Exception raised when the backoff machinery is used incorrectly
    while it runs.

    Args:
        message: A descriptive error message.

    Example:
        ```pycon
        >>> from abackoff.exceptions import BackoffRuntimeError
        >>> raise BackoffRuntimeError.attempt_log_has_not_started()
        Traceback (most recent call last):
            ...
        abackoff.exceptions.BackoffRuntimeError: Cannot end an attempt that has not started

        ```
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)

    @classmethod
    def cannot_change_after_starting(cls, method: str) -> BackoffRuntimeError:
        return cls(
            f'Backoff settings cannot be reconfigured after starting - attempted to call "{method}"'
        )

    @classmethod
    def start_of_attempt_not_allowed(cls) -> BackoffRuntimeError:
        return cls("Cannot start an attempt after the backoff has stopped")

    @classmethod
    def attempt_log_has_not_started(cls) -> BackoffRuntimeError:
        return cls("Cannot end an attempt that has not started")

    @classmethod
    def invalid_callback_result(cls, result: Any) -> BackoffRuntimeError:
        return cls(
            f"The backoff callback must return a number or None, got {type(result).__name__}"
        )
