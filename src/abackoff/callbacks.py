r"""Callback data structures for observability.

This module provides the objects passed to the callbacks registered on a
``Backoff`` runner, enabling users to hook into the retry lifecycle for
logging, metrics, alerting, and cleanup.

The callback system provides five lifecycle hooks:
- exception_callback: Called each time the operation raises a caught exception
- invalid_result_callback: Called each time the operation returns an invalid result
- success_callback: Called once when the run succeeds
- failure_callback: Called once when the run fails (alias: fallback_callback)
- finally_callback: Called once when the run ends, whatever the outcome

Every callback receives a single argument holding the attempt log of the
current attempt and the logs of the whole run.

Example:
    ```pycon
    >>> from abackoff import Backoff
    >>> from abackoff.callbacks import ExceptionInfo
    >>> def log_exception(info: ExceptionInfo) -> None:
    ...     print(f"Attempt {info.log.attempt_number} failed, will retry: {info.will_retry}")
    ...
    >>> def flaky() -> str:
    ...     raise ValueError("boom")
    ...
    >>> Backoff.noop().max_attempts(2).exception_callback(log_exception).attempt(flaky, "fallback")
    Attempt 1 failed, will retry: True
    Attempt 2 failed, will retry: False
    'fallback'

    ```
"""

from __future__ import annotations

__all__ = [
    "ExceptionInfo",
    "FailureInfo",
    "FinallyInfo",
    "InvalidResultInfo",
    "SuccessInfo",
]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from abackoff.attempt_log import AttemptLog


@dataclass
class ExceptionInfo:
    """Information passed to exception callbacks.

    Attributes:
        exception: The exception raised by the operation.
        will_retry: Whether another attempt will be made.
        log: The log of the attempt that raised.
        logs: The logs of all the attempts of the run so far.
    """

    exception: BaseException
    will_retry: bool
    log: AttemptLog | None
    logs: list[AttemptLog] = field(default_factory=list)


@dataclass
class InvalidResultInfo:
    """Information passed to invalid result callbacks.

    Attributes:
        result: The value returned by the operation.
        will_retry: Whether another attempt will be made.
        log: The log of the attempt that returned the value.
        logs: The logs of all the attempts of the run so far.
    """

    result: Any
    will_retry: bool
    log: AttemptLog | None
    logs: list[AttemptLog] = field(default_factory=list)


@dataclass
class SuccessInfo:
    """Information passed to success callbacks.

    Attributes:
        result: The value returned by the successful attempt.
        log: The log of the successful attempt.
        logs: The logs of all the attempts of the run.
    """

    result: Any
    log: AttemptLog | None
    logs: list[AttemptLog] = field(default_factory=list)


@dataclass
class FailureInfo:
    """Information passed to failure callbacks.

    Attributes:
        log: The log of the last attempt, or None when no attempt was
            made.
        logs: The logs of all the attempts of the run.
    """

    log: AttemptLog | None
    logs: list[AttemptLog] = field(default_factory=list)


@dataclass
class FinallyInfo:
    """Information passed to finally callbacks.

    Attributes:
        succeeded: Whether the run succeeded.
        log: The log of the last attempt, or None when no attempt was
            made.
        logs: The logs of all the attempts of the run.
    """

    succeeded: bool
    log: AttemptLog | None
    logs: list[AttemptLog] = field(default_factory=list)
