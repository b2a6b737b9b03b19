r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that stores the
user-defined callbacks of a runner and invokes them at the various
points of the retry lifecycle.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING, Any

from abackoff.callbacks import (
    ExceptionInfo,
    FailureInfo,
    FinallyInfo,
    InvalidResultInfo,
    SuccessInfo,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from abackoff.attempt_log import AttemptLog


def _flatten_callbacks(callbacks: Iterable[Any]) -> list[Callable]:
    flat = []
    for callback in callbacks:
        if isinstance(callback, (list, tuple)):
            flat.extend(_flatten_callbacks(callback))
        else:
            flat.append(callback)
    return flat


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Callbacks of the same kind are called in registration order. An
    exception raised by a callback is not caught.

    Attributes:
        exception_callbacks: Called when the operation raises a caught
            exception.
        invalid_result_callbacks: Called when the operation returns an
            invalid result.
        success_callbacks: Called once when the run succeeds.
        failure_callbacks: Called once when the run fails.
        finally_callbacks: Called once when the run ends.
    """

    def __init__(self) -> None:
        self.exception_callbacks: list[Callable[[ExceptionInfo], Any]] = []
        self.invalid_result_callbacks: list[Callable[[InvalidResultInfo], Any]] = []
        self.success_callbacks: list[Callable[[SuccessInfo], Any]] = []
        self.failure_callbacks: list[Callable[[FailureInfo], Any]] = []
        self.finally_callbacks: list[Callable[[FinallyInfo], Any]] = []

    def add_exception_callbacks(self, *callbacks: Callable | list[Callable]) -> None:
        self.exception_callbacks.extend(_flatten_callbacks(callbacks))

    def add_invalid_result_callbacks(self, *callbacks: Callable | list[Callable]) -> None:
        self.invalid_result_callbacks.extend(_flatten_callbacks(callbacks))

    def add_success_callbacks(self, *callbacks: Callable | list[Callable]) -> None:
        self.success_callbacks.extend(_flatten_callbacks(callbacks))

    def add_failure_callbacks(self, *callbacks: Callable | list[Callable]) -> None:
        self.failure_callbacks.extend(_flatten_callbacks(callbacks))

    def add_finally_callbacks(self, *callbacks: Callable | list[Callable]) -> None:
        self.finally_callbacks.extend(_flatten_callbacks(callbacks))

    def on_exception(
        self,
        exception: BaseException,
        will_retry: bool,
        log: AttemptLog | None,
        logs: list[AttemptLog],
    ) -> None:
        """Invoke the exception callbacks.

        Args:
            exception: The exception raised by the operation.
            will_retry: Whether another attempt will be made.
            log: The log of the attempt.
            logs: The logs of the run so far.
        """
        for callback in self.exception_callbacks:
            callback(ExceptionInfo(exception=exception, will_retry=will_retry, log=log, logs=logs))

    def on_invalid_result(
        self,
        result: Any,
        will_retry: bool,
        log: AttemptLog | None,
        logs: list[AttemptLog],
    ) -> None:
        """Invoke the invalid result callbacks.

        Args:
            result: The value returned by the operation.
            will_retry: Whether another attempt will be made.
            log: The log of the attempt.
            logs: The logs of the run so far.
        """
        for callback in self.invalid_result_callbacks:
            callback(InvalidResultInfo(result=result, will_retry=will_retry, log=log, logs=logs))

    def on_success(self, result: Any, log: AttemptLog | None, logs: list[AttemptLog]) -> None:
        for callback in self.success_callbacks:
            callback(SuccessInfo(result=result, log=log, logs=logs))

    def on_failure(self, log: AttemptLog | None, logs: list[AttemptLog]) -> None:
        for callback in self.failure_callbacks:
            callback(FailureInfo(log=log, logs=logs))

    def on_finally(self, succeeded: bool, log: AttemptLog | None, logs: list[AttemptLog]) -> None:
        for callback in self.finally_callbacks:
            callback(FinallyInfo(succeeded=succeeded, log=log, logs=logs))
