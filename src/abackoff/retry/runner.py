r"""Retry runner driving an operation through a backoff strategy.

This module provides the BackoffRunner class. It calls the operation
until it succeeds or the strategy stops, decides whether exceptions and
results warrant another attempt, invokes the callbacks, and resolves the
value returned once the retries are exhausted.
"""

from __future__ import annotations

__all__ = ["BackoffRunner"]

import logging
from typing import TYPE_CHECKING, Any, Literal

from abackoff.retry.config import MISSING, resolve_default
from abackoff.retry.decider import RetryDecider
from abackoff.retry.manager import CallbackManager

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Self

    from abackoff.attempt_log import AttemptLog
    from abackoff.retry.strategy import BackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)


class BackoffRunner:
    """Runs an operation, retrying it according to a backoff strategy.

    The runner is reusable: each call to ``attempt()`` starts from a
    freshly reset strategy.

    Args:
        strategy: The strategy calculating the delays.
        decider: The retry decider. Defaults to one retrying every
            exception and accepting every result.
        callbacks: The callback manager. Defaults to one without
            callbacks.

    Example:
        ```pycon
        >>> from abackoff.algorithms import NoopBackoffAlgorithm
        >>> from abackoff.retry.runner import BackoffRunner
        >>> from abackoff.retry.strategy import BackoffStrategy
        >>> results = iter([None, None, "done"])
        >>> runner = BackoffRunner(BackoffStrategy(NoopBackoffAlgorithm(), max_attempts=5))
        >>> runner.retry_when(None).attempt(lambda: next(results))
        'done'
        >>> len(runner.strategy.logs())
        3

        ```
    """

    def __init__(
        self,
        strategy: BackoffStrategy,
        decider: RetryDecider | None = None,
        callbacks: CallbackManager | None = None,
    ) -> None:
        self.strategy = strategy
        self.decider = decider if decider is not None else RetryDecider()
        self.callbacks = callbacks if callbacks is not None else CallbackManager()

    ##########################
    #     Configuration      #
    ##########################

    def retry_exceptions(
        self, exceptions: Any | Literal[False] = (), default: Any = MISSING
    ) -> Self:
        """Choose the exceptions that trigger a retry.

        Repeated calls accumulate.

        Args:
            exceptions: An exception class, a callable called as
                ``matcher(exception, log)``, or a list of them. An empty
                list retries every exception. ``False`` retries none.
            default: The value returned when one of these exceptions
                ends the run. Callables are called to get the value.
        """
        if exceptions is False:
            self.decider.disable_exception_matching(default)
        else:
            self.decider.add_exception_matchers(exceptions, default=default)
        return self

    def retry_all_exceptions(self, default: Any = MISSING) -> Self:
        return self.retry_exceptions((), default)

    def dont_retry_exceptions(self, default: Any = MISSING) -> Self:
        return self.retry_exceptions(False, default)

    def retry_when(self, match: Any, strict: bool = False, default: Any = MISSING) -> Self:
        """Retry when the result matches ``match``.

        Args:
            match: The value to compare the result with, or a callable
                called as ``predicate(result, log)``.
            strict: Whether the type must match too.
            default: The value returned when this match ends the run.
        """
        self.decider.add_retry_when(match, strict, default)
        return self

    def retry_until(self, match: Any, strict: bool = False) -> Self:
        """Retry until the result matches ``match``."""
        self.decider.add_retry_until(match, strict)
        return self

    def exception_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.callbacks.add_exception_callbacks(*callbacks)
        return self

    def invalid_result_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.callbacks.add_invalid_result_callbacks(*callbacks)
        return self

    def success_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.callbacks.add_success_callbacks(*callbacks)
        return self

    def failure_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.callbacks.add_failure_callbacks(*callbacks)
        return self

    def fallback_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        return self.failure_callback(*callbacks)

    def finally_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.callbacks.add_finally_callbacks(*callbacks)
        return self

    ##########################
    #        Running         #
    ##########################

    def attempt(self, operation: Callable[[], Any], default: Any = MISSING) -> Any:
        """Call ``operation`` until it succeeds or the retries are
        exhausted.

        Args:
            operation: The function to call, without arguments.
            default: The value returned when the run fails. Callables
                are called to get the value.

        Returns:
            The result of the successful attempt. When the run fails:
            the default of the exception matcher or result predicate
            that ended it, otherwise ``default``, otherwise the last
            invalid result.

        Raises:
            Exception: The exception raised by the last attempt, when
                the run fails without any default.
        """
        strategy = self.strategy
        runs_at_start_of_loop = strategy.settings.runs_at_start_of_loop
        strategy.reset().runs_at_start_of_loop()
        try:
            return self._perform_attempt(operation, default)
        finally:
            strategy.reset().runs_at_start_of_loop(runs_at_start_of_loop)

    def _perform_attempt(self, operation: Callable[[], Any], default: Any) -> Any:
        strategy = self.strategy
        succeeded = False
        try:
            result = None
            error: Exception | None = None
            override_default: Any = MISSING

            while strategy.step():
                result, error, override_default = None, None, MISSING

                strategy.start_of_attempt()
                try:
                    result = operation()
                except Exception as exc:
                    strategy.end_of_attempt()
                    error = exc
                    match = self.decider.pick_matching_exception(exc, self._last_log())
                    if match is None:
                        stop = True
                        override_default = self.decider.exception_default
                    else:
                        stop = strategy.is_last_attempt()
                        override_default = match.default
                    logger.debug(
                        f"Attempt {strategy.current_attempt_number()} raised "
                        f"{type(exc).__name__}: {exc} (will retry: {not stop})"
                    )
                    self.callbacks.on_exception(exc, not stop, self._last_log(), strategy.logs())
                    if stop:
                        break
                    continue
                strategy.end_of_attempt()

                is_valid, match = self.decider.check_result(result, self._last_log())
                if is_valid:
                    succeeded = True
                    self.callbacks.on_success(result, self._last_log(), strategy.logs())
                    return result

                if match is not None:
                    override_default = match.default
                will_retry = not strategy.is_last_attempt()
                logger.debug(
                    f"Attempt {strategy.current_attempt_number()} returned an invalid result "
                    f"(will retry: {will_retry})"
                )
                self.callbacks.on_invalid_result(
                    result, will_retry, self._last_log(), strategy.logs()
                )

            self.callbacks.on_failure(self._last_log(), strategy.logs())

            # the default of the matcher or predicate that ended the run comes first
            for candidate in (override_default, default):
                if candidate is not MISSING:
                    return resolve_default(candidate)
            if error is not None:
                raise error
            return result
        finally:
            self.callbacks.on_finally(succeeded, self._last_log(), strategy.logs())

    def _last_log(self) -> AttemptLog | None:
        logs = self.strategy.logs()
        return logs[-1] if logs else None
