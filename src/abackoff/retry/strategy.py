r"""Backoff strategy: the state machine driving a retry loop.

This module provides the ``BackoffStrategy`` class. It tracks the
current attempt, decides whether another attempt may be made, waits the
delay calculated for it, and records an ``AttemptLog`` per attempt.

A strategy can drive a hand-written loop:

```python
strategy = BackoffStrategy(ExponentialBackoffAlgorithm(1), max_attempts=5)
while True:
    strategy.start_of_attempt()
    ok = do_something()
    strategy.end_of_attempt()
    if ok or not strategy.step():
        break
```

The strategy is configured through its fluent setters until it starts,
which happens on the first call to ``step()``, ``calculate()``,
``sleep()``, ``start_of_attempt()`` or one of the delay getters. From
then on the configuration is frozen until ``reset()`` is called.
"""

from __future__ import annotations

__all__ = ["BackoffStrategy"]

import logging
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from abackoff.attempt_log import AttemptLog
from abackoff.core.config import (
    DEFAULT_UNIT,
    UNIT_MICROSECONDS,
    UNIT_MILLISECONDS,
    UNIT_SECONDS,
)
from abackoff.exceptions import BackoffRuntimeError
from abackoff.jitter import CallbackJitter, EqualJitter, FullJitter, RangeJitter
from abackoff.retry.calculator import DelayCalculator
from abackoff.retry.config import StrategyConfig
from abackoff.retry.tracker import DelayTracker
from abackoff.utils.sleep import perform_sleep
from abackoff.utils.structured_logging import log_structured
from abackoff.utils.units import convert_timespan, time_diff

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Self

    from abackoff.algorithms.base import BaseBackoffAlgorithm
    from abackoff.jitter.base import BaseJitter

logger: logging.Logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _clamp_max_attempts(max_attempts: int | None) -> int | None:
    return None if max_attempts is None else max(0, max_attempts)


class BackoffStrategy:
    """State machine computing the delays of a retry loop.

    Args:
        algorithm: The algorithm calculating the base delays.
        jitter: Optional jitter applied to the delays.
        max_attempts: The maximum number of attempts, or None for no
            limit. Negative values are treated as ``0``.
        max_delay: Optional upper bound applied to every delay.
        unit: The unit the delays are expressed in (default:
            ``"seconds"``).
        runs_at_start_of_loop: Whether ``step()`` is called before each
            attempt instead of after.
        immediate_first_retry: Whether a ``0`` delay is inserted before
            the first calculated delay.
        delays_enabled: When False, every delay is ``0``.
        retries_enabled: When False, only the first attempt is made.

    Raises:
        BackoffInitialisationError: If ``unit`` is not supported.

    Example:
        ```pycon
        >>> from abackoff.algorithms import SequenceBackoffAlgorithm
        >>> from abackoff.retry.strategy import BackoffStrategy
        >>> strategy = BackoffStrategy(SequenceBackoffAlgorithm([1, 2, 3]))
        >>> strategy.simulate(1, 4)
        {1: 1, 2: 2, 3: 3, 4: None}
        >>> strategy.generate_test_sequence(10).get_delays()
        [1, 2, 3]

        ```
    """

    def __init__(
        self,
        algorithm: BaseBackoffAlgorithm,
        jitter: BaseJitter | None = None,
        max_attempts: int | None = None,
        max_delay: float | None = None,
        unit: str | None = DEFAULT_UNIT,
        runs_at_start_of_loop: bool = False,
        immediate_first_retry: bool = False,
        delays_enabled: bool = True,
        retries_enabled: bool = True,
    ) -> None:
        self._settings = StrategyConfig(
            algorithm=algorithm,
            jitter=jitter,
            max_attempts=_clamp_max_attempts(max_attempts),
            max_delay=max_delay,
            unit=unit if unit is not None else DEFAULT_UNIT,
            runs_at_start_of_loop=runs_at_start_of_loop,
            immediate_first_retry=immediate_first_retry,
            delays_enabled=delays_enabled,
            retries_enabled=retries_enabled,
        )
        self._logs: dict[int, AttemptLog] = {}
        self._tracker: DelayTracker | None = None
        self.reset()

    @property
    def settings(self) -> StrategyConfig:
        """The current configuration."""
        return self._settings

    def reset(self) -> Self:
        """Return the strategy to its initial state, ready for a new run.

        The logs of the previous run remain readable until the strategy
        starts again.
        """
        self._config: StrategyConfig | None = None
        self._calculator: DelayCalculator | None = None
        self._stopped = self._no_attempts_allowed()
        self._attempt_number: int | None = None
        self._sleep_start_ns: int | None = None
        self._instantiated_at = _now()
        self._first_attempt_occurred_at: datetime | None = None
        self._overall_delay: float | None = None
        return self

    def use_tracker(self) -> DelayTracker:
        """Record the delays instead of sleeping.

        The tracker stays installed across ``reset()`` calls.

        Returns:
            The installed tracker.
        """
        self._tracker = DelayTracker()
        return self._tracker

    ##########################
    #     Configuration      #
    ##########################

    def full_jitter(self) -> Self:
        return self._update("full_jitter", jitter=FullJitter())

    def equal_jitter(self) -> Self:
        return self._update("equal_jitter", jitter=EqualJitter())

    def jitter_range(self, min_: float, max_: float) -> Self:
        return self._update("jitter_range", jitter=RangeJitter(min_, max_))

    def jitter_callback(self, callback: Callable[[float, int], float]) -> Self:
        return self._update("jitter_callback", jitter=CallbackJitter(callback))

    def custom_jitter(self, jitter: BaseJitter | None) -> Self:
        return self._update("custom_jitter", jitter=jitter)

    def no_jitter(self) -> Self:
        return self._update("no_jitter", jitter=None)

    def max_attempts(self, max_attempts: int | None) -> Self:
        """Set the maximum number of attempts, None meaning no limit."""
        return self._update("max_attempts", max_attempts=_clamp_max_attempts(max_attempts))

    def no_max_attempts(self) -> Self:
        return self._update("no_max_attempts", max_attempts=None)

    def no_attempt_limit(self) -> Self:
        return self._update("no_attempt_limit", max_attempts=None)

    def max_delay(self, max_delay: float | None) -> Self:
        """Set the upper bound applied to every delay, in the configured
        unit."""
        return self._update("max_delay", max_delay=max_delay)

    def no_max_delay(self) -> Self:
        return self._update("no_max_delay", max_delay=None)

    def no_delay_limit(self) -> Self:
        return self._update("no_delay_limit", max_delay=None)

    def unit(self, unit: str) -> Self:
        """Set the unit of the delays.

        Raises:
            BackoffInitialisationError: If ``unit`` is not supported.
        """
        return self._update("unit", unit=unit)

    def unit_seconds(self) -> Self:
        return self._update("unit_seconds", unit=UNIT_SECONDS)

    def unit_ms(self) -> Self:
        return self._update("unit_ms", unit=UNIT_MILLISECONDS)

    def unit_us(self) -> Self:
        return self._update("unit_us", unit=UNIT_MICROSECONDS)

    def runs_at_start_of_loop(self, runs_at_start: bool = True) -> Self:
        """Indicate that ``step()`` is called before each attempt."""
        return self._update("runs_at_start_of_loop", runs_at_start_of_loop=runs_at_start)

    def runs_at_end_of_loop(self) -> Self:
        return self._update("runs_at_end_of_loop", runs_at_start_of_loop=False)

    def immediate_first_retry(self, insert: bool = True) -> Self:
        """Retry straight away the first time, before using the
        algorithm's delays."""
        return self._update("immediate_first_retry", immediate_first_retry=insert)

    def no_immediate_first_retry(self) -> Self:
        return self._update("no_immediate_first_retry", immediate_first_retry=False)

    def only_delay_when(self, condition: bool) -> Self:
        """Wait between attempts only when ``condition`` is True.

        Handy to turn delays off in tests.
        """
        return self._update("only_delay_when", delays_enabled=condition)

    def only_retry_when(self, condition: bool) -> Self:
        """Retry only when ``condition`` is True, otherwise make a single
        attempt."""
        return self._update("only_retry_when", retries_enabled=condition)

    def _update(self, method: str, **changes: Any) -> Self:
        if self._config is not None:
            raise BackoffRuntimeError.cannot_change_after_starting(method)
        self._settings = replace(self._settings, **changes)
        self._stopped = self._no_attempts_allowed()
        return self

    ##########################
    #     State machine      #
    ##########################

    def step(self) -> bool:
        """Calculate the next delay and sleep for it.

        Returns:
            True when another attempt may be made, False otherwise.
        """
        # anchor the sleep before calculating, so the calculation time is absorbed
        self._sleep_start_ns = time.monotonic_ns()
        self.calculate()
        return self.sleep()

    def calculate(self) -> bool:
        """Move to the next attempt and calculate the delay before it.

        Returns:
            True when the next attempt may be made, False otherwise.
        """
        self._start()
        if self._stopped:
            return False

        if self._active_config().runs_at_start_of_loop and self._attempt_number is None:
            self._attempt_number = 1
            return True

        self._attempt_number = (self._attempt_number or 1) + 1
        reason = self._stop_reason()
        if reason is not None:
            self._stopped = True
            logger.debug(f"Stopped retrying before attempt {self._attempt_number}: {reason}")
            return False
        return True

    def sleep(self) -> bool:
        """Sleep for the delay calculated by ``calculate()``.

        Returns:
            False when the strategy has stopped, True otherwise.
        """
        start_ns = self._sleep_start_ns if self._sleep_start_ns is not None else time.monotonic_ns()
        self._sleep_start_ns = None
        self._start()

        if self._tracker is not None:
            self._tracker.record_sleep_call()
        if self._stopped:
            return False

        delay = self.get_delay()
        delay_in_us = self._convert(delay, UNIT_MICROSECONDS)
        if self._tracker is not None:
            self._tracker.record_delay(
                delay,
                self._convert(delay, UNIT_SECONDS),
                self._convert(delay, UNIT_MILLISECONDS),
                delay_in_us,
            )
        if delay is None or delay_in_us is None:
            return True

        self._overall_delay = (self._overall_delay or 0) + delay
        logger.debug(
            f"Waiting {delay} {self._active_config().unit} before attempt {self._current()}"
        )
        if self._tracker is not None:
            self._tracker.record_actual_sleep()
        else:
            perform_sleep(start_ns, delay_in_us)
        return True

    def start_of_attempt(self) -> Self:
        """Record the start of the current attempt and create its log.

        Raises:
            BackoffRuntimeError: If the strategy has stopped.
        """
        self._start()
        if self._stopped:
            raise BackoffRuntimeError.start_of_attempt_not_allowed()

        attempt_number = self._current()
        if attempt_number <= 1:
            self._logs = {}

        occurred_at = _now()
        prev_log = self._logs.get(attempt_number - 1)
        if prev_log is not None and prev_log.working_time is None:
            self._finalise_log(prev_log, occurred_at)
        if attempt_number == 1:
            self._first_attempt_occurred_at = occurred_at

        calculator = self._delay_calculator()
        config = self._active_config()
        self._logs[attempt_number] = AttemptLog(
            attempt_number=attempt_number,
            max_attempts=config.max_attempts,
            first_attempt_occurred_at=self._first_attempt_occurred_at or self._instantiated_at,
            this_attempt_occurred_at=occurred_at,
            working_time=None,
            overall_working_time=None,
            prev_delay=calculator.get_jittered_delay(attempt_number),
            next_delay=calculator.get_jittered_delay(attempt_number + 1),
            overall_delay=self._overall_delay,
            unit_type=config.unit,
        )
        return self

    def end_of_attempt(self) -> Self:
        """Record the end of the current attempt.

        Only the first call for an attempt is taken into account.

        Raises:
            BackoffRuntimeError: If the current attempt has not started.
        """
        finished_at = _now()
        log = self._logs.get(self._current()) if self._config is not None else None
        if log is None:
            raise BackoffRuntimeError.attempt_log_has_not_started()
        if log.working_time is None:
            self._finalise_log(log, finished_at)
        return self

    ##########################
    #        Queries         #
    ##########################

    def logs(self) -> list[AttemptLog]:
        """Return the logs of the attempts of the current (or last)
        run."""
        return list(self._logs.values())

    def current_log(self) -> AttemptLog | None:
        if self._config is None or self._stopped:
            return None
        return self._logs.get(self._current())

    def has_stopped(self) -> bool:
        return self._stopped

    def current_attempt_number(self) -> int | None:
        """Return the current attempt number, or None when the strategy
        has not started or cannot make any attempt."""
        if self._config is None:
            return None
        if self._stopped and self._attempt_number is None:
            return None
        return self._current()

    def is_first_attempt(self) -> bool:
        return self.current_attempt_number() == 1

    def is_last_attempt(self) -> bool:
        """Indicate whether the current attempt is the last one."""
        self._start()
        if self._stopped or not self._active_config().retries_enabled:
            return True
        return self._delay_calculator().should_stop(self._current() + 1)

    def get_unit_type(self) -> str:
        return self._settings.unit

    def get_delay(self) -> float | None:
        """Return the delay before the current attempt, in the
        configured unit."""
        self._start()
        if self._stopped:
            return None
        return self._delay_calculator().get_jittered_delay(self._current())

    def get_delay_in_seconds(self) -> float | None:
        return self._convert(self.get_delay(), UNIT_SECONDS)

    def get_delay_in_ms(self) -> float | None:
        return self._convert(self.get_delay(), UNIT_MILLISECONDS)

    def get_delay_in_us(self) -> float | None:
        return self._convert(self.get_delay(), UNIT_MICROSECONDS)

    def simulate(
        self, retry_start: int, retry_stop: int | None = None
    ) -> float | None | dict[int, float | None]:
        """Preview the delays of a range of retries.

        The attempt and log state are left untouched, but the strategy
        starts, so it cannot be reconfigured afterwards.

        Args:
            retry_start: The first retry number (1-indexed).
            retry_stop: The last retry number (inclusive). When None,
                the single delay of ``retry_start`` is returned.

        Returns:
            The delays indexed by retry number, a single delay when
            ``retry_stop`` is None, or an empty dict for an invalid
            range.
        """
        return self._simulate(retry_start, retry_stop, self._settings.unit)

    def simulate_in_seconds(
        self, retry_start: int, retry_stop: int | None = None
    ) -> float | None | dict[int, float | None]:
        return self._simulate(retry_start, retry_stop, UNIT_SECONDS)

    def simulate_in_ms(
        self, retry_start: int, retry_stop: int | None = None
    ) -> float | None | dict[int, float | None]:
        return self._simulate(retry_start, retry_stop, UNIT_MILLISECONDS)

    def simulate_in_us(
        self, retry_start: int, retry_stop: int | None = None
    ) -> float | None | dict[int, float | None]:
        return self._simulate(retry_start, retry_stop, UNIT_MICROSECONDS)

    def generate_test_sequence(self, max_steps: int) -> DelayTracker:
        """Run ``step()`` up to ``max_steps`` times without sleeping.

        Returns:
            A tracker holding the delays that would have been waited.
        """
        tracker = DelayTracker()
        previous_tracker, self._tracker = self._tracker, tracker
        try:
            for _ in range(max_steps):
                if not self.step():
                    break
        finally:
            self._tracker = previous_tracker
        return tracker

    ##########################
    #        Internals       #
    ##########################

    def _start(self) -> None:
        if self._config is None:
            self._logs = {}
            self._config = self._settings

    def _active_config(self) -> StrategyConfig:
        return self._config if self._config is not None else self._settings

    def _delay_calculator(self) -> DelayCalculator:
        if self._calculator is None:
            self._calculator = DelayCalculator(self._active_config())
        return self._calculator

    def _no_attempts_allowed(self) -> bool:
        return self._settings.max_attempts is not None and self._settings.max_attempts <= 0

    def _current(self) -> int:
        return self._attempt_number or 1

    def _stop_reason(self) -> str | None:
        config = self._active_config()
        if not config.retries_enabled:
            return "retries disabled"
        if config.max_attempts is not None and self._current() > config.max_attempts:
            return "max attempts reached"
        if self._delay_calculator().should_stop(self._current()):
            return "algorithm stopped"
        return None

    def _convert(self, value: float | None, unit: str) -> float | None:
        return convert_timespan(value, self._active_config().unit, unit)

    def _finalise_log(self, log: AttemptLog, finished_at: datetime) -> None:
        working_time = convert_timespan(
            time_diff(log.this_attempt_occurred_at, finished_at), UNIT_SECONDS, log.unit_type
        )
        prev_log = self._logs.get(log.attempt_number - 1)
        log.working_time = working_time
        log.overall_working_time = working_time + (
            prev_log.overall_working_time_as_number if prev_log is not None else 0
        )
        log_structured(
            logger,
            logging.DEBUG,
            f"Attempt {log.attempt_number} finished",
            attempt_number=log.attempt_number,
            max_attempts=log.max_attempts,
            working_time=log.working_time,
            overall_working_time=log.overall_working_time,
            prev_delay=log.prev_delay,
            next_delay=log.next_delay,
            overall_delay=log.overall_delay,
            unit_type=log.unit_type,
        )

    def _simulate(
        self, retry_start: int, retry_stop: int | None, unit: str
    ) -> float | None | dict[int, float | None]:
        single = retry_stop is None
        retry_stop = retry_start if retry_stop is None else retry_stop
        if retry_start < 1 or retry_stop < retry_start:
            return {}

        self._start()
        calculator = self._delay_calculator()
        delays = {
            retry_number: self._convert(calculator.get_jittered_delay(retry_number + 1), unit)
            for retry_number in range(retry_start, retry_stop + 1)
        }
        return delays[retry_start] if single else delays
