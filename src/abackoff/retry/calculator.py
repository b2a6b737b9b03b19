r"""Calculation of the delay before each attempt.

``DelayCalculator`` turns the base delays produced by an algorithm into
the delays a strategy waits: it applies the maximum number of attempts,
the immediate first retry, the delay bounds and the jitter. Each delay
is calculated once and cached, so the values reported in the attempt
logs are the ones actually waited.
"""

from __future__ import annotations

__all__ = ["DelayCalculator"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from abackoff.retry.config import StrategyConfig

logger: logging.Logger = logging.getLogger(__name__)


class DelayCalculator:
    """Calculates and caches the delays of one run.

    Delays are indexed by the attempt number they precede, so there is
    never a delay for attempt ``1``.

    Args:
        config: The configuration of the run.

    Example:
        ```pycon
        >>> from abackoff.algorithms import LinearBackoffAlgorithm
        >>> from abackoff.retry.calculator import DelayCalculator
        >>> from abackoff.retry.config import StrategyConfig
        >>> calculator = DelayCalculator(
        ...     StrategyConfig(LinearBackoffAlgorithm(5), max_attempts=4, max_delay=12)
        ... )
        >>> [calculator.get_jittered_delay(attempt) for attempt in range(1, 6)]
        [None, 5, 10, 12, None]
        >>> calculator.should_stop(4), calculator.should_stop(5)
        (False, True)

        ```
    """

    def __init__(self, config: StrategyConfig) -> None:
        self.config = config
        self._base_delays: dict[int, float | None] = {}
        self._jittered_delays: dict[int, float | None] = {}

    def reset(self) -> None:
        """Forget the delays calculated so far."""
        self._base_delays.clear()
        self._jittered_delays.clear()

    def get_base_delay(self, attempt_number: int) -> float | None:
        """Return the bounded delay before an attempt, without jitter.

        Args:
            attempt_number: The attempt the delay precedes.

        Returns:
            The delay, or None when the attempt must not happen.
        """
        if attempt_number not in self._base_delays:
            # calculate in order, each delay may depend on the previous one
            for number in range(1, attempt_number + 1):
                if number not in self._base_delays:
                    self._base_delays[number] = self._enforce_bounds(
                        self._calculate_base_delay(number)
                    )
        return self._base_delays[attempt_number]

    def get_jittered_delay(self, attempt_number: int) -> float | None:
        """Return the delay waited before an attempt.

        Args:
            attempt_number: The attempt the delay precedes.

        Returns:
            The delay with jitter applied, or None when the attempt must
            not happen.
        """
        if attempt_number not in self._jittered_delays:
            delay = self._apply_jitter(self.get_base_delay(attempt_number), attempt_number)
            self._jittered_delays[attempt_number] = self._enforce_bounds(delay)
        return self._jittered_delays[attempt_number]

    def should_stop(self, attempt_number: int) -> bool:
        """Indicate whether an attempt must not happen.

        The first attempt always happens.
        """
        if attempt_number <= 1:
            return False
        return self.get_base_delay(attempt_number) is None

    def _calculate_base_delay(self, attempt_number: int) -> float | None:
        config = self.config
        if attempt_number <= 1:
            return None
        if config.max_attempts is not None and attempt_number > config.max_attempts:
            return None

        prev_delay = self._base_delays.get(attempt_number - 1)
        if config.immediate_first_retry:
            if attempt_number == 2:
                return 0
            if attempt_number == 3:
                # the inserted 0 is not a delay of the algorithm
                prev_delay = None
            attempt_number -= 1

        delay = config.algorithm.calculate(attempt_number - 1, prev_delay)
        if delay is None:
            logger.debug(f"The backoff algorithm stopped at retry {attempt_number - 1}")
            return None
        return delay if config.delays_enabled else 0

    def _apply_jitter(self, delay: float | None, attempt_number: int) -> float | None:
        jitter = self.config.jitter
        if jitter is None or not self.config.algorithm.jitter_may_be_applied:
            return delay
        if delay is None or delay <= 0:
            return delay
        return jitter.apply(delay, attempt_number - 1)

    def _enforce_bounds(self, delay: float | None) -> float | None:
        if delay is None:
            return None
        if self.config.max_delay is not None:
            delay = min(delay, self.config.max_delay)
        return max(0, delay)
