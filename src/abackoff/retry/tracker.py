r"""Observer recording the sleeps of a strategy instead of performing
them."""

from __future__ import annotations

__all__ = ["DelayTracker"]


class DelayTracker:
    """Records the delays a strategy would have waited.

    When a tracker is installed on a strategy, ``sleep()`` records each
    delay (in the configured unit, and converted to seconds,
    milliseconds and microseconds) and returns straight away.

    Example:
        ```pycon
        >>> from abackoff import Backoff
        >>> tracker = Backoff.linear(1).no_jitter().max_attempts(4).generate_test_sequence(10)
        >>> tracker.get_delays()
        [1, 2, 3]
        >>> tracker.get_delays_in_ms()
        [1000, 2000, 3000]
        >>> tracker.get_sleep_call_count(), tracker.get_actual_times_slept()
        (4, 3)

        ```
    """

    def __init__(self) -> None:
        self._delays: list[float | None] = []
        self._delays_in_seconds: list[float | None] = []
        self._delays_in_ms: list[float | None] = []
        self._delays_in_us: list[float | None] = []
        self._sleep_call_count = 0
        self._actual_times_slept = 0

    def record_delay(
        self,
        delay: float | None,
        delay_in_seconds: float | None,
        delay_in_ms: float | None,
        delay_in_us: float | None,
    ) -> None:
        self._delays.append(delay)
        self._delays_in_seconds.append(delay_in_seconds)
        self._delays_in_ms.append(delay_in_ms)
        self._delays_in_us.append(delay_in_us)

    def record_sleep_call(self) -> None:
        self._sleep_call_count += 1

    def record_actual_sleep(self) -> None:
        self._actual_times_slept += 1

    def get_delays(self) -> list[float | None]:
        return list(self._delays)

    def get_delays_in_seconds(self) -> list[float | None]:
        return list(self._delays_in_seconds)

    def get_delays_in_ms(self) -> list[float | None]:
        return list(self._delays_in_ms)

    def get_delays_in_us(self) -> list[float | None]:
        return list(self._delays_in_us)

    def get_sleep_call_count(self) -> int:
        """Return how many times ``sleep()`` was called, including the
        calls made once the strategy had stopped."""
        return self._sleep_call_count

    def get_actual_times_slept(self) -> int:
        """Return how many delays would actually have been waited."""
        return self._actual_times_slept

    def get_total_delay(self) -> float:
        """Return the sum of the recorded delays, in the configured unit.

        Example:
            ```pycon
            >>> from abackoff import Backoff
            >>> Backoff.linear(1).no_jitter().max_attempts(4).generate_test_sequence(10).get_total_delay()
            6

            ```
        """
        return sum(delay for delay in self._delays if delay is not None)

    def get_total_delay_in_ms(self) -> float:
        return sum(delay for delay in self._delays_in_ms if delay is not None)
