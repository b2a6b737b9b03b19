r"""Record of the timing and delays of one attempt.

A ``BackoffStrategy`` creates one ``AttemptLog`` when an attempt starts,
and finalizes it (records the working time) when the attempt ends or
when the next attempt starts, whichever comes first.

All durations are expressed in the unit the strategy was configured
with, and can be read in seconds, milliseconds or microseconds through
the ``*_in_seconds``, ``*_in_ms`` and ``*_in_us`` properties.
"""

from __future__ import annotations

__all__ = ["AttemptLog"]

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from abackoff.core.config import UNIT_MICROSECONDS, UNIT_MILLISECONDS, UNIT_SECONDS
from abackoff.core.validation import validate_unit_type
from abackoff.utils.units import convert_timespan

if TYPE_CHECKING:
    from datetime import datetime


@dataclass
class AttemptLog:
    """Timing and delay facts about one attempt.

    Attributes:
        attempt_number: The attempt number (1-indexed).
        max_attempts: The maximum number of attempts, or None when
            unlimited.
        first_attempt_occurred_at: When the first attempt of the run
            started.
        this_attempt_occurred_at: When this attempt started.
        working_time: The time spent inside the operation during this
            attempt, or None while the attempt is running.
        overall_working_time: The time spent inside the operation
            during this attempt and all the previous ones.
        prev_delay: The delay waited before this attempt, or None for
            the first attempt.
        next_delay: The delay that will be waited before the next
            attempt, or None when there will not be one.
        overall_delay: The sum of the delays waited so far, or None
            when no delay has been waited yet.
        unit_type: The unit of all the durations above.

    Raises:
        BackoffInitialisationError: If ``unit_type`` is not supported.

    Example:
        ```pycon
        >>> from datetime import datetime
        >>> from abackoff.attempt_log import AttemptLog
        >>> now = datetime.now()
        >>> log = AttemptLog(
        ...     attempt_number=2,
        ...     max_attempts=5,
        ...     first_attempt_occurred_at=now,
        ...     this_attempt_occurred_at=now,
        ...     working_time=None,
        ...     overall_working_time=None,
        ...     prev_delay=1.5,
        ...     next_delay=3,
        ...     overall_delay=1.5,
        ...     unit_type="seconds",
        ... )
        >>> log.retry_number
        1
        >>> log.will_retry
        True
        >>> log.prev_delay_in_ms
        1500.0

        ```
    """

    attempt_number: int
    max_attempts: int | None
    first_attempt_occurred_at: datetime
    this_attempt_occurred_at: datetime
    working_time: float | None
    overall_working_time: float | None
    prev_delay: float | None
    next_delay: float | None
    overall_delay: float | None
    unit_type: str

    def __post_init__(self) -> None:
        validate_unit_type(self.unit_type)

    @property
    def retry_number(self) -> int:
        """The retry number, ``0`` for the first attempt."""
        return self.attempt_number - 1

    @property
    def will_retry(self) -> bool:
        """Whether another attempt is planned after this one."""
        return self.next_delay is not None

    @property
    def overall_working_time_as_number(self) -> float:
        return 0 if self.overall_working_time is None else self.overall_working_time

    def to_dict(self) -> dict[str, Any]:
        """Convert the log to a dictionary, e.g. to attach it to a log
        record."""
        return asdict(self)

    def _convert(self, value: float | None, unit: str) -> float | None:
        return convert_timespan(value, self.unit_type, unit)

    @property
    def working_time_in_seconds(self) -> float | None:
        return self._convert(self.working_time, UNIT_SECONDS)

    @property
    def working_time_in_ms(self) -> float | None:
        return self._convert(self.working_time, UNIT_MILLISECONDS)

    @property
    def working_time_in_us(self) -> float | None:
        return self._convert(self.working_time, UNIT_MICROSECONDS)

    @property
    def overall_working_time_in_seconds(self) -> float | None:
        return self._convert(self.overall_working_time, UNIT_SECONDS)

    @property
    def overall_working_time_in_ms(self) -> float | None:
        return self._convert(self.overall_working_time, UNIT_MILLISECONDS)

    @property
    def overall_working_time_in_us(self) -> float | None:
        return self._convert(self.overall_working_time, UNIT_MICROSECONDS)

    @property
    def prev_delay_in_seconds(self) -> float | None:
        return self._convert(self.prev_delay, UNIT_SECONDS)

    @property
    def prev_delay_in_ms(self) -> float | None:
        return self._convert(self.prev_delay, UNIT_MILLISECONDS)

    @property
    def prev_delay_in_us(self) -> float | None:
        return self._convert(self.prev_delay, UNIT_MICROSECONDS)

    @property
    def next_delay_in_seconds(self) -> float | None:
        return self._convert(self.next_delay, UNIT_SECONDS)

    @property
    def next_delay_in_ms(self) -> float | None:
        return self._convert(self.next_delay, UNIT_MILLISECONDS)

    @property
    def next_delay_in_us(self) -> float | None:
        return self._convert(self.next_delay, UNIT_MICROSECONDS)

    @property
    def overall_delay_in_seconds(self) -> float | None:
        return self._convert(self.overall_delay, UNIT_SECONDS)

    @property
    def overall_delay_in_ms(self) -> float | None:
        return self._convert(self.overall_delay, UNIT_MILLISECONDS)

    @property
    def overall_delay_in_us(self) -> float | None:
        return self._convert(self.overall_delay, UNIT_MICROSECONDS)
