r"""Time unit conversion helpers.

Delays are calculated in the unit the strategy was configured with, and
only converted at the boundary (attempt logs, public getters, sleeping).
"""

from __future__ import annotations

__all__ = ["convert_timespan", "convert_timespan_as_number", "time_diff"]

from typing import TYPE_CHECKING

from abackoff.core.config import UNIT_MICROSECONDS, UNIT_MILLISECONDS, UNIT_SECONDS

if TYPE_CHECKING:
    from datetime import datetime

# Number of microseconds in one unit
_MICROSECONDS_PER_UNIT: dict[str, int] = {
    UNIT_SECONDS: 1_000_000,
    UNIT_MILLISECONDS: 1_000,
    UNIT_MICROSECONDS: 1,
}


def convert_timespan(
    value: float | None,
    from_unit: str,
    to_unit: str,
) -> float | None:
    """Convert a timespan from one unit to another.

    Args:
        value: The timespan to convert. ``None`` is passed through.
        from_unit: The unit ``value`` is expressed in.
        to_unit: The unit to convert to.

    Returns:
        The converted value, or ``None`` when ``value`` is ``None`` or
        when either unit is not recognised. The value is returned
        unchanged when both units are the same.

    Example:
        ```pycon
        >>> from abackoff.utils.units import convert_timespan
        >>> convert_timespan(2, "seconds", "milliseconds")
        2000
        >>> convert_timespan(1500, "milliseconds", "seconds")
        1.5
        >>> convert_timespan(None, "seconds", "milliseconds")
        >>> convert_timespan(1, "hours", "seconds")

        ```
    """
    if value is None:
        return None
    if from_unit not in _MICROSECONDS_PER_UNIT or to_unit not in _MICROSECONDS_PER_UNIT:
        return None
    if from_unit == to_unit:
        return value

    from_factor = _MICROSECONDS_PER_UNIT[from_unit]
    to_factor = _MICROSECONDS_PER_UNIT[to_unit]
    if from_factor > to_factor:
        return value * (from_factor // to_factor)
    return value / (to_factor // from_factor)


def convert_timespan_as_number(value: float | None, from_unit: str, to_unit: str) -> float:
    """Convert a timespan like ``convert_timespan``, returning ``0``
    instead of ``None``."""
    converted = convert_timespan(value, from_unit, to_unit)
    return 0 if converted is None else converted


def time_diff(start: datetime, end: datetime) -> float:
    """Return the number of seconds between two datetimes.

    Example:
        ```pycon
        >>> from datetime import datetime
        >>> from abackoff.utils.units import time_diff
        >>> time_diff(datetime(2024, 1, 1, 0, 0, 0), datetime(2024, 1, 1, 0, 0, 1, 500000))
        1.5

        ```
    """
    return (end - start).total_seconds()
