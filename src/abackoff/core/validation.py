r"""Parameter validation utilities.

This module provides the validation functions shared by the strategy,
the attempt logs, the random algorithm and the range jitter.
"""

from __future__ import annotations

__all__ = ["validate_min_max", "validate_unit_type"]

from abackoff.core.config import ALL_UNIT_TYPES
from abackoff.exceptions import BackoffInitialisationError


def validate_unit_type(unit: str) -> None:
    """Validate a unit type.

    Args:
        unit: The unit to check. Must be one of ``"seconds"``,
            ``"milliseconds"`` or ``"microseconds"``.

    Raises:
        BackoffInitialisationError: If the unit is not supported.

    Example:
        ```pycon
        >>> from abackoff.core.validation import validate_unit_type
        >>> validate_unit_type("seconds")
        >>> validate_unit_type("hours")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        abackoff.exceptions.BackoffInitialisationError: Invalid unit type "hours" was given

        ```
    """
    if unit not in ALL_UNIT_TYPES:
        raise BackoffInitialisationError.invalid_unit_type(unit)


def validate_min_max(min_: float, max_: float) -> None:
    """Validate that a minimum is not greater than a maximum.

    Args:
        min_: The lower bound.
        max_: The upper bound.

    Raises:
        BackoffInitialisationError: If ``min_`` is greater than ``max_``.

    Example:
        ```pycon
        >>> from abackoff.core.validation import validate_min_max
        >>> validate_min_max(1, 2)
        >>> validate_min_max(2, 2)

        ```
    """
    if min_ > max_:
        raise BackoffInitialisationError.rand_min_is_greater_than_max(min_, max_)
