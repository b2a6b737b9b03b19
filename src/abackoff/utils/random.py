r"""Random number helpers used by the algorithms and jitter."""

from __future__ import annotations

__all__ = ["rand_float"]

import random

from abackoff.core.config import DEFAULT_RAND_DECIMAL_PLACES


def rand_float(
    min_: float, max_: float, dec_pl: int = DEFAULT_RAND_DECIMAL_PLACES
) -> float | None:
    """Pick a random float between two bounds (inclusive).

    The value is picked as an integer scaled by ``10 ** dec_pl`` so both
    bounds can be returned.

    Args:
        min_: The lower bound.
        max_: The upper bound.
        dec_pl: The number of decimal places of precision.

    Returns:
        A random value in ``[min_, max_]``, or ``None`` when ``min_`` is
        greater than ``max_``.

    Example:
        ```pycon
        >>> from abackoff.utils.random import rand_float
        >>> 1 <= rand_float(1, 2) <= 2
        True
        >>> rand_float(5, 5)
        5.0
        >>> rand_float(2, 1)

        ```
    """
    if min_ > max_:
        return None

    multiplier = 10**dec_pl
    min_int = int(min_ * multiplier)
    max_int = int(max_ * multiplier)
    return random.randint(min_int, max_int) / multiplier  # noqa: S311
