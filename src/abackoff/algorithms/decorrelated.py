r"""Decorrelated backoff algorithm."""

from __future__ import annotations

__all__ = ["DecorrelatedBackoffAlgorithm"]

from abackoff.algorithms.base import BaseBackoffAlgorithm
from abackoff.core.config import DEFAULT_DECORRELATED_MULTIPLIER
from abackoff.utils.random import rand_float


class DecorrelatedBackoffAlgorithm(BaseBackoffAlgorithm):
    """Decorrelated backoff algorithm.

    Picks a random delay in ``[base_delay, prev_delay * multiplier]``,
    using ``base_delay`` in place of the previous delay for the first
    retry. The delays are already random so jitter is never applied.

    Args:
        base_delay: The minimum delay.
        multiplier: The factor applied to the previous delay to get the
            upper bound (default: 3).

    Example:
        ```pycon
        >>> from abackoff.algorithms import DecorrelatedBackoffAlgorithm
        >>> algorithm = DecorrelatedBackoffAlgorithm(1)
        >>> 1 <= algorithm.calculate(1) <= 3
        True
        >>> 1 <= algorithm.calculate(2, prev_delay=2) <= 6
        True

        ```
    """

    jitter_may_be_applied = False

    def __init__(
        self, base_delay: float, multiplier: float = DEFAULT_DECORRELATED_MULTIPLIER
    ) -> None:
        self.base_delay = base_delay
        self.multiplier = multiplier

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        upper = (prev_delay if prev_delay is not None else self.base_delay) * self.multiplier
        return rand_float(self.base_delay, upper)
