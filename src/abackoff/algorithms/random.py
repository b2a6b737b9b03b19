r"""Random backoff algorithm."""

from __future__ import annotations

__all__ = ["RandomBackoffAlgorithm"]

from abackoff.algorithms.base import BaseBackoffAlgorithm
from abackoff.core.validation import validate_min_max
from abackoff.utils.random import rand_float


class RandomBackoffAlgorithm(BaseBackoffAlgorithm):
    """Random backoff algorithm.

    Picks a random delay in ``[min_delay, max_delay]`` for every retry.
    Negative bounds are clamped to ``0``. The delays are already random
    so jitter is never applied.

    Args:
        min_delay: The minimum delay.
        max_delay: The maximum delay.

    Raises:
        BackoffInitialisationError: If ``min_delay`` is greater than
            ``max_delay``.

    Example:
        ```pycon
        >>> from abackoff.algorithms import RandomBackoffAlgorithm
        >>> 2 <= RandomBackoffAlgorithm(2, 5).calculate(1) <= 5
        True

        ```
    """

    jitter_may_be_applied = False

    def __init__(self, min_delay: float, max_delay: float) -> None:
        validate_min_max(min_delay, max_delay)
        self.min_delay = max(0, min_delay)
        self.max_delay = max(0, max_delay)

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        return rand_float(self.min_delay, self.max_delay)
