r"""Exponential backoff algorithm."""

from __future__ import annotations

__all__ = ["ExponentialBackoffAlgorithm"]

from abackoff.algorithms.base import BaseBackoffAlgorithm
from abackoff.core.config import DEFAULT_EXPONENTIAL_FACTOR


class ExponentialBackoffAlgorithm(BaseBackoffAlgorithm):
    """Exponential backoff algorithm.

    Calculates delay as: initial_delay * (factor ** (retry_number - 1)).

    This works well for most scenarios where you want progressively
    longer delays between retries.

    Args:
        initial_delay: The delay before the first retry.
        factor: The growth factor applied at each retry (default: 2).

    Example:
        ```pycon
        >>> from abackoff.algorithms import ExponentialBackoffAlgorithm
        >>> ExponentialBackoffAlgorithm(1).generate_test_sequence(5)
        [1, 2, 4, 8, 16]
        >>> ExponentialBackoffAlgorithm(1, factor=1.5).generate_test_sequence(3)
        [1.0, 1.5, 2.25]

        ```
    """

    def __init__(self, initial_delay: float, factor: float = DEFAULT_EXPONENTIAL_FACTOR) -> None:
        self.initial_delay = initial_delay
        self.factor = factor

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        return self.initial_delay * self.factor ** (retry_number - 1)
