r"""Linear backoff algorithm."""

from __future__ import annotations

__all__ = ["LinearBackoffAlgorithm"]

from abackoff.algorithms.base import BaseBackoffAlgorithm


class LinearBackoffAlgorithm(BaseBackoffAlgorithm):
    """Linear backoff algorithm.

    Calculates delay as: initial_delay + (retry_number - 1) * delay_increase.

    Args:
        initial_delay: The delay before the first retry.
        delay_increase: The amount added for each following retry.
            Defaults to ``initial_delay``.

    Example:
        ```pycon
        >>> from abackoff.algorithms import LinearBackoffAlgorithm
        >>> LinearBackoffAlgorithm(5).generate_test_sequence(5)
        [5, 10, 15, 20, 25]
        >>> LinearBackoffAlgorithm(5, 2).generate_test_sequence(5)
        [5, 7, 9, 11, 13]

        ```
    """

    def __init__(self, initial_delay: float, delay_increase: float | None = None) -> None:
        self.initial_delay = initial_delay
        self.delay_increase = delay_increase

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        delay_increase = (
            self.delay_increase if self.delay_increase is not None else self.initial_delay
        )
        return self.initial_delay + (retry_number - 1) * delay_increase
