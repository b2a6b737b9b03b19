r"""Fibonacci backoff algorithm."""

from __future__ import annotations

__all__ = ["FibonacciBackoffAlgorithm"]

from abackoff.algorithms.base import BaseBackoffAlgorithm


class FibonacciBackoffAlgorithm(BaseBackoffAlgorithm):
    """Fibonacci backoff algorithm.

    Calculates delay as: initial_delay * fibonacci(n), where the sequence
    is 1, 2, 3, 5, 8, ... by default, or 1, 1, 2, 3, 5, ... when the
    first term is included.

    Fibonacci backoff grows more gradually than exponential backoff.

    Args:
        initial_delay: The delay multiplier.
        include_first: Whether the leading duplicate ``1`` of the
            Fibonacci sequence is used.

    Example:
        ```pycon
        >>> from abackoff.algorithms import FibonacciBackoffAlgorithm
        >>> FibonacciBackoffAlgorithm(1).generate_test_sequence(6)
        [1, 2, 3, 5, 8, 13]
        >>> FibonacciBackoffAlgorithm(1, include_first=True).generate_test_sequence(6)
        [1, 1, 2, 3, 5, 8]

        ```
    """

    def __init__(self, initial_delay: float, include_first: bool = False) -> None:
        self.initial_delay = initial_delay
        self.include_first = include_first

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        steps = retry_number if self.include_first else retry_number + 1
        delay, next_delay = 0, self.initial_delay
        for _ in range(steps):
            delay, next_delay = next_delay, next_delay + delay
        return delay
