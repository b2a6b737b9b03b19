r"""Polynomial backoff algorithm."""

from __future__ import annotations

__all__ = ["PolynomialBackoffAlgorithm"]

from abackoff.algorithms.base import BaseBackoffAlgorithm
from abackoff.core.config import DEFAULT_POLYNOMIAL_POWER


class PolynomialBackoffAlgorithm(BaseBackoffAlgorithm):
    """Polynomial backoff algorithm.

    Calculates delay as: initial_delay * (retry_number ** power).

    Args:
        initial_delay: The delay multiplier.
        power: The power the retry number is raised to (default: 2).

    Example:
        ```pycon
        >>> from abackoff.algorithms import PolynomialBackoffAlgorithm
        >>> PolynomialBackoffAlgorithm(1).generate_test_sequence(5)
        [1, 4, 9, 16, 25]

        ```
    """

    def __init__(self, initial_delay: float, power: float = DEFAULT_POLYNOMIAL_POWER) -> None:
        self.initial_delay = initial_delay
        self.power = power

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        return self.initial_delay * retry_number**self.power
