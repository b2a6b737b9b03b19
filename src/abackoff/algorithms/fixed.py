r"""Fixed backoff algorithm."""

from __future__ import annotations

__all__ = ["FixedBackoffAlgorithm"]

from abackoff.algorithms.base import BaseBackoffAlgorithm


class FixedBackoffAlgorithm(BaseBackoffAlgorithm):
    """Fixed backoff algorithm.

    Always returns the same delay, regardless of the retry number.

    Args:
        delay: The delay to wait before every retry.

    Example:
        ```pycon
        >>> from abackoff.algorithms import FixedBackoffAlgorithm
        >>> algorithm = FixedBackoffAlgorithm(2)
        >>> algorithm.calculate(1), algorithm.calculate(10)
        (2, 2)

        ```
    """

    def __init__(self, delay: float) -> None:
        self.delay = delay

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        return self.delay
