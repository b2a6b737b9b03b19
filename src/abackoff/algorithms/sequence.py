r"""Sequence backoff algorithm."""

from __future__ import annotations

__all__ = ["SequenceBackoffAlgorithm"]

from typing import TYPE_CHECKING

from abackoff.algorithms.base import BaseBackoffAlgorithm

if TYPE_CHECKING:
    from collections.abc import Iterable


class SequenceBackoffAlgorithm(BaseBackoffAlgorithm):
    """Sequence backoff algorithm.

    Uses a predefined list of delays. Once the list is exhausted,
    ``default`` is used for every following retry, or retrying stops
    when no default is given. A ``None`` inside ``delays`` ends the
    sequence at that position.

    Args:
        delays: The delays to use, in order.
        default: The delay used once ``delays`` is exhausted.

    Example:
        ```pycon
        >>> from abackoff.algorithms import SequenceBackoffAlgorithm
        >>> SequenceBackoffAlgorithm([1, 2, 5]).generate_test_sequence(5)
        [1, 2, 5, None, None]
        >>> SequenceBackoffAlgorithm([1, 2, 5], default=10).generate_test_sequence(5)
        [1, 2, 5, 10, 10]
        >>> SequenceBackoffAlgorithm([1, None, 5]).generate_test_sequence(3)
        [1, None, None]

        ```
    """

    def __init__(self, delays: Iterable[float | None], default: float | None = None) -> None:
        self.delays: list[float] = []
        for delay in delays:
            if delay is None:
                break
            self.delays.append(delay)
        self.default = default

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        index = retry_number - 1
        if 0 <= index < len(self.delays):
            return self.delays[index]
        return self.default
