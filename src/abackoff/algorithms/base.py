r"""Abstract base class for backoff algorithms."""

from __future__ import annotations

__all__ = ["BaseBackoffAlgorithm"]

from abc import ABC, abstractmethod


class BaseBackoffAlgorithm(ABC):
    """Abstract base class for backoff algorithms.

    A backoff algorithm determines how long to wait before a given retry.
    It is a pure function of the retry number (and, for some algorithms,
    of the previous delay). Returning ``None`` signals that no more
    retries should be made.

    Subclasses that must not be perturbed by jitter (because they are
    already random) set ``jitter_may_be_applied`` to ``False``.
    """

    jitter_may_be_applied: bool = True

    @abstractmethod
    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:
        """Calculate the base delay for a given retry.

        Args:
            retry_number: The retry number (1-indexed). For example,
                ``retry_number=1`` is the delay before the first retry.
            prev_delay: The base delay calculated for the previous
                retry, or ``None`` for the first retry.

        Returns:
            The delay before the retry, or ``None`` to stop retrying.
        """

    def generate_test_sequence(self, max_steps: int) -> list[float | None]:
        """Generate the first base delays of this algorithm.

        Args:
            max_steps: The number of delays to generate.

        Returns:
            The delays for retries ``1..max_steps``, each one calculated
            from the previous one.

        Example:
            ```pycon
            >>> from abackoff.algorithms import LinearBackoffAlgorithm
            >>> LinearBackoffAlgorithm(5).generate_test_sequence(4)
            [5, 10, 15, 20]

            ```
        """
        delays = []
        prev_delay = None
        for retry_number in range(1, max_steps + 1):
            prev_delay = self.calculate(retry_number, prev_delay)
            delays.append(prev_delay)
        return delays
