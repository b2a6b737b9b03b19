r"""Backoff algorithms that do not wait."""

from __future__ import annotations

__all__ = ["NoBackoffAlgorithm", "NoopBackoffAlgorithm"]

from abackoff.algorithms.base import BaseBackoffAlgorithm


class NoopBackoffAlgorithm(BaseBackoffAlgorithm):
    """Backoff algorithm that retries straight away.

    Every delay is ``0``, so retries happen without waiting.
    """

    jitter_may_be_applied = False

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        return 0


class NoBackoffAlgorithm(BaseBackoffAlgorithm):
    """Backoff algorithm that never retries.

    The operation is attempted once.
    """

    jitter_may_be_applied = False

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:  # noqa: ARG002
        return None
