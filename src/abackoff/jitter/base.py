r"""Abstract base class for jitter."""

from __future__ import annotations

__all__ = ["BaseJitter"]

from abc import ABC

from abackoff.utils.random import rand_float


class BaseJitter(ABC):
    """Base class for jitter.

    Jitter perturbs a delay to avoid many clients retrying in lockstep
    (the thundering herd problem). The default implementation picks a
    random value in ``[min * delay, max * delay]``; subclasses set the
    ``min`` and ``max`` ratios or override ``apply``.
    """

    min: float = 0
    max: float = 1

    def apply(self, delay: float, retry_number: int) -> float:  # noqa: ARG002
        """Apply jitter to a delay.

        Args:
            delay: The delay to perturb. Always positive.
            retry_number: The retry number (1-indexed) the delay is for.

        Returns:
            The perturbed delay.
        """
        jittered = rand_float(self.min * delay, self.max * delay)
        return 0 if jittered is None else jittered
