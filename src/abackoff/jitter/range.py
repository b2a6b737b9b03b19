r"""Range jitter."""

from __future__ import annotations

__all__ = ["RangeJitter"]

from abackoff.core.validation import validate_min_max
from abackoff.jitter.base import BaseJitter


class RangeJitter(BaseJitter):
    """Jitter picking a random delay in a caller-chosen range.

    The delay is multiplied by a random ratio in ``[min_, max_]``.
    Negative ratios are clamped to ``0``.

    Args:
        min_: The lowest ratio.
        max_: The highest ratio. May be greater than ``1``.

    Raises:
        BackoffInitialisationError: If ``min_`` is greater than ``max_``.

    Example:
        ```pycon
        >>> from abackoff.jitter import RangeJitter
        >>> 7.5 <= RangeJitter(0.75, 1.25).apply(10, 1) <= 12.5
        True

        ```
    """

    def __init__(self, min_: float, max_: float) -> None:
        validate_min_max(min_, max_)
        self.min = max(0, min_)
        self.max = max(0, max_)
