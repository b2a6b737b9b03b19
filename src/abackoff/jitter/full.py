r"""Full and equal jitter."""

from __future__ import annotations

__all__ = ["EqualJitter", "FullJitter"]

from abackoff.core.config import EQUAL_JITTER_MIN
from abackoff.jitter.base import BaseJitter


class FullJitter(BaseJitter):
    """Jitter picking a random delay between ``0`` and the delay.

    Example:
        ```pycon
        >>> from abackoff.jitter import FullJitter
        >>> 0 <= FullJitter().apply(10, 1) <= 10
        True

        ```
    """

    min = 0
    max = 1


class EqualJitter(BaseJitter):
    """Jitter keeping at least half of the delay.

    Example:
        ```pycon
        >>> from abackoff.jitter import EqualJitter
        >>> 5 <= EqualJitter().apply(10, 1) <= 10
        True

        ```
    """

    min = EQUAL_JITTER_MIN
    max = 1
