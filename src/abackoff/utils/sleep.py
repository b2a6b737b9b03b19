r"""Blocking sleep used between attempts.

This module provides the function that actually waits for a calculated
delay. The remaining time is measured from an anchor taken before the
delay was calculated, so the overhead of the calculation is absorbed
into the wait.
"""

from __future__ import annotations

__all__ = ["perform_sleep"]

import logging
import time

logger: logging.Logger = logging.getLogger(__name__)


def perform_sleep(start_ns: int, microseconds: float) -> None:
    """Sleep until ``microseconds`` have passed since ``start_ns``.

    Args:
        start_ns: The anchor, as returned by ``time.monotonic_ns()``.
        microseconds: The delay to wait, in microseconds. Nothing
            happens when the delay has already elapsed, including when
            the delay is ``0``.

    Example:
        ```pycon
        >>> import time
        >>> from abackoff.utils.sleep import perform_sleep
        >>> perform_sleep(time.monotonic_ns(), 0)

        ```
    """
    until_ns = start_ns + int(microseconds * 1_000)
    remaining_ns = until_ns - time.monotonic_ns()
    if remaining_ns <= 0:
        return

    logger.debug(f"Sleeping {remaining_ns / 1_000_000_000:.6f}s")
    time.sleep(remaining_ns / 1_000_000_000)
