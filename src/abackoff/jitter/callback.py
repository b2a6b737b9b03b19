r"""Callback jitter."""

from __future__ import annotations

__all__ = ["CallbackJitter"]

from typing import TYPE_CHECKING

from abackoff.jitter.base import BaseJitter

if TYPE_CHECKING:
    from collections.abc import Callable


class CallbackJitter(BaseJitter):
    """Jitter delegating to a user function.

    The callback is called as ``callback(delay, retry_number)``. When it
    returns something other than a number, ``1`` is used.

    Args:
        callback: The function applying the jitter.

    Example:
        ```pycon
        >>> from abackoff.jitter import CallbackJitter
        >>> CallbackJitter(lambda delay, retry: delay / 2).apply(10, 1)
        5.0
        >>> CallbackJitter(lambda delay, retry: "abc").apply(10, 1)
        1

        ```
    """

    def __init__(self, callback: Callable[[float, int], float]) -> None:
        self.callback = callback

    def apply(self, delay: float, retry_number: int) -> float:
        result = self.callback(delay, retry_number)
        if isinstance(result, bool) or not isinstance(result, (int, float)):
            return 1
        return result
