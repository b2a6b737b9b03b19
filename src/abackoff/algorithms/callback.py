r"""Callback backoff algorithm."""

from __future__ import annotations

__all__ = ["CallbackBackoffAlgorithm"]

from typing import TYPE_CHECKING

from abackoff.algorithms.base import BaseBackoffAlgorithm
from abackoff.exceptions import BackoffRuntimeError

if TYPE_CHECKING:
    from collections.abc import Callable


class CallbackBackoffAlgorithm(BaseBackoffAlgorithm):
    """Backoff algorithm delegating to a user function.

    The callback is called as ``callback(retry_number, prev_delay)`` and
    must return a number, or ``None`` to stop retrying.

    Args:
        callback: The function calculating the delays.

    Example:
        ```pycon
        >>> from abackoff.algorithms import CallbackBackoffAlgorithm
        >>> algorithm = CallbackBackoffAlgorithm(lambda retry, prev: retry * 10)
        >>> algorithm.generate_test_sequence(3)
        [10, 20, 30]

        ```
    """

    def __init__(self, callback: Callable[[int, float | None], float | None]) -> None:
        self.callback = callback

    def calculate(self, retry_number: int, prev_delay: float | None = None) -> float | None:
        """Call the callback to calculate the delay.

        Raises:
            BackoffRuntimeError: If the callback returns something other
                than a number or ``None``.
        """
        delay = self.callback(retry_number, prev_delay)
        if delay is not None and (isinstance(delay, bool) or not isinstance(delay, (int, float))):
            raise BackoffRuntimeError.invalid_callback_result(delay)
        return delay
