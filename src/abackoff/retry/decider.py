r"""Retry decision logic for exceptions and results.

This module provides the RetryDecider class that holds the exception
matchers and the result predicates of a runner, and picks the one that
applies to the outcome of an attempt.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

import logging
from typing import TYPE_CHECKING, Any, Literal

from abackoff.retry.config import MISSING, PossibleMatch, is_callback

if TYPE_CHECKING:
    from collections.abc import Iterable

    from abackoff.attempt_log import AttemptLog

logger: logging.Logger = logging.getLogger(__name__)


def _flatten(values: Iterable[Any]) -> list[Any]:
    flat = []
    for value in values:
        if isinstance(value, (list, tuple, set, frozenset)):
            flat.extend(_flatten(value))
        else:
            flat.append(value)
    return flat


def _is_exception_type(value: Any) -> bool:
    return isinstance(value, type) and issubclass(value, BaseException)


class RetryDecider:
    """Decides whether an exception or a result should trigger a retry.

    Until configured, every exception is retried and every result is
    accepted.

    Example:
        ```pycon
        >>> from abackoff.retry.decider import RetryDecider
        >>> decider = RetryDecider()
        >>> decider.add_exception_matchers(ValueError, default="fallback")
        >>> decider.pick_matching_exception(ValueError("boom"), None).default
        'fallback'
        >>> decider.pick_matching_exception(KeyError("boom"), None) is None
        True
        >>> decider.add_retry_when(None)
        >>> decider.check_result(None, None)
        (False, PossibleMatch(value=None, default=MISSING, strict=False))
        >>> decider.check_result(42, None)
        (True, None)

        ```
    """

    def __init__(self) -> None:
        self.exception_matchers: list[PossibleMatch] | Literal[False] = []
        self.exception_default: Any = MISSING
        self.retry_when: list[PossibleMatch] = []
        self.retry_until: list[PossibleMatch] = []

    ##########################
    #       Exceptions       #
    ##########################

    def add_exception_matchers(self, *exceptions: Any, default: Any = MISSING) -> None:
        """Add exceptions that trigger a retry.

        Args:
            *exceptions: Exception classes, callables called as
                ``matcher(exception, log)``, or lists of them. When none
                is given, every exception matches.
            default: The value returned when one of these exceptions
                ends the run.
        """
        values = _flatten(exceptions) or [True]
        matchers = self.exception_matchers if self.exception_matchers is not False else []
        self.exception_matchers = matchers + [PossibleMatch(value, default) for value in values]
        self.exception_default = MISSING

    def disable_exception_matching(self, default: Any = MISSING) -> None:
        """Stop retrying exceptions.

        Args:
            default: The value returned when an exception ends the run.
        """
        self.exception_matchers = False
        self.exception_default = default

    def pick_matching_exception(
        self, exception: BaseException, log: AttemptLog | None
    ) -> PossibleMatch | None:
        """Pick the matcher that applies to an exception.

        When several matchers apply, the first one in this order is
        used: a specific matcher with a default, a catch-all with a
        default, a specific matcher without a default, a catch-all
        without a default.

        Returns:
            The matcher, or None when the exception must not be
            retried.
        """
        if self.exception_matchers is False:
            return None
        if not self.exception_matchers:
            return PossibleMatch()

        for has_default in (True, False):
            for matches_all in (False, True):
                for matcher in self.exception_matchers:
                    if matcher.has_default != has_default or matcher.matches_all != matches_all:
                        continue
                    if matches_all or self._exception_matches(matcher.value, exception, log):
                        return matcher
        return None

    @staticmethod
    def _exception_matches(value: Any, exception: BaseException, log: AttemptLog | None) -> bool:
        if _is_exception_type(value):
            return isinstance(exception, value)
        if is_callback(value):
            return bool(value(exception, log))
        return False

    ##########################
    #        Results         #
    ##########################

    def add_retry_when(self, match: Any, strict: bool = False, default: Any = MISSING) -> None:
        """Retry when the result matches, forgetting the ``retry_until``
        predicates."""
        self.retry_when.append(PossibleMatch(match, default, strict))
        self.retry_until = []

    def add_retry_until(self, match: Any, strict: bool = False) -> None:
        """Retry until the result matches, forgetting the ``retry_when``
        predicates."""
        self.retry_when = []
        self.retry_until.append(PossibleMatch(match, strict=strict))

    def check_result(self, result: Any, log: AttemptLog | None) -> tuple[bool, PossibleMatch | None]:
        """Determine whether a result is valid.

        Args:
            result: The value returned by the operation.
            log: The log of the attempt that returned it.

        Returns:
            Tuple of (is_valid, retry_when predicate that matched).
        """
        if self.retry_when:
            match = self._pick_matching_result(result, self.retry_when, log)
            if match is not None:
                logger.debug(f"The result {result!r} is invalid")
                return (False, match)
        if self.retry_until:
            if self._pick_matching_result(result, self.retry_until, log) is None:
                logger.debug(f"The result {result!r} is not the expected one")
                return (False, None)
        return (True, None)

    @staticmethod
    def _pick_matching_result(
        result: Any, matches: list[PossibleMatch], log: AttemptLog | None
    ) -> PossibleMatch | None:
        for possible_match in matches:
            value = possible_match.value
            if is_callback(value):
                if value(result, log):
                    return possible_match
            elif possible_match.strict:
                if type(result) is type(value) and result == value:
                    return possible_match
            elif result == value:
                return possible_match
        return None
