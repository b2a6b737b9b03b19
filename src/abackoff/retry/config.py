r"""Configuration dataclasses for retry behavior.

This module provides the frozen configuration a ``BackoffStrategy``
runs with, and the ``PossibleMatch`` objects the retry decider uses to
match exceptions and results.
"""

from __future__ import annotations

__all__ = ["MISSING", "PossibleMatch", "StrategyConfig", "is_callback", "resolve_default"]

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from abackoff.core.config import DEFAULT_UNIT
from abackoff.core.validation import validate_unit_type

if TYPE_CHECKING:
    from abackoff.algorithms.base import BaseBackoffAlgorithm
    from abackoff.jitter.base import BaseJitter


class _MissingType(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


# Marks a default value that was not given, since None is a valid default
MISSING = _MissingType.MISSING


def is_callback(value: Any) -> bool:
    """Indicate whether a value is a function to call rather than a
    value to use as is.

    Classes are callable but count as plain values.

    Example:
        ```pycon
        >>> from abackoff.retry.config import is_callback
        >>> is_callback(len), is_callback(dict), is_callback(3)
        (True, False, False)

        ```
    """
    return callable(value) and not isinstance(value, type)


def resolve_default(default: Any) -> Any:
    """Return a default value, calling it first when it is a function.

    Classes are returned as is.

    Example:
        ```pycon
        >>> from abackoff.retry.config import resolve_default
        >>> resolve_default(5)
        5
        >>> resolve_default(lambda: "computed")
        'computed'
        >>> resolve_default(list)
        <class 'list'>

        ```
    """
    return default() if is_callback(default) else default


@dataclass(frozen=True)
class StrategyConfig:
    """Configuration of a backoff strategy.

    A strategy replaces its configuration each time a setter is called,
    and keeps the instance it holds when it starts as the snapshot used
    for the rest of the run.

    Attributes:
        algorithm: The algorithm calculating the base delays.
        jitter: Optional jitter applied to the base delays.
        max_attempts: The maximum number of attempts, or None for no
            limit. Never negative.
        max_delay: Optional upper bound applied to every delay.
        unit: The unit the delays are expressed in.
        runs_at_start_of_loop: Whether ``step()`` is called before each
            attempt (instead of after).
        immediate_first_retry: Whether a ``0`` delay is inserted before
            the first calculated delay.
        delays_enabled: When False, every delay is ``0``.
        retries_enabled: When False, only the first attempt is made.

    Raises:
        BackoffInitialisationError: If ``unit`` is not supported.
    """

    algorithm: BaseBackoffAlgorithm
    jitter: BaseJitter | None = None
    max_attempts: int | None = None
    max_delay: float | None = None
    unit: str = DEFAULT_UNIT
    runs_at_start_of_loop: bool = False
    immediate_first_retry: bool = False
    delays_enabled: bool = True
    retries_enabled: bool = True

    def __post_init__(self) -> None:
        validate_unit_type(self.unit)


@dataclass(frozen=True)
class PossibleMatch:
    """A value an exception or a result is matched against.

    Attributes:
        value: What to match. ``True`` matches every exception. An
            exception class matches its instances. A callable is
            called with the exception (or result) and the current
            attempt log. Any other value is compared to the result.
        default: The value returned when this match ends the run, or
            ``MISSING``.
        strict: When comparing results, whether the types must be the
            same too.
    """

    value: Any = True
    default: Any = MISSING
    strict: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def matches_all(self) -> bool:
        return self.value is True
