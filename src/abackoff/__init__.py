r"""abackoff - Backoff delays and retry loops.

This package computes the delays to wait between the attempts of a
failing operation, and runs the retry loop around it. It simplifies
handling transient failures without hand-rolling delay math, jitter or
bookkeeping.

Key Features:
    - Backoff algorithms: fixed, linear, exponential, polynomial, Fibonacci,
      decorrelated, random, sequence and custom callbacks
    - Full, equal, range and custom jitter
    - Maximum number of attempts and maximum delay
    - Delays in seconds, milliseconds or microseconds
    - Retries triggered by exceptions or by invalid results, with defaults
    - Callbacks for observability (exception, invalid result, success,
      failure, finally)
    - Per-attempt logs with working time and delay metrics
    - Strategy usable on its own in hand-written loops

Example:
    ```pycon
    >>> from abackoff import Backoff
    >>> results = iter([None, None, 42])
    >>> Backoff.noop().max_attempts(5).retry_when(None).attempt(lambda: next(results))
    42
    >>> Backoff.exponential(1).no_jitter().max_attempts(5).simulate(1, 5)
    {1: 1, 2: 2, 3: 4, 4: 8, 5: None}

    ```
"""

from __future__ import annotations

__all__ = [
    "AttemptLog",
    "Backoff",
    "BackoffError",
    "BackoffInitialisationError",
    "BackoffRunner",
    "BackoffRuntimeError",
    "BackoffStrategy",
    "DelayTracker",
    "UNIT_MICROSECONDS",
    "UNIT_MILLISECONDS",
    "UNIT_SECONDS",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from abackoff.attempt_log import AttemptLog
from abackoff.backoff import Backoff
from abackoff.core.config import UNIT_MICROSECONDS, UNIT_MILLISECONDS, UNIT_SECONDS
from abackoff.exceptions import BackoffError, BackoffInitialisationError, BackoffRuntimeError
from abackoff.retry.runner import BackoffRunner
from abackoff.retry.strategy import BackoffStrategy
from abackoff.retry.tracker import DelayTracker

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
