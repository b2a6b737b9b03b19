r"""Unit types and default values used across abackoff.

This module provides the constants describing the supported time units
and the defaults applied by the backoff algorithms, the jitter
implementations and the fluent ``Backoff`` factories.
"""

from __future__ import annotations

__all__ = [
    "ALL_UNIT_TYPES",
    "DEFAULT_DECORRELATED_MULTIPLIER",
    "DEFAULT_EXPONENTIAL_FACTOR",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_POLYNOMIAL_POWER",
    "DEFAULT_RAND_DECIMAL_PLACES",
    "DEFAULT_UNIT",
    "EQUAL_JITTER_MIN",
    "UNIT_MICROSECONDS",
    "UNIT_MILLISECONDS",
    "UNIT_SECONDS",
]

UNIT_SECONDS = "seconds"
UNIT_MILLISECONDS = "milliseconds"
UNIT_MICROSECONDS = "microseconds"

ALL_UNIT_TYPES = (UNIT_SECONDS, UNIT_MILLISECONDS, UNIT_MICROSECONDS)

# Unit used when none is given
DEFAULT_UNIT = UNIT_SECONDS

# Maximum number of attempts applied by the fluent factories
# None means unlimited
DEFAULT_MAX_ATTEMPTS: int | None = None

# Exponential backoff: delay = initial * factor ** (retry - 1)
DEFAULT_EXPONENTIAL_FACTOR = 2

# Polynomial backoff: delay = initial * retry ** power
DEFAULT_POLYNOMIAL_POWER = 2

# Decorrelated backoff: delay is picked in [base, prev * multiplier]
DEFAULT_DECORRELATED_MULTIPLIER = 3

# Precision used when picking random floats
DEFAULT_RAND_DECIMAL_PLACES = 10

# Equal jitter keeps at least half of the delay
EQUAL_JITTER_MIN = 0.5
