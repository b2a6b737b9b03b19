r"""Utility functions for unit conversion, randomness, sleeping and
structured logging."""

from __future__ import annotations

__all__ = [
    "convert_timespan",
    "convert_timespan_as_number",
    "perform_sleep",
    "rand_float",
    "time_diff",
]

from abackoff.utils.random import rand_float
from abackoff.utils.sleep import perform_sleep
from abackoff.utils.units import convert_timespan, convert_timespan_as_number, time_diff
