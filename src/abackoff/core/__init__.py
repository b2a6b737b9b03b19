r"""Core constants and validation shared by the other abackoff
packages."""

from __future__ import annotations

__all__ = [
    "ALL_UNIT_TYPES",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_UNIT",
    "UNIT_MICROSECONDS",
    "UNIT_MILLISECONDS",
    "UNIT_SECONDS",
    "validate_min_max",
    "validate_unit_type",
]

from abackoff.core.config import (
    ALL_UNIT_TYPES,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_UNIT,
    UNIT_MICROSECONDS,
    UNIT_MILLISECONDS,
    UNIT_SECONDS,
)
from abackoff.core.validation import validate_min_max, validate_unit_type
