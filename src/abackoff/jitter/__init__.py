r"""Jitter applied to the delays calculated by the backoff algorithms."""

from __future__ import annotations

__all__ = ["BaseJitter", "CallbackJitter", "EqualJitter", "FullJitter", "RangeJitter"]

from abackoff.jitter.base import BaseJitter
from abackoff.jitter.callback import CallbackJitter
from abackoff.jitter.full import EqualJitter, FullJitter
from abackoff.jitter.range import RangeJitter
