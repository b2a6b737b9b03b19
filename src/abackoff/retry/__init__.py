r"""Retry package implementing class-based composition pattern.

This package provides the retry machinery: a strategy computing the
delays, a decider matching exceptions and results, a callback manager,
and the runner composing them.

Public API:
    - StrategyConfig: Frozen configuration of a strategy
    - DelayCalculator: Cached, bounded and jittered delays
    - DelayTracker: Records delays instead of sleeping
    - BackoffStrategy: State machine driving a retry loop
    - RetryDecider: Logic for deciding whether to retry
    - CallbackManager: Manager for callback invocations
    - BackoffRunner: Runs an operation through a strategy
"""

from __future__ import annotations

__all__ = [
    "MISSING",
    "BackoffRunner",
    "BackoffStrategy",
    "CallbackManager",
    "DelayCalculator",
    "DelayTracker",
    "PossibleMatch",
    "RetryDecider",
    "StrategyConfig",
]

from abackoff.retry.calculator import DelayCalculator
from abackoff.retry.config import MISSING, PossibleMatch, StrategyConfig
from abackoff.retry.decider import RetryDecider
from abackoff.retry.manager import CallbackManager
from abackoff.retry.runner import BackoffRunner
from abackoff.retry.strategy import BackoffStrategy
from abackoff.retry.tracker import DelayTracker
